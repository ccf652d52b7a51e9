# =============================================================================
# core/notes.py  -  Note tools
# =============================================================================
#
# A note hangs off exactly one parent.  The caller names it with
# (parent_type, parent_id); Affinity wants it as a one-element ID list under
# the matching key, e.g. parent_type="person" -> {"person_ids": [parent_id]}.
# =============================================================================

from core.affinity_client import AffinityClient
from core.models import (
    READ_ONLY,
    WRITE,
    CreateNoteArgs,
    GetNotesArgs,
    OperationDescriptor,
    Reply,
)


_PARENT_KEYS = {
    "person": "person_ids",
    "organization": "organization_ids",
    "opportunity": "opportunity_ids",
}


def note_body(args: CreateNoteArgs) -> dict:
    """Outbound body for POST /notes."""
    return {
        "content": args.content,
        _PARENT_KEYS[args.parent_type]: [args.parent_id],
    }


async def create_note(client: AffinityClient, args: CreateNoteArgs) -> Reply:
    note = await client.post_record("/notes", note_body(args), "id")
    return Reply.text(f"Note created successfully (ID: {note['id']})")


async def get_notes(client: AffinityClient, args: GetNotesArgs) -> Reply:
    notes = await client.get(
        "/notes", params={"parent_id": args.parent_id, "parent_type": args.parent_type}
    )
    return Reply.json(notes)


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_create_note",
        title="Create Note",
        description="Add a note to a person, organization, or opportunity",
        input_model=CreateNoteArgs,
        handler=create_note,
        annotations=WRITE,
    ),
    OperationDescriptor(
        name="affinity_get_notes",
        title="Get Notes",
        description="Get all notes for a person, organization, or opportunity",
        input_model=GetNotesArgs,
        handler=get_notes,
        annotations=READ_ONLY,
    ),
]
