# =============================================================================
# core/lists.py  -  List membership tools
# =============================================================================
#
# A LIST ENTRY is the membership record linking an entity to a list.  It has
# its own ID, distinct from the entity's.  Removing from a list takes the
# list entry ID; adding takes the entity ID and returns the new entry ID.
# =============================================================================

from core.affinity_client import AffinityClient
from core.models import (
    DESTRUCTIVE,
    READ_ONLY,
    WRITE,
    AddToListArgs,
    GetListEntriesArgs,
    NoArgs,
    OperationDescriptor,
    RemoveFromListArgs,
    Reply,
)


async def list_all_lists(client: AffinityClient, args: NoArgs) -> Reply:
    return Reply.json(await client.get("/lists"))


async def get_list_entries(client: AffinityClient, args: GetListEntriesArgs) -> Reply:
    entries = await client.get(
        f"/lists/{args.list_id}/list-entries", params={"page_size": args.page_size}
    )
    return Reply.json(entries)


async def add_to_list(client: AffinityClient, args: AddToListArgs) -> Reply:
    entry = await client.post_record(
        f"/lists/{args.list_id}/list-entries", {"entity_id": args.entity_id}, "id"
    )
    return Reply.text(f"Added to list successfully (Entry ID: {entry['id']})")


async def remove_from_list(client: AffinityClient, args: RemoveFromListArgs) -> Reply:
    await client.delete(f"/list-entries/{args.list_entry_id}")
    return Reply.text("Removed from list successfully")


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_list_all_lists",
        title="List All Lists",
        description="Get all lists in your Affinity CRM",
        input_model=NoArgs,
        handler=list_all_lists,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_get_list_entries",
        title="Get List Entries",
        description="Get all entries (people/orgs/opportunities) in a specific list",
        input_model=GetListEntriesArgs,
        handler=get_list_entries,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_add_to_list",
        title="Add to List",
        description="Add a person, organization, or opportunity to a list",
        input_model=AddToListArgs,
        handler=add_to_list,
        annotations=WRITE,
    ),
    OperationDescriptor(
        name="affinity_remove_from_list",
        title="Remove from List",
        description="Remove an entry from a list",
        input_model=RemoveFromListArgs,
        handler=remove_from_list,
        annotations=DESTRUCTIVE,
    ),
]
