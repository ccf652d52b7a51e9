# =============================================================================
# core/fields.py  -  Custom field tools
# =============================================================================
#
# THE UPSERT (affinity_update_field_value):
#   Affinity has separate "create value" and "update value" endpoints, and the
#   caller usually doesn't know which one applies.  So the tool finds out:
#
#     1. GET /field-values for the record (by list entry if given, otherwise
#        by entity).
#     2. If one of the returned values has the requested field_id:
#          PUT /field-values/{that value's id}         -> "updated"
#     3. Otherwise:
#          POST /field-values                          -> "created"
#
#   If step 1 itself fails, we still go ahead with step 3.  Attempting the
#   create is more useful than reporting a lookup error; if the create fails
#   too, that error reaches the caller.
#
# LOOKUP KEY:
#   Without a list entry, the lookup filters by "<entity_type>_id".
#   entity_type defaults to "organization".
# =============================================================================

import logging
from typing import Any, Optional

from core.affinity_client import AffinityClient
from core.errors import RemoteCallFailed
from core.models import (
    READ_ONLY,
    WRITE,
    GetFieldValuesArgs,
    NoArgs,
    OperationDescriptor,
    Reply,
    UpdateFieldValueArgs,
)


logger = logging.getLogger(__name__)


async def get_all_fields(client: AffinityClient, args: NoArgs) -> Reply:
    return Reply.json(await client.get("/fields"))


async def get_field_values(client: AffinityClient, args: GetFieldValuesArgs) -> Reply:
    # Only the IDs the caller supplied become query parameters.
    return Reply.json(await client.get("/field-values", params=args.payload()))


def lookup_params(args: UpdateFieldValueArgs) -> dict[str, int]:
    if args.list_entry_id is not None:
        return {"list_entry_id": args.list_entry_id}
    return {f"{args.entity_type}_id": args.entity_id}


def find_existing(values: Any, field_id: int) -> Optional[dict]:
    """The first value in a /field-values response belonging to field_id."""
    if not isinstance(values, list):
        return None
    for value in values:
        if isinstance(value, dict) and value.get("field_id") == field_id:
            return value
    return None


async def update_field_value(client: AffinityClient, args: UpdateFieldValueArgs) -> Reply:
    try:
        values = await client.get("/field-values", params=lookup_params(args))
    except RemoteCallFailed as exc:
        logger.warning("Field value lookup failed, creating instead: %s", exc.detail)
        values = None

    existing = find_existing(values, args.field_id)
    if existing is not None:
        await client.put(f"/field-values/{existing['id']}", {"value": args.value})
        return Reply.text(f"Field value updated successfully (ID: {existing['id']})")

    body = {"field_id": args.field_id, "entity_id": args.entity_id, "value": args.value}
    if args.list_entry_id is not None:
        body["list_entry_id"] = args.list_entry_id

    created = await client.post_record("/field-values", body, "id")
    return Reply.text(f"Field value created successfully (ID: {created['id']})")


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_get_all_fields",
        title="Get All Fields",
        description="Get all custom fields in Affinity",
        input_model=NoArgs,
        handler=get_all_fields,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_get_field_values",
        title="Get Field Values",
        description=(
            "Get all field values for a person, organization, or opportunity. "
            "Provide exactly one of organization_id, person_id, or opportunity_id. "
            "Optionally include list_entry_id to get values for a specific list entry."
        ),
        input_model=GetFieldValuesArgs,
        handler=get_field_values,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_update_field_value",
        title="Update Field Value",
        description=(
            "Create or update a custom field value for a person, organization, or "
            "opportunity. For list-specific fields, you must provide list_entry_id "
            "(the ID of the list entry, not the entity ID). Set entity_type when "
            "entity_id is a person or opportunity. The tool automatically detects "
            "whether to create a new value or update an existing one."
        ),
        input_model=UpdateFieldValueArgs,
        handler=update_field_value,
        annotations=WRITE,
    ),
]
