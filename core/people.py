# =============================================================================
# core/people.py  -  Person tools
# =============================================================================
#
# Each handler is one HTTP call.  Reads pass Affinity's JSON straight through;
# writes answer with a one-line confirmation that names the record and its ID.
# =============================================================================

from core.affinity_client import AffinityClient
from core.models import (
    READ_ONLY,
    WRITE,
    CreatePersonArgs,
    IdArgs,
    OperationDescriptor,
    Reply,
    SearchArgs,
    UpdatePersonArgs,
)


async def search_people(client: AffinityClient, args: SearchArgs) -> Reply:
    return Reply.json(await client.get("/persons", params=args.payload()))


async def get_person(client: AffinityClient, args: IdArgs) -> Reply:
    return Reply.json(await client.get(f"/persons/{args.id}"))


async def create_person(client: AffinityClient, args: CreatePersonArgs) -> Reply:
    person = await client.post_record(
        "/persons", args.payload(), "id", "first_name", "last_name"
    )
    return Reply.text(
        f"Person created: {person['first_name']} {person['last_name']} (ID: {person['id']})"
    )


async def update_person(client: AffinityClient, args: UpdatePersonArgs) -> Reply:
    person = await client.put_record(
        f"/persons/{args.person_id}", args.payload("person_id"), "first_name", "last_name"
    )
    return Reply.text(f"Person updated: {person['first_name']} {person['last_name']}")


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_search_people",
        title="Search People",
        description="Search for people in Affinity CRM by name or email",
        input_model=SearchArgs,
        handler=search_people,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_get_person",
        title="Get Person by ID",
        description="Get detailed information about a specific person",
        input_model=IdArgs,
        handler=get_person,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_create_person",
        title="Create Person",
        description="Create a new person in Affinity CRM",
        input_model=CreatePersonArgs,
        handler=create_person,
        annotations=WRITE,
    ),
    OperationDescriptor(
        name="affinity_update_person",
        title="Update Person",
        description="Update an existing person's information",
        input_model=UpdatePersonArgs,
        handler=update_person,
        annotations=WRITE,
    ),
]
