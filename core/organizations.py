# =============================================================================
# core/organizations.py  -  Organization tools
# =============================================================================

from core.affinity_client import AffinityClient
from core.models import (
    READ_ONLY,
    WRITE,
    CreateOrganizationArgs,
    IdArgs,
    OperationDescriptor,
    Reply,
    SearchArgs,
    UpdateOrganizationArgs,
)


async def search_organizations(client: AffinityClient, args: SearchArgs) -> Reply:
    return Reply.json(await client.get("/organizations", params=args.payload()))


async def get_organization(client: AffinityClient, args: IdArgs) -> Reply:
    return Reply.json(await client.get(f"/organizations/{args.id}"))


async def create_organization(client: AffinityClient, args: CreateOrganizationArgs) -> Reply:
    org = await client.post_record("/organizations", args.payload(), "id", "name")
    return Reply.text(f"Organization created: {org['name']} (ID: {org['id']})")


async def update_organization(client: AffinityClient, args: UpdateOrganizationArgs) -> Reply:
    org = await client.put_record(
        f"/organizations/{args.organization_id}", args.payload("organization_id"), "name"
    )
    return Reply.text(f"Organization updated: {org['name']}")


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_search_organizations",
        title="Search Organizations",
        description="Search for organizations in Affinity CRM",
        input_model=SearchArgs,
        handler=search_organizations,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_get_organization",
        title="Get Organization by ID",
        description="Get detailed information about a specific organization",
        input_model=IdArgs,
        handler=get_organization,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_create_organization",
        title="Create Organization",
        description="Create a new organization in Affinity CRM",
        input_model=CreateOrganizationArgs,
        handler=create_organization,
        annotations=WRITE,
    ),
    OperationDescriptor(
        name="affinity_update_organization",
        title="Update Organization",
        description="Update an existing organization's information",
        input_model=UpdateOrganizationArgs,
        handler=update_organization,
        annotations=WRITE,
    ),
]
