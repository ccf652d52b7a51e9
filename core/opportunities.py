# =============================================================================
# core/opportunities.py  -  Opportunity tools
# =============================================================================

from core.affinity_client import AffinityClient
from core.models import (
    READ_ONLY,
    WRITE,
    CreateOpportunityArgs,
    IdArgs,
    OperationDescriptor,
    Reply,
    SearchOpportunitiesArgs,
)


async def search_opportunities(client: AffinityClient, args: SearchOpportunitiesArgs) -> Reply:
    return Reply.json(await client.get("/opportunities", params=args.payload()))


async def get_opportunity(client: AffinityClient, args: IdArgs) -> Reply:
    return Reply.json(await client.get(f"/opportunities/{args.id}"))


async def create_opportunity(client: AffinityClient, args: CreateOpportunityArgs) -> Reply:
    opp = await client.post_record("/opportunities", args.payload(), "id", "name")
    return Reply.text(f"Opportunity created: {opp['name']} (ID: {opp['id']})")


DESCRIPTORS = [
    OperationDescriptor(
        name="affinity_search_opportunities",
        title="Search Opportunities",
        description="Search for opportunities in Affinity CRM",
        input_model=SearchOpportunitiesArgs,
        handler=search_opportunities,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_get_opportunity",
        title="Get Opportunity by ID",
        description="Get detailed information about a specific opportunity",
        input_model=IdArgs,
        handler=get_opportunity,
        annotations=READ_ONLY,
    ),
    OperationDescriptor(
        name="affinity_create_opportunity",
        title="Create Opportunity",
        description="Create a new opportunity in Affinity CRM",
        input_model=CreateOpportunityArgs,
        handler=create_opportunity,
        annotations=WRITE,
    ),
]
