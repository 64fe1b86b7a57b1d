from typing import Optional

from seller_quotes.core.config import settings
from seller_quotes.models.directory import NamedEntity
from seller_quotes.services.graphql_client import graphql_request

GET_ORGANIZATION_QUERY = """
query GetOrganization($id: ID!) {
  getOrganizationById(id: $id) { id name }
}
"""

GET_COST_CENTER_QUERY = """
query GetCostCenter($id: ID!) {
  getCostCenterById(id: $id) { id name }
}
"""


class DirectoryClient:
    """Organization and cost center names from the B2B organizations service."""

    def __init__(self, url: str = None):
        self.url = url or settings.ORGANIZATIONS_GRAPHQL_URL

    async def _lookup(self, query: str, field: str, entity_id: str) -> Optional[str]:
        data = await graphql_request(self.url, query, {"id": entity_id}, service="organizations")
        entity = NamedEntity.model_validate(data.get(field) or {})
        return entity.name

    async def get_organization_name(self, organization_id: str) -> Optional[str]:
        return await self._lookup(GET_ORGANIZATION_QUERY, "getOrganizationById", organization_id)

    async def get_cost_center_name(self, cost_center_id: str) -> Optional[str]:
        return await self._lookup(GET_COST_CENTER_QUERY, "getCostCenterById", cost_center_id)
