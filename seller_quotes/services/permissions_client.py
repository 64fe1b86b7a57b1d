from typing import List, Optional

from seller_quotes.core.config import settings
from seller_quotes.models.directory import Role, RoleUserPage
from seller_quotes.services.graphql_client import graphql_request

LIST_ROLES_QUERY = """
query ListRoles {
  listRoles { id name slug }
}
"""

LIST_USERS_PAGINATED_QUERY = """
query ListUsersPaginated($roleId: ID, $organizationId: ID, $page: Int, $pageSize: Int) {
  listUsersPaginated(roleId: $roleId, organizationId: $organizationId, page: $page, pageSize: $pageSize) {
    data { email name orgId costId }
    pagination { total }
  }
}
"""

USERS_PAGE_SIZE = 25


class PermissionsClient:
    """Role and role-scoped user lookups against storefront permissions."""

    def __init__(self, url: str = None):
        self.url = url or settings.STOREFRONT_PERMISSIONS_GRAPHQL_URL

    async def list_roles(self) -> List[Role]:
        data = await graphql_request(self.url, LIST_ROLES_QUERY, service="storefront-permissions")
        return [Role.model_validate(role) for role in data.get("listRoles") or []]

    async def list_users_paginated(self, role_id: str, organization_id: Optional[str] = None) -> RoleUserPage:
        """Returns only the first page of users."""
        variables = {"roleId": role_id, "page": 1, "pageSize": USERS_PAGE_SIZE}
        if organization_id:
            variables["organizationId"] = organization_id

        data = await graphql_request(
            self.url, LIST_USERS_PAGINATED_QUERY, variables, service="storefront-permissions"
        )
        result = data.get("listUsersPaginated") or {}
        users = [
            {"email": u.get("email"), "name": u.get("name"), "org_id": u.get("orgId"), "cost_id": u.get("costId")}
            for u in result.get("data") or []
            if u.get("email")
        ]
        total = (result.get("pagination") or {}).get("total") or len(users)
        return RoleUserPage(data=users, total=total)
