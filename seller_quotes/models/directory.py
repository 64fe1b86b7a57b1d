from typing import List, Optional
from pydantic import BaseModel


class NamedEntity(BaseModel):
    """An organization or cost center as returned by the directory service."""
    id: Optional[str] = None
    name: Optional[str] = None


class ResolvedNames(BaseModel):
    organization_name: Optional[str] = None
    cost_center_name: Optional[str] = None

    @property
    def complete(self) -> bool:
        return bool(self.organization_name) and bool(self.cost_center_name)


class Role(BaseModel):
    id: str
    slug: str
    name: Optional[str] = None


class RoleUser(BaseModel):
    email: str
    name: Optional[str] = None
    org_id: Optional[str] = None
    cost_id: Optional[str] = None


class RoleUserPage(BaseModel):
    data: List[RoleUser] = []
    total: int = 0
