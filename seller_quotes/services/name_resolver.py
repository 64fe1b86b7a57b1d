import asyncio
from typing import Optional

from seller_quotes.core.logger import get_logger
from seller_quotes.models.directory import ResolvedNames

logger = get_logger(__name__)


class NameResolver:
    """Resolves organization and cost center ids to display names.

    `resolve_lenient` degrades each failed lookup to None independently and is
    used for quote enrichment. `resolve_strict` collapses any failure into an
    all-None result and is used for notifications, which must not go out with
    missing names.
    """

    def __init__(self, directory):
        self.directory = directory

    async def _lenient_lookup(self, lookup, entity_id: Optional[str], tag: str) -> Optional[str]:
        if not entity_id:
            return None
        try:
            return await lookup(entity_id)
        except Exception as e:
            logger.warning(f"{tag} id={entity_id} error={e}")
            return None

    async def resolve_lenient(self, organization_id: Optional[str], cost_center_id: Optional[str]) -> ResolvedNames:
        organization_name, cost_center_name = await asyncio.gather(
            self._lenient_lookup(
                self.directory.get_organization_name, organization_id, "organization-lookup-error"
            ),
            self._lenient_lookup(
                self.directory.get_cost_center_name, cost_center_id, "cost-center-lookup-error"
            ),
        )
        return ResolvedNames(organization_name=organization_name, cost_center_name=cost_center_name)

    async def resolve_strict(self, organization_id: str, cost_center_id: str) -> ResolvedNames:
        results = await asyncio.gather(
            self.directory.get_organization_name(organization_id),
            self.directory.get_cost_center_name(cost_center_id),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, Exception)]
        if errors:
            logger.error(
                f"notification-names-error organization={organization_id} "
                f"costCenter={cost_center_id} error={errors[0]}"
            )
            return ResolvedNames()

        organization_name, cost_center_name = results
        return ResolvedNames(organization_name=organization_name, cost_center_name=cost_center_name)
