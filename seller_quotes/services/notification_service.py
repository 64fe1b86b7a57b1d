import asyncio
from typing import List, Optional

from seller_quotes.core.logger import get_logger
from seller_quotes.models.notification import (
    QUOTE_CREATED_TEMPLATE,
    NotificationOutcome,
    NotificationPayload,
    QuoteCreatedEvent,
    QuoteUpdate,
    QuoteUpdatedEvent,
)

logger = get_logger(__name__)


def normalize_root_path(root_path: Optional[str]) -> str:
    """Root path must start with `/`; a bare `/` collapses to an empty prefix."""
    root_path = root_path or ""
    if root_path and not root_path.startswith("/"):
        root_path = f"/{root_path}"
    if root_path == "/":
        root_path = ""
    return root_path


def build_quote_link(host: str, root_path: Optional[str], quote_id: str) -> str:
    return f"https://{host}{normalize_root_path(root_path)}/b2b-quotes/{quote_id}"


class QuoteNotifier:
    """
    Mail notifications for quote lifecycle events.

    Created events notify the organization's sales admins (first page of 25
    users only). Updated events notify the recipients supplied by the caller.
    Both abandon without sending when a display name cannot be resolved.
    """

    def __init__(
        self,
        mail,
        permissions,
        resolver,
        metrics,
        account: str,
        host: str,
        root_path: Optional[str] = "/",
        sales_admin_role: str = "sales-admin",
    ):
        self.mail = mail
        self.permissions = permissions
        self.resolver = resolver
        self.metrics = metrics
        self.account = account
        self.host = host
        self.root_path = root_path
        self.sales_admin_role = sales_admin_role

    async def get_role_users(self, role_slug: str, organization_id: Optional[str] = None) -> List[str]:
        roles = await self.permissions.list_roles()
        role = next((r for r in roles if r.slug == role_slug), None)
        if role is None:
            logger.info(f"Role {role_slug} not found, no recipients")
            return []

        page = await self.permissions.list_users_paginated(role.id, organization_id)
        return [user.email for user in page.data]

    def build_payload(
        self,
        quote_id: str,
        name: str,
        organization_name: str,
        cost_center_name: str,
        last_update: QuoteUpdate,
        order_id: Optional[str] = None,
    ) -> NotificationPayload:
        return NotificationPayload(
            id=quote_id,
            name=name,
            organization=organization_name,
            cost_center=cost_center_name,
            link=build_quote_link(self.host, self.root_path, quote_id),
            last_update=last_update,
            order_id=order_id,
        )

    async def send_to_user(self, user: str, quote: dict, template_name: str) -> bool:
        try:
            await self.mail.send_mail(json_data={"message": {"to": user}, "quote": quote}, template_name=template_name)
        except Exception as e:
            logger.error(f"send-notification-error to={user} template={template_name} error={e}")
            return False

        self.metrics.record_send(quote=quote, account=self.account, recipient=user, template_name=template_name)
        return True

    async def send_to_users(self, payload: NotificationPayload, users: List[str], template_name: str) -> NotificationOutcome:
        try:
            quote = payload.model_dump(by_alias=True, exclude_none=True)
            sends = [self.send_to_user(user, quote, template_name) for user in users]
        except Exception as e:
            logger.error(f"send-notifications-error template={template_name} error={e}")
            return NotificationOutcome.failed(e)

        results = await asyncio.gather(*sends)
        sent = sum(1 for ok in results if ok)
        logger.info(f"Quote {payload.id} notification {template_name}: {sent}/{len(users)} sent")
        return NotificationOutcome.sent(sent)

    async def quote_created(self, event: QuoteCreatedEvent) -> NotificationOutcome:
        users: List[str] = []
        try:
            users = await self.get_role_users(self.sales_admin_role, event.organization)
        except Exception as e:
            logger.error(f"quote-created-users-error organization={event.organization} error={e}")

        names = await self.resolver.resolve_strict(event.organization, event.cost_center)

        if not names.complete:
            logger.error(f"quote-created-abandoned quote={event.id} reason=missing-names")
            return NotificationOutcome.abandoned("missing-names")
        if not users:
            logger.warning(f"quote-created-abandoned quote={event.id} reason=no-recipients")
            return NotificationOutcome.abandoned("no-recipients")

        payload = self.build_payload(
            event.id, event.name, names.organization_name, names.cost_center_name, event.last_update
        )
        return await self.send_to_users(payload, users, QUOTE_CREATED_TEMPLATE)

    async def quote_updated(self, event: QuoteUpdatedEvent) -> NotificationOutcome:
        names = await self.resolver.resolve_strict(event.organization, event.cost_center)

        if not names.complete:
            logger.error(f"quote-updated-abandoned quote={event.id} reason=missing-names")
            return NotificationOutcome.abandoned("missing-names")

        payload = self.build_payload(
            event.id,
            event.name,
            names.organization_name,
            names.cost_center_name,
            event.last_update,
            order_id=event.order_id or "",
        )
        return await self.send_to_users(payload, event.users, event.template_name)
