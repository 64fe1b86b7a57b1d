import asyncio

import pytest
from conftest import FakeDirectory, FakeMail, FakePermissions
from seller_quotes.core.errors import DownstreamError
from seller_quotes.models.directory import Role
from seller_quotes.models.notification import (
    NotificationStatus,
    QuoteCreatedEvent,
    QuoteUpdatedEvent,
)
from seller_quotes.services.name_resolver import NameResolver
from seller_quotes.services.notification_service import (
    QuoteNotifier,
    build_quote_link,
    normalize_root_path,
)

LAST_UPDATE = {"email": "seller@example.com", "status": "ready", "note": "Prices revised"}


def make_notifier(directory, mail, metrics, permissions=None, root_path="/"):
    return QuoteNotifier(
        mail=mail,
        permissions=permissions or FakePermissions(),
        resolver=NameResolver(directory),
        metrics=metrics,
        account="b2bstore",
        host="shop.example.com",
        root_path=root_path,
    )


def created_event(**overrides):
    fields = {"name": "Office chairs", "id": "quote-1", "organization": "org-1",
              "costCenter": "cc-1", "lastUpdate": LAST_UPDATE}
    fields.update(overrides)
    return QuoteCreatedEvent(**fields)


def updated_event(**overrides):
    fields = {"users": ["a@example.com", "b@example.com", "c@example.com"], "name": "Office chairs",
              "id": "quote-1", "organization": "org-1", "costCenter": "cc-1", "lastUpdate": LAST_UPDATE}
    fields.update(overrides)
    return QuoteUpdatedEvent(**fields)


class TestLink:
    @pytest.mark.parametrize(
        "root_path, expected",
        [
            ("/", "https://shop.example.com/b2b-quotes/q1"),
            ("", "https://shop.example.com/b2b-quotes/q1"),
            (None, "https://shop.example.com/b2b-quotes/q1"),
            ("/br", "https://shop.example.com/br/b2b-quotes/q1"),
            ("br", "https://shop.example.com/br/b2b-quotes/q1"),
        ],
    )
    def test_root_path_normalization(self, root_path, expected):
        assert build_quote_link("shop.example.com", root_path, "q1") == expected

    def test_bare_slash_collapses(self):
        assert normalize_root_path("/") == ""


class TestQuoteUpdated:
    def test_one_send_per_recipient_with_same_payload(self, directory, mail, metrics):
        outcome = asyncio.run(make_notifier(directory, mail, metrics).quote_updated(updated_event(orderId="ord-9")))

        assert outcome.status == NotificationStatus.SENT
        assert outcome.count == 3
        assert [s["json_data"]["message"]["to"] for s in mail.sent] == [
            "a@example.com", "b@example.com", "c@example.com"
        ]
        quotes = [s["json_data"]["quote"] for s in mail.sent]
        assert all(q == quotes[0] for q in quotes)
        assert quotes[0] == {
            "id": "quote-1",
            "name": "Office chairs",
            "organization": "Acme Corp",
            "costCenter": "Headquarters",
            "link": "https://shop.example.com/b2b-quotes/quote-1",
            "lastUpdate": LAST_UPDATE,
            "orderId": "ord-9",
        }
        assert {s["template_name"] for s in mail.sent} == {"quote-updated"}

    def test_custom_template(self, directory, mail, metrics):
        event = updated_event(templateName="quote-placed")
        asyncio.run(make_notifier(directory, mail, metrics).quote_updated(event))
        assert {s["template_name"] for s in mail.sent} == {"quote-placed"}

    def test_metric_per_successful_send(self, directory, metrics):
        mail = FakeMail(failing={"b@example.com"})
        outcome = asyncio.run(make_notifier(directory, mail, metrics).quote_updated(updated_event()))

        assert outcome.count == 2
        assert [m["recipient"] for m in metrics.recorded] == ["a@example.com", "c@example.com"]
        assert all(m["account"] == "b2bstore" for m in metrics.recorded)
        assert all(m["template_name"] == "quote-updated" for m in metrics.recorded)

    def test_name_failure_abandons(self, mail, metrics):
        directory = FakeDirectory(organizations={"org-1": "Acme"}, cost_centers={"cc-1": "HQ"}, failing={"org-1"})
        outcome = asyncio.run(make_notifier(directory, mail, metrics).quote_updated(updated_event()))

        assert outcome.status == NotificationStatus.ABANDONED
        assert outcome.reason == "missing-names"
        assert mail.sent == []
        assert metrics.recorded == []

    def test_dispatch_failure_returns_failed_outcome(self, directory, mail, metrics):
        class UnreadableRecipients:
            def __iter__(self):
                raise RuntimeError("recipient list unavailable")

        notifier = make_notifier(directory, mail, metrics)
        payload = notifier.build_payload("quote-1", "Office chairs", "Acme Corp", "HQ", updated_event().last_update)
        outcome = asyncio.run(notifier.send_to_users(payload, UnreadableRecipients(), "quote-updated"))

        assert outcome.status == NotificationStatus.FAILED
        assert not outcome.ok
        assert "recipient list unavailable" in outcome.error
        assert mail.sent == []


class TestQuoteCreated:
    def test_sales_admins_are_notified(self, directory, mail, metrics):
        permissions = FakePermissions(users=["admin1@example.com", "admin2@example.com"])
        notifier = make_notifier(directory, mail, metrics, permissions=permissions)
        outcome = asyncio.run(notifier.quote_created(created_event()))

        assert outcome.status == NotificationStatus.SENT
        assert outcome.count == 2
        assert permissions.user_requests == [("role-1", "org-1")]
        assert {s["template_name"] for s in mail.sent} == {"quote-created"}
        assert "orderId" not in mail.sent[0]["json_data"]["quote"]

    def test_no_role_users_sends_nothing(self, directory, mail, metrics):
        notifier = make_notifier(directory, mail, metrics, permissions=FakePermissions(users=[]))
        outcome = asyncio.run(notifier.quote_created(created_event()))

        assert outcome.status == NotificationStatus.ABANDONED
        assert outcome.reason == "no-recipients"
        assert mail.sent == []

    def test_missing_role_sends_nothing(self, directory, mail, metrics):
        permissions = FakePermissions(roles=[Role(id="role-9", slug="buyer")], users=["x@example.com"])
        outcome = asyncio.run(make_notifier(directory, mail, metrics, permissions=permissions).quote_created(created_event()))

        assert outcome.status == NotificationStatus.ABANDONED
        assert permissions.user_requests == []
        assert mail.sent == []

    def test_role_lookup_error_is_swallowed(self, directory, mail, metrics):
        permissions = FakePermissions(error=DownstreamError("storefront-permissions", 500, "boom"))
        outcome = asyncio.run(make_notifier(directory, mail, metrics, permissions=permissions).quote_created(created_event()))

        assert outcome.status == NotificationStatus.ABANDONED
        assert mail.sent == []

    def test_unresolved_cost_center_abandons(self, mail, metrics):
        directory = FakeDirectory(organizations={"org-1": "Acme"}, cost_centers={})
        permissions = FakePermissions(users=["admin@example.com"])
        outcome = asyncio.run(make_notifier(directory, mail, metrics, permissions=permissions).quote_created(created_event()))

        assert outcome.reason == "missing-names"
        assert mail.sent == []
