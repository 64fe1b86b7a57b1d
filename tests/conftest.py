import asyncio

import pytest
from seller_quotes.core.errors import DownstreamError
from seller_quotes.models.directory import Role, RoleUser, RoleUserPage
from seller_quotes.models.quote import Pagination


class FakeDirectory:
    def __init__(self, organizations=None, cost_centers=None, failing=(), delays=None):
        self.organizations = organizations or {}
        self.cost_centers = cost_centers or {}
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls = []

    async def _get(self, names, entity_id):
        self.calls.append(entity_id)
        await asyncio.sleep(self.delays.get(entity_id, 0))
        if entity_id in self.failing:
            raise DownstreamError("organizations", 500, f"lookup failed for {entity_id}")
        return names.get(entity_id)

    async def get_organization_name(self, organization_id):
        return await self._get(self.organizations, organization_id)

    async def get_cost_center_name(self, cost_center_id):
        return await self._get(self.cost_centers, cost_center_id)


class FakeStore:
    def __init__(self, records=None, total=None, error=None):
        self.records = records or []
        self.total = len(self.records) if total is None else total
        self.error = error
        self.calls = []

    async def search(self, entity, fields, schema, where, sort="", page=1, page_size=25):
        self.calls.append(
            {"entity": entity, "fields": fields, "schema": schema, "where": where,
             "sort": sort, "page": page, "page_size": page_size}
        )
        if self.error:
            raise self.error
        return list(self.records), Pagination(page=page, page_size=page_size, total=self.total)


class FakePermissions:
    def __init__(self, roles=None, users=None, error=None):
        self.roles = roles if roles is not None else [Role(id="role-1", slug="sales-admin")]
        self.users = users or []
        self.error = error
        self.user_requests = []

    async def list_roles(self):
        if self.error:
            raise self.error
        return self.roles

    async def list_users_paginated(self, role_id, organization_id=None):
        self.user_requests.append((role_id, organization_id))
        return RoleUserPage(data=[RoleUser(email=email) for email in self.users], total=len(self.users))


class FakeMail:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.sent = []

    async def send_mail(self, json_data, template_name):
        to = json_data["message"]["to"]
        if to in self.failing:
            raise DownstreamError("mail-service", 500, "smtp down")
        self.sent.append({"json_data": json_data, "template_name": template_name})


class FakeMetrics:
    def __init__(self):
        self.recorded = []

    def record_send(self, quote, account, recipient, template_name):
        self.recorded.append(
            {"quote": quote, "account": account, "recipient": recipient, "template_name": template_name}
        )


def make_record(index, organization="org-1", cost_center="cc-1", **extra):
    record = {
        "id": f"quote-{index}",
        "seller": "seller-1",
        "organization": organization,
        "costCenter": cost_center,
        "referenceName": f"Quote {index}",
        "creatorEmail": "buyer@example.com",
        "status": "pending",
        "creationDate": "2024-05-01T10:00:00Z",
    }
    record.update(extra)
    return record


@pytest.fixture
def directory():
    return FakeDirectory(
        organizations={"org-1": "Acme Corp", "org-2": "Globex"},
        cost_centers={"cc-1": "Headquarters", "cc-2": "Warehouse"},
    )


@pytest.fixture
def mail():
    return FakeMail()


@pytest.fixture
def metrics():
    return FakeMetrics()
