"""Unit tests for the token resource."""

import uuid

import pytest

from influxdb3_provider.diagnostics import Diagnostics
from influxdb3_provider.models.token_model import TokenModel, TokenPermissionModel
from influxdb3_provider.provider_data import ProviderData
from influxdb3_provider.resources.token_resource import (
    UUID_ERROR_SUMMARY,
    TokenResource,
    new_token_resource,
    parse_token_id,
)
from tests.fixtures.influxdb3_fixtures import (
    ACCOUNT_ID,
    CLUSTER_ID,
    CREATED_AT,
    FakeManagementAPI,
)


@pytest.fixture
def fake_api():
    return FakeManagementAPI()


@pytest.fixture
def resource(fake_api):
    resource = new_token_resource()
    resource.configure(
        ProviderData(
            account_id=uuid.UUID(ACCOUNT_ID),
            cluster_id=uuid.UUID(CLUSTER_ID),
            client=fake_api.client(),
        )
    )
    return resource


def token_plan(description="read sensors", *permissions) -> TokenModel:
    permissions = permissions or (("read", "sensors"),)
    return TokenModel(
        description=description,
        permissions=[TokenPermissionModel(action=a, resource=r) for a, r in permissions],
    )


class TestParseTokenId:
    """Test token ID validation."""

    def test_valid_id(self):
        diagnostics = Diagnostics()
        token_id = str(uuid.uuid4())

        assert parse_token_id(token_id, diagnostics) == token_id
        assert len(diagnostics) == 0

    @pytest.mark.parametrize("token_id", [None, "", "1234"])
    def test_invalid_id(self, token_id):
        diagnostics = Diagnostics()

        assert parse_token_id(token_id, diagnostics) is None
        assert diagnostics.errors()[0].summary == UUID_ERROR_SUMMARY


class TestTokenResourceCreate:
    """Test creating tokens."""

    def test_metadata(self):
        assert TokenResource().metadata() == "influxdb3_token"

    @pytest.mark.asyncio
    async def test_create(self, resource):
        plan = token_plan("writer", ("write", "sensors"), ("read", "*"))

        response = await resource.create(plan)

        state = response.state
        assert not response.diagnostics.has_error()
        assert state.permissions == plan.permissions
        assert state.description == "writer"
        assert state.access_token == f"apiv1_{state.id}"
        assert state.created_at == CREATED_AT
        assert state.account_id == ACCOUNT_ID
        assert state.cluster_id == CLUSTER_ID

    @pytest.mark.asyncio
    async def test_access_token_not_in_repr(self, resource):
        response = await resource.create(token_plan())

        assert response.state.access_token not in repr(response.state)

    @pytest.mark.asyncio
    async def test_create_requires_description(self, fake_api, resource):
        response = await resource.create(
            TokenModel(permissions=[TokenPermissionModel(action="read", resource="*")])
        )

        error = response.diagnostics.errors()[0]
        assert error.attribute == "description"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_action(self, fake_api, resource):
        response = await resource.create(token_plan("admin", ("delete", "*")))

        error = response.diagnostics.errors()[0]
        assert error.attribute == "permissions[0].action"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_permissions(self, resource):
        response = await resource.create(
            token_plan("dup", ("read", "sensors"), ("read", "sensors"))
        )

        assert "duplicate" in response.diagnostics.errors()[0].detail

    @pytest.mark.asyncio
    async def test_create_api_error(self, fake_api, resource):
        fake_api.forced_statuses = [500]

        response = await resource.create(token_plan())

        error = response.diagnostics.errors()[0]
        assert response.state is None
        assert error.summary == "Error creating token"
        assert "HTTP Status Code: 500" in error.detail


class TestTokenResourceRead:
    """Test refreshing and importing tokens."""

    @pytest.mark.asyncio
    async def test_read_keeps_access_token(self, resource):
        created = await resource.create(token_plan())

        response = await resource.read(created.state)

        assert response.state == created.state

    @pytest.mark.asyncio
    async def test_read_invalid_id(self, fake_api, resource):
        response = await resource.read(TokenModel(id="not-a-uuid"))

        assert response.diagnostics.errors()[0].summary == UUID_ERROR_SUMMARY
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_read_missing(self, resource):
        response = await resource.read(TokenModel(id=str(uuid.uuid4())))

        error = response.diagnostics.errors()[0]
        assert error.summary == "Error getting token"
        assert "Error Message: token not found" in error.detail

    @pytest.mark.asyncio
    async def test_import_state_has_no_access_token(self, resource):
        created = await resource.create(token_plan())

        response = await resource.import_state(created.state.id)

        assert response.state.id == created.state.id
        assert response.state.description == "read sensors"
        assert response.state.access_token is None


class TestTokenResourceUpdate:
    """Test updating tokens."""

    @pytest.mark.asyncio
    async def test_update(self, fake_api, resource):
        created = await resource.create(token_plan())
        plan = token_plan("renamed", ("write", "sensors"))

        response = await resource.update(plan, created.state)

        state = response.state
        assert not response.diagnostics.has_error()
        assert state.id == created.state.id
        assert state.description == "renamed"
        assert state.permissions == plan.permissions
        assert state.access_token == created.state.access_token
        assert fake_api.request_bodies("PATCH") == [
            {
                "description": "renamed",
                "permissions": [{"action": "write", "resource": "sensors"}],
            }
        ]

    @pytest.mark.asyncio
    async def test_update_without_id(self, resource):
        response = await resource.update(token_plan())

        assert response.diagnostics.errors()[0].summary == UUID_ERROR_SUMMARY

    @pytest.mark.asyncio
    async def test_update_missing_token(self, resource):
        plan = token_plan().model_copy(update={"id": str(uuid.uuid4())})

        response = await resource.update(plan)

        assert response.diagnostics.errors()[0].summary == "Error updating token"


class TestTokenResourceDelete:
    """Test deleting tokens."""

    @pytest.mark.asyncio
    async def test_delete(self, fake_api, resource):
        created = await resource.create(token_plan())

        response = await resource.delete(created.state)

        assert response.state is None
        assert fake_api.tokens == {}

    @pytest.mark.asyncio
    async def test_delete_nonexistent_token(self, resource):
        state = TokenModel(id=str(uuid.uuid4()), description="gone")

        response = await resource.delete(state)

        error = response.diagnostics.errors()[0]
        assert response.state == state
        assert error.summary == "Error deleting token"
        assert "HTTP Status Code: 404" in error.detail

    @pytest.mark.asyncio
    async def test_delete_invalid_id_keeps_state(self, fake_api, resource):
        state = TokenModel(id="abc")

        response = await resource.delete(state)

        assert response.state == state
        assert response.diagnostics.errors()[0].summary == UUID_ERROR_SUMMARY
        assert fake_api.requests == []
