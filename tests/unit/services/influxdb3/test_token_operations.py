"""Unit tests for TokenOperations."""

import uuid

import pytest

from common.exception.exceptions import NotFoundError, UnexpectedStatusError
from influxdb3_provider.services.influxdb3.models.types import Permission, TokenParams
from tests.fixtures.influxdb3_fixtures import CREATED_AT, FakeManagementAPI


@pytest.fixture
def fake_api():
    return FakeManagementAPI()


@pytest.fixture
def token_api(fake_api):
    return fake_api.client().token_api()


def reader_params(description: str = "read sensors") -> TokenParams:
    return TokenParams(
        description=description,
        permissions=[Permission(action="read", resource="sensors")],
    )


class TestCreateToken:
    """Test token creation."""

    @pytest.mark.asyncio
    async def test_create_returns_access_token(self, token_api):
        token = await token_api.create(reader_params())

        assert token.access_token == f"apiv1_{token.id}"
        assert token.created_at == CREATED_AT
        assert token.description == "read sensors"

    @pytest.mark.asyncio
    async def test_created_permissions_match_request(self, fake_api, token_api):
        params = TokenParams(
            description="writer",
            permissions=[
                Permission(action="write", resource="sensors"),
                Permission(action="read", resource="*"),
            ],
        )

        token = await token_api.create(params)

        assert token.permissions == params.permissions
        assert fake_api.request_bodies("POST") == [
            {
                "description": "writer",
                "permissions": [
                    {"action": "write", "resource": "sensors"},
                    {"action": "read", "resource": "*"},
                ],
            }
        ]

    @pytest.mark.asyncio
    async def test_create_failure(self, fake_api, token_api):
        fake_api.forced_statuses = [400]

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await token_api.create(reader_params())

        assert exc_info.value.status_code == 400


class TestReadTokens:
    """Test token listing and lookup."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, token_api):
        created = await token_api.create(reader_params())

        token = await token_api.get_by_id(created.id)

        assert token.id == created.id
        assert token.permissions == created.permissions
        assert token.access_token is None

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, token_api):
        token_id = str(uuid.uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            await token_api.get_by_id(token_id)

        assert str(exc_info.value) == f"error getting token: {token_id} not found"
        assert exc_info.value.error_message == "token not found"

    @pytest.mark.asyncio
    async def test_list(self, token_api):
        first = await token_api.create(reader_params("first"))
        second = await token_api.create(reader_params("second"))

        tokens = await token_api.list()

        assert {t.id for t in tokens} == {first.id, second.id}
        assert all(t.access_token is None for t in tokens)


class TestUpdateToken:
    """Test token updates."""

    @pytest.mark.asyncio
    async def test_update(self, fake_api, token_api):
        created = await token_api.create(reader_params())
        params = TokenParams(
            description="renamed",
            permissions=[Permission(action="write", resource="sensors")],
        )

        token = await token_api.update(created.id, params)

        assert token.description == "renamed"
        assert token.permissions == params.permissions
        assert fake_api.requests[-1].method == "PATCH"


class TestDeleteToken:
    """Test token deletion."""

    @pytest.mark.asyncio
    async def test_delete(self, fake_api, token_api):
        created = await token_api.create(reader_params())

        await token_api.delete(created.id)

        assert created.id not in fake_api.tokens

    @pytest.mark.asyncio
    async def test_delete_nonexistent_token(self, token_api):
        token_id = str(uuid.uuid4())

        with pytest.raises(NotFoundError) as exc_info:
            await token_api.delete(token_id)

        assert str(exc_info.value) == f"error deleting token: {token_id} not found"

    @pytest.mark.asyncio
    async def test_delete_server_error(self, fake_api, token_api):
        fake_api.forced_statuses = [503]

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await token_api.delete(str(uuid.uuid4()))

        assert str(exc_info.value) == "error deleting token: unexpected status code: 503"

    @pytest.mark.asyncio
    async def test_delete_escapes_token_id(self, fake_api, token_api):
        with pytest.raises(NotFoundError):
            await token_api.delete("abc?x=1")

        request = fake_api.requests[-1]
        assert request.url.raw_path.decode().endswith("/tokens/abc%3Fx%3D1")
