"""Unit tests for DatabaseOperations."""

import httpx
import pytest

from common.exception.exceptions import (
    BadRequestError,
    InfluxDB3Error,
    NotFoundError,
    UnexpectedStatusError,
)
from influxdb3_provider.services.influxdb3.models.types import (
    BucketValue,
    DatabaseParams,
    DatabaseUpdateParams,
    PartitionTemplatePart,
)
from tests.fixtures.influxdb3_fixtures import (
    ACCOUNT_ID,
    CLUSTER_ID,
    FakeManagementAPI,
    database_payload,
)


@pytest.fixture
def fake_api():
    return FakeManagementAPI()


@pytest.fixture
def database_api(fake_api):
    return fake_api.client().database_api()


def sensors_params(**overrides) -> DatabaseParams:
    values = {
        "name": "sensors",
        "max_tables": 500,
        "max_columns_per_table": 200,
        "retention_period": 0,
    }
    values.update(overrides)
    return DatabaseParams(**values)


class TestCreateDatabase:
    """Test database creation."""

    @pytest.mark.asyncio
    async def test_create(self, fake_api, database_api):
        database = await database_api.create(sensors_params(retention_period=3600))

        assert database.name == "sensors"
        assert database.account_id == ACCOUNT_ID
        assert database.cluster_id == CLUSTER_ID
        assert database.retention_period == 3600
        assert fake_api.request_bodies("POST") == [
            {
                "name": "sensors",
                "maxTables": 500,
                "maxColumnsPerTable": 200,
                "retentionPeriod": 3600,
                "partitionTemplate": [],
            }
        ]

    @pytest.mark.asyncio
    async def test_create_with_partition_template(self, fake_api, database_api):
        params = sensors_params(
            partition_template=[
                PartitionTemplatePart(type="tag", value="region"),
                PartitionTemplatePart(
                    type="bucket",
                    value=BucketValue(tag_name="host", number_of_buckets=10),
                ),
                PartitionTemplatePart(type="time", value="%Y-%m-%d"),
            ]
        )

        database = await database_api.create(params)

        body = fake_api.request_bodies("POST")[0]
        assert body["partitionTemplate"][1] == {
            "type": "bucket",
            "value": {"tagName": "host", "numberOfBuckets": 10},
        }
        assert database.partition_template[0].value == "region"
        assert database.partition_template[1].value == BucketValue(
            tag_name="host", number_of_buckets=10
        )

    @pytest.mark.asyncio
    async def test_create_then_get_returns_same_attributes(self, database_api):
        created = await database_api.create(
            sensors_params(max_tables=10, max_columns_per_table=20, retention_period=60)
        )

        fetched = await database_api.get_by_name("sensors")

        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_bad_request(self, database_api):
        await database_api.create(sensors_params())

        with pytest.raises(BadRequestError) as exc_info:
            await database_api.create(sensors_params())

        assert str(exc_info.value) == "bad request, check your input"
        assert exc_info.value.status_code == 400
        assert exc_info.value.error_message == "invalid database name"

    @pytest.mark.asyncio
    async def test_create_other_status(self, fake_api, database_api):
        fake_api.forced_statuses = [403]

        with pytest.raises(UnexpectedStatusError, match="unexpected status code: 403"):
            await database_api.create(sensors_params())


class TestReadDatabases:
    """Test listing and lookup."""

    @pytest.mark.asyncio
    async def test_list_empty(self, database_api):
        assert await database_api.list() == []

    @pytest.mark.asyncio
    async def test_list(self, fake_api, database_api):
        fake_api.databases["a"] = database_payload("a")
        fake_api.databases["b"] = database_payload("b", retentionPeriod=86400)

        databases = await database_api.list()

        assert [d.name for d in databases] == ["a", "b"]
        assert databases[1].retention_period == 86400

    @pytest.mark.asyncio
    async def test_list_rejects_non_list_body(self, fake_api):
        client = fake_api.client()
        client._client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"name": "a"}))
        )

        with pytest.raises(InfluxDB3Error, match="expected a list"):
            await client.database_api().list()

    @pytest.mark.asyncio
    async def test_get_by_name_not_found(self, fake_api, database_api):
        fake_api.databases["a"] = database_payload("a")

        with pytest.raises(NotFoundError) as exc_info:
            await database_api.get_by_name("missing")

        assert str(exc_info.value) == "error getting database: missing not found"

    @pytest.mark.asyncio
    async def test_get_by_name_propagates_list_errors(self, fake_api, database_api):
        fake_api.forced_statuses = [401]

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await database_api.get_by_name("a")

        assert not isinstance(exc_info.value, NotFoundError)


class TestUpdateDatabase:
    """Test database updates."""

    @pytest.mark.asyncio
    async def test_update_sends_only_mutable_fields(self, fake_api, database_api):
        fake_api.databases["sensors"] = database_payload("sensors")

        database = await database_api.update(
            "sensors",
            DatabaseUpdateParams(max_tables=1000, max_columns_per_table=300, retention_period=7),
        )

        assert fake_api.request_bodies("PATCH") == [
            {"maxTables": 1000, "maxColumnsPerTable": 300, "retentionPeriod": 7}
        ]
        assert fake_api.requests[-1].url.path.endswith("/databases/sensors")
        assert database.max_tables == 1000
        assert database.retention_period == 7

    @pytest.mark.asyncio
    async def test_update_missing(self, database_api):
        with pytest.raises(UnexpectedStatusError, match="404"):
            await database_api.update(
                "missing",
                DatabaseUpdateParams(max_tables=1, max_columns_per_table=1, retention_period=0),
            )


class TestDeleteDatabase:
    """Test database deletion."""

    @pytest.mark.asyncio
    async def test_delete(self, fake_api, database_api):
        fake_api.databases["sensors"] = database_payload("sensors")

        await database_api.delete("sensors")

        assert "sensors" not in fake_api.databases
        assert fake_api.requests[-1].method == "DELETE"

    @pytest.mark.asyncio
    async def test_delete_missing(self, database_api):
        with pytest.raises(NotFoundError) as exc_info:
            await database_api.delete("missing")

        assert str(exc_info.value) == "error deleting database: unexpected status code: 404"

    @pytest.mark.asyncio
    async def test_delete_server_error(self, fake_api, database_api):
        fake_api.forced_statuses = [500]

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await database_api.delete("sensors")

        assert not isinstance(exc_info.value, NotFoundError)
        assert str(exc_info.value).startswith("error deleting database:")


class TestDatabaseNameEscaping:
    """Test names containing URL delimiters reach the right database."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["a?b", "db/rp", "100%", "x#y"])
    async def test_create_update_delete(self, fake_api, database_api, name):
        await database_api.create(sensors_params(name=name))

        updated = await database_api.update(
            name,
            DatabaseUpdateParams(max_tables=7, max_columns_per_table=8, retention_period=9),
        )
        await database_api.delete(name)

        assert updated.name == name
        assert updated.max_tables == 7
        assert fake_api.databases == {}

    @pytest.mark.asyncio
    async def test_name_sent_as_single_segment(self, fake_api, database_api):
        fake_api.databases["db/rp"] = database_payload("db/rp")

        await database_api.delete("db/rp")

        request = fake_api.requests[-1]
        assert request.url.raw_path.decode().endswith("/databases/db%2Frp")
        assert request.url.query == b""
