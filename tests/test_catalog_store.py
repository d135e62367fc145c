import json
import logging

import httpx
import pytest

from conftest import PRODUCT_RECORDS, FakeCatalogSource
from routine_builder.catalog.models import parse_catalog_payload
from routine_builder.catalog.store import CatalogStore
from routine_builder.errors import CatalogPayloadError
from routine_builder.integrations.clients import build_catalog_source
from routine_builder.integrations.clients.local_catalog import LocalCatalogClient
from routine_builder.integrations.clients.real_http.http_catalog import HttpCatalogClient
from routine_builder.utils.config_loader import CatalogConfig


@pytest.mark.asyncio
async def test_load_populates_store(catalog_source):
    store = CatalogStore(catalog_source)
    assert store.loaded is False

    products = await store.load()

    assert store.loaded is True
    assert [p.id for p in products] == [1, 2, 3]
    assert store.get("2").name == "Serum"
    assert store.get(2).name == "Serum"
    assert store.get(99) is None
    assert store.categories() == ["cleanser", "serum", "moisturizer"]


@pytest.mark.asyncio
async def test_load_failure_leaves_empty_catalog_and_logs(caplog):
    store = CatalogStore(FakeCatalogSource(error=httpx.ConnectError("down")))

    with caplog.at_level(logging.ERROR):
        products = await store.load()

    assert products == ()
    assert store.loaded is False
    assert "down" in store.last_error
    assert "Error loading products" in caplog.text


@pytest.mark.asyncio
async def test_malformed_payload_is_a_load_failure():
    store = CatalogStore(FakeCatalogSource(payload={"items": []}))
    assert await store.load() == ()
    assert store.loaded is False


@pytest.mark.asyncio
async def test_reload_replaces_content():
    source = FakeCatalogSource()
    store = CatalogStore(source)
    await store.load()

    source.payload = {"products": [PRODUCT_RECORDS[1]]}
    await store.load()

    assert [p.id for p in store.products] == [2]
    assert source.calls == 2


@pytest.mark.asyncio
async def test_failed_reload_empties_previous_content():
    source = FakeCatalogSource()
    store = CatalogStore(source)
    await store.load()

    source.error = ValueError("bad json")
    await store.load()

    assert store.products == ()


def test_parse_payload_rejects_missing_display_fields():
    with pytest.raises(CatalogPayloadError):
        parse_catalog_payload({"products": [{"id": 1, "name": "No brand"}]})
    with pytest.raises(CatalogPayloadError):
        parse_catalog_payload(["not", "an", "object"])
    with pytest.raises(CatalogPayloadError):
        parse_catalog_payload({"products": [None]})


def test_parse_payload_keeps_first_duplicate_id():
    dup = dict(PRODUCT_RECORDS[0], name="Other")
    products = parse_catalog_payload({"products": [PRODUCT_RECORDS[0], dup]})
    assert len(products) == 1
    assert products[0].name == "Cleanser"


def test_parse_payload_ignores_extra_fields():
    record = dict(PRODUCT_RECORDS[1], price=12.5)
    (product,) = parse_catalog_payload({"products": [record]})
    assert product.to_dict() == PRODUCT_RECORDS[1]


@pytest.mark.asyncio
async def test_local_client_reads_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps({"products": PRODUCT_RECORDS}), encoding="utf-8")

    store = CatalogStore(LocalCatalogClient(path))
    await store.load()

    assert len(store) == 3


@pytest.mark.asyncio
async def test_local_client_missing_file_is_a_load_failure(tmp_path):
    store = CatalogStore(LocalCatalogClient(tmp_path / "missing.json"))
    assert await store.load() == ()


@pytest.mark.asyncio
async def test_http_client_fetches_catalog():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"products": PRODUCT_RECORDS})

    client = HttpCatalogClient(url="https://catalog.test/products.json", transport=httpx.MockTransport(handler))
    store = CatalogStore(client)
    await store.load()

    assert seen == ["https://catalog.test/products.json"]
    assert len(store) == 3


@pytest.mark.asyncio
async def test_http_client_error_status_is_a_load_failure():
    client = HttpCatalogClient(
        url="https://catalog.test/products.json",
        transport=httpx.MockTransport(lambda request: httpx.Response(404)),
    )
    store = CatalogStore(client)
    assert await store.load() == ()


def test_build_catalog_source_picks_client(tmp_path):
    local = build_catalog_source(CatalogConfig(path="data/products.json"), base_dir=tmp_path)
    assert isinstance(local, LocalCatalogClient)
    assert local.path == tmp_path / "data" / "products.json"

    remote = build_catalog_source(CatalogConfig(source="http", url="https://catalog.test/p.json"))
    assert isinstance(remote, HttpCatalogClient)
    assert remote.url == "https://catalog.test/p.json"
