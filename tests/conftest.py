"""Pytest fixtures for catalog, selection and advisor tests."""

import json

import httpx
import pytest

from routine_builder.catalog.models import Product
from routine_builder.catalog.store import CatalogStore
from routine_builder.chatbot.relay import RelayClient
from routine_builder.chatbot.session import AdvisorSession
from routine_builder.database.kv_store import KeyValueStore
from routine_builder.integrations.contracts.catalog import CatalogSource

PRODUCT_RECORDS = [
    {
        "id": 1,
        "name": "Cleanser",
        "brand": "X",
        "category": "cleanser",
        "image": "img/1.jpg",
        "description": "Gentle foaming wash",
    },
    {"id": 2, "name": "Serum", "brand": "Y", "category": "serum", "image": "img/2.jpg"},
    {
        "id": 3,
        "name": "Night Cream",
        "brand": "CeraVe",
        "category": "moisturizer",
        "image": "img/3.jpg",
        "description": "Rich cream with ceramides",
    },
]


class FakeCatalogSource(CatalogSource):
    def __init__(self, payload=None, error=None):
        self.payload = payload if payload is not None else {"products": PRODUCT_RECORDS}
        self.error = error
        self.calls = 0

    async def fetch_catalog(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


class RelayRecorder:
    """httpx MockTransport handler that records request bodies."""

    def __init__(self, reply="Use the cleanser, then the serum.", status_code=200, body=None, error=None):
        self.reply = reply
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(
            self.status_code,
            json={"choices": [{"message": {"role": "assistant", "content": self.reply}}]},
        )


@pytest.fixture
def products():
    return [Product(**r) for r in PRODUCT_RECORDS]


@pytest.fixture
def catalog_source():
    return FakeCatalogSource()


@pytest.fixture
def kv_store():
    return KeyValueStore()


@pytest.fixture
def relay_recorder():
    return RelayRecorder()


@pytest.fixture
def relay(relay_recorder):
    return RelayClient(worker_url="https://relay.test/", transport=httpx.MockTransport(relay_recorder))


@pytest.fixture
def make_session(catalog_source, kv_store, relay):
    def _make(session_id="s1", source=None, store=None, on_render=None):
        return AdvisorSession(
            session_id=session_id,
            catalog=CatalogStore(source or catalog_source),
            store=store or kv_store,
            relay=relay,
            on_render=on_render,
        )

    return _make
