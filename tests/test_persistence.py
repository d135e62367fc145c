import pytest
import redis

from routine_builder.database.kv_store import KeyValueStore
from routine_builder.database.redis_store import RedisKeyValueStore
from routine_builder.selection.persistence import DisplayPreferences, SelectionPersistence


class FakeRedisClient:
    def __init__(self, fail_ping=False):
        self.data = {}
        self.fail_ping = fail_ping

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)

    def ping(self):
        if self.fail_ping:
            raise redis.ConnectionError("no server")
        return True


def test_selection_save_load_clear():
    store = KeyValueStore()
    p = SelectionPersistence(store, scope="s1")

    assert p.load() is None
    p.save("[]")
    assert p.load() == "[]"
    assert store.get("s1:selectedProducts") == "[]"

    p.clear()
    assert p.load() is None


def test_selection_without_scope_uses_well_known_key():
    store = KeyValueStore()
    SelectionPersistence(store).save('[{"id": 1}]')
    assert store.get("selectedProducts") == '[{"id": 1}]'


def test_scopes_are_independent():
    store = KeyValueStore()
    a = SelectionPersistence(store, scope="a")
    b = SelectionPersistence(store, scope="b")
    a.save("[1]")
    assert b.load() is None


def test_rtl_preference_is_a_separate_boolean_string_key():
    store = KeyValueStore()
    prefs = DisplayPreferences(store, scope="s1")
    selection = SelectionPersistence(store, scope="s1")
    selection.save("[]")

    assert prefs.is_rtl() is False
    assert prefs.toggle_rtl() is True
    assert store.get("s1:rtlMode") == "true"
    assert prefs.toggle_rtl() is False
    assert store.get("s1:rtlMode") == "false"
    assert selection.load() == "[]"


def test_in_memory_store_only_accepts_strings():
    store = KeyValueStore()
    with pytest.raises(TypeError):
        store.set("k", ["not", "a", "string"])
    store.set("k", "v")
    store.delete("k")
    store.delete("k")
    assert store.get("k") is None
    assert store.ping() is True


def test_redis_store_prefixes_keys():
    client = FakeRedisClient()
    store = RedisKeyValueStore(client=client, key_prefix="rb:")
    p = SelectionPersistence(store, scope="s1")

    p.save("[]")
    assert client.data == {"rb:s1:selectedProducts": "[]"}
    assert p.load() == "[]"
    p.clear()
    assert client.data == {}


def test_redis_store_rejects_non_strings_and_reports_ping():
    store = RedisKeyValueStore(client=FakeRedisClient(fail_ping=True))
    with pytest.raises(TypeError):
        store.set("k", 1)
    assert store.ping() is False


def test_redis_store_requires_url_without_client():
    with pytest.raises(ValueError):
        RedisKeyValueStore(url=None)
