import httpx
from triglav_consumer.token_store import AUTH_HEADER, TokenAuth, TokenStore


def test_store_starts_empty():
    store = TokenStore()
    assert not store.has_token()
    assert store.get() == ""


def test_set_overwrites_in_place():
    store = TokenStore()
    store.set("first")
    store.set("second")
    assert store.has_token()
    assert store.get() == "second"


def test_empty_token_counts_as_absent():
    store = TokenStore("seed")
    store.set("")
    assert not store.has_token()
    store.set("again")
    store.clear()
    assert not store.has_token()


def _sent_headers(store: TokenStore) -> httpx.Headers:
    request = httpx.Request("GET", "http://triglav.test/api/v1/jobs/1")
    flow = TokenAuth(store).sync_auth_flow(request)
    return next(flow).headers


def test_auth_flow_attaches_current_token():
    store = TokenStore()
    assert AUTH_HEADER not in _sent_headers(store)

    store.set("abc")
    assert _sent_headers(store)[AUTH_HEADER] == "abc"

    store.set("def")
    assert _sent_headers(store)[AUTH_HEADER] == "def"
