"""Tests for the PokeAPI catalog client."""
import asyncio

import httpx
import pytest
from tenacity import wait_none

from poketeam.clients.base_client import (
    AuthenticationError,
    BaseCatalogClient,
    CatalogError,
    CatalogParseError,
    RateLimitError,
)
from poketeam.clients.pokeapi_client import PokeApiClient
from poketeam.models.pokemon import Pokemon

BASE_URL = "https://pokeapi.test/api/v2"

SAMPLE_PAGE = {
    "count": 1302,
    "next": "https://pokeapi.test/api/v2/pokemon?offset=3&limit=3",
    "previous": None,
    "results": [
        {"name": "bulbasaur", "url": "https://pokeapi.test/api/v2/pokemon/1/"},
        {"name": "ivysaur", "url": "https://pokeapi.test/api/v2/pokemon/2/"},
        {"name": "venusaur", "url": "https://pokeapi.test/api/v2/pokemon/3/"},
    ],
}


def make_client(handler, limit=3):
    transport = httpx.MockTransport(handler)
    http_client = httpx.AsyncClient(transport=transport)
    return PokeApiClient(client=http_client, base_url=BASE_URL, limit=limit)


def fetch(client):
    async def run():
        try:
            return await client.get_pokemon_list()
        finally:
            await client.close()

    return asyncio.run(run())


@pytest.fixture
def no_backoff(monkeypatch):
    """Retry immediately instead of sleeping between attempts."""
    monkeypatch.setattr(BaseCatalogClient._make_request.retry, "wait", wait_none())


def test_get_pokemon_list_maps_results():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=SAMPLE_PAGE)

    pokemon_list = fetch(make_client(handler))

    assert pokemon_list == [
        Pokemon(id=1, name="bulbasaur", url="https://pokeapi.test/api/v2/pokemon/1/"),
        Pokemon(id=2, name="ivysaur", url="https://pokeapi.test/api/v2/pokemon/2/"),
        Pokemon(id=3, name="venusaur", url="https://pokeapi.test/api/v2/pokemon/3/"),
    ]
    assert len(requests) == 1
    assert requests[0].url.path == "/api/v2/pokemon"
    assert requests[0].url.params["limit"] == "3"
    assert requests[0].url.params["offset"] == "0"


def test_empty_results():
    pokemon_list = fetch(
        make_client(lambda request: httpx.Response(200, json={"results": []}))
    )
    assert pokemon_list == []


def test_not_found_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(404, json={"detail": "Not found."})

    with pytest.raises(CatalogError, match="404"):
        fetch(make_client(handler))
    assert len(calls) == 1


def test_forbidden_raises_authentication_error():
    with pytest.raises(AuthenticationError):
        fetch(make_client(lambda request: httpx.Response(403)))


def test_server_error_is_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=SAMPLE_PAGE)

    pokemon_list = fetch(make_client(handler))

    assert len(calls) == 2
    assert [p.name for p in pokemon_list] == ["bulbasaur", "ivysaur", "venusaur"]


def test_rate_limit_raised_after_retries(no_backoff):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(429, headers={"Retry-After": "1"})

    with pytest.raises(RateLimitError):
        fetch(make_client(handler))
    assert len(calls) == 4


def test_network_failure_becomes_catalog_error(no_backoff):
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogError) as excinfo:
        fetch(make_client(handler))
    assert len(calls) == 4
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_entry_url_is_stored_stripped():
    payload = {
        "results": [
            {"name": "pikachu", "url": "  https://pokeapi.test/api/v2/pokemon/25/ \n"}
        ]
    }

    pokemon_list = fetch(make_client(lambda request: httpx.Response(200, json=payload)))

    assert pokemon_list == [
        Pokemon(id=25, name="pikachu", url="https://pokeapi.test/api/v2/pokemon/25/")
    ]


def test_invalid_json_raises_parse_error():
    with pytest.raises(CatalogParseError):
        fetch(make_client(lambda request: httpx.Response(200, text="<html>oops")))


def test_missing_results_raises_parse_error():
    with pytest.raises(CatalogParseError):
        fetch(make_client(lambda request: httpx.Response(200, json={"count": 0})))


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "missingno"},
        {"name": "missingno", "url": "https://pokeapi.test/api/v2/pokemon/"},
        {"name": "", "url": "https://pokeapi.test/api/v2/pokemon/0/"},
        {"name": "", "url": "https://pokeapi.test/api/v2/pokemon/5/"},
        {"name": "missingno", "url": 5},
    ],
)
def test_malformed_entry_raises_parse_error(entry):
    payload = {"results": [entry]}
    with pytest.raises(CatalogParseError):
        fetch(make_client(lambda request: httpx.Response(200, json=payload)))


def test_parse_errors_are_catalog_errors():
    assert issubclass(CatalogParseError, CatalogError)
    assert issubclass(AuthenticationError, CatalogError)
