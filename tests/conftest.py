"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, Mock

import pytest

from poketeam.clients.base_client import BaseCatalogClient
from poketeam.models.pokemon import Pokemon
from poketeam.services.team_service import TeamService

POKEAPI_URL = "https://pokeapi.co/api/v2/pokemon/{}/"

STARTERS = [
    (1, "bulbasaur"),
    (2, "ivysaur"),
    (3, "venusaur"),
    (4, "charmander"),
    (5, "charmeleon"),
    (6, "charizard"),
    (7, "squirtle"),
    (8, "wartortle"),
]


def make_pokemon(id: int, name: str) -> Pokemon:
    return Pokemon(id=id, name=name, url=POKEAPI_URL.format(id))


@pytest.fixture
def pokedex():
    """Pokemon #1-#8 keyed by name."""
    return {name: make_pokemon(id, name) for id, name in STARTERS}


@pytest.fixture
def catalog_client():
    """A catalog client whose get_pokemon_list is an AsyncMock."""
    client = Mock(spec=BaseCatalogClient)
    client.get_pokemon_list = AsyncMock()
    return client


@pytest.fixture
def service(catalog_client):
    """A fresh TeamService per test."""
    return TeamService(catalog_client)
