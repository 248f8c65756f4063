# src/poketeam/services/team_service.py
import threading
from typing import List

from loguru import logger

from poketeam.clients.base_client import BaseCatalogClient
from poketeam.models.pokemon import Pokemon
from poketeam.models.team import MAX_TEAM_SIZE, Team, TeamRegistry


class TeamService:
    """Per-user Pokemon teams on top of a catalog client.

    Teams live in memory for the lifetime of the instance. Each user may hold
    up to ``MAX_TEAM_SIZE`` distinct Pokemon (distinct by ``id``), kept in the
    order they were added. Users without a recorded team have an empty one.
    """

    def __init__(self, catalog_client: BaseCatalogClient):
        self.catalog_client = catalog_client
        self._user_teams: TeamRegistry = {}
        self._lock = threading.Lock()

    async def get_catalog_list(self) -> List[Pokemon]:
        """Return the catalog client's Pokemon list unchanged.

        Errors raised by the client (``CatalogError`` and subclasses)
        propagate as-is.
        """
        return await self.catalog_client.get_pokemon_list()

    def get_user_team(self, user_id: str) -> Team:
        """Return a snapshot of the user's team; empty if they have none."""
        _check_user_id(user_id)
        with self._lock:
            return list(self._user_teams.get(user_id, []))

    def toggle_pokemon_in_team(self, user_id: str, pokemon: Pokemon) -> bool:
        """Add ``pokemon`` to the user's team, or remove it if already there.

        Membership is decided by ``Pokemon.id``. Returns False only when the
        Pokemon is absent and the team is full; nothing changes in that case.
        """
        _check_user_id(user_id)
        if not isinstance(pokemon, Pokemon):
            raise TypeError(
                f"pokemon must be a Pokemon, got {type(pokemon).__name__}"
            )

        with self._lock:
            team = self._user_teams.get(user_id, [])

            for index, member in enumerate(team):
                if member.id == pokemon.id:
                    del team[index]
                    logger.debug(
                        f"Removed Pokemon {pokemon.id} from team of user '{user_id}' "
                        f"({len(team)}/{MAX_TEAM_SIZE})"
                    )
                    return True

            if len(team) >= MAX_TEAM_SIZE:
                logger.info(
                    f"Team of user '{user_id}' is full; rejected Pokemon {pokemon.id}"
                )
                return False

            team.append(pokemon)
            self._user_teams[user_id] = team
            logger.debug(
                f"Added Pokemon {pokemon.id} to team of user '{user_id}' "
                f"({len(team)}/{MAX_TEAM_SIZE})"
            )
            return True

    def clear_team(self, user_id: str) -> None:
        """Reset the user's team to empty. Safe for users with no team."""
        _check_user_id(user_id)
        with self._lock:
            self._user_teams[user_id] = []
        logger.debug(f"Cleared team of user '{user_id}'")


def _check_user_id(user_id: str) -> None:
    if not isinstance(user_id, str):
        raise TypeError(f"user_id must be a string, got {type(user_id).__name__}")
