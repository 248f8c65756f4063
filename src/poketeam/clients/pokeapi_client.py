# src/poketeam/clients/pokeapi_client.py

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from poketeam.config.settings import settings
from poketeam.models.pokemon import Pokemon
from poketeam.utils.misc_utils import parse_resource_id
from .base_client import BaseCatalogClient, CatalogError, CatalogParseError


class PokeApiClient(BaseCatalogClient):
    """Catalog client backed by the public PokeAPI list endpoint."""

    source: str = "PokeAPI"

    def __init__(
        self,
        *args,
        base_url: Optional[str] = None,
        limit: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.base_url = (base_url or settings.pokeapi_base_url).rstrip("/")
        self.limit = limit or settings.pokemon_list_limit
        logger.debug(
            f"PokeApiClient initialized for {self.base_url} (limit={self.limit})."
        )

    async def get_pokemon_list(self) -> List[Pokemon]:
        """Fetch the Pokemon list in a single request and map it to models."""
        url = f"{self.base_url}/pokemon"
        logger.info(f"Fetching Pokemon list from {self.source}")

        try:
            response = await self._make_request(
                method="GET",
                url=url,
                params={"limit": self.limit, "offset": 0},
            )
        except CatalogError:
            raise
        except httpx.HTTPError as e:
            # Retries exhausted on a network error or retryable status
            logger.error(f"Failed to fetch Pokemon list from {self.source}: {e}")
            raise CatalogError(
                f"Failed request to {self.source} after multiple retries"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Error parsing {self.source} response JSON: {e}")
            logger.debug(f"Raw response content: {getattr(response, 'text', 'N/A')}")
            raise CatalogParseError(f"Invalid JSON from {self.source}") from e

        pokemon_list = self._parse_results(payload)
        logger.info(
            f"Finished fetching from {self.source}. Returning {len(pokemon_list)} Pokemon."
        )
        return pokemon_list

    def _parse_results(self, payload: Any) -> List[Pokemon]:
        """Maps ``{"results": [{"name", "url"}, ...]}`` to Pokemon entries."""
        if not isinstance(payload, dict) or not isinstance(
            payload.get("results"), list
        ):
            raise CatalogParseError(
                f"Missing 'results' list in {self.source} response"
            )

        pokemon_list = []
        for item in payload["results"]:
            pokemon_list.append(self._parse_entry(item))
        return pokemon_list

    def _parse_entry(self, item: Dict[str, Any]) -> Pokemon:
        try:
            url = item["url"]
            if isinstance(url, str):
                url = url.strip()
            return Pokemon(id=parse_resource_id(url), name=item["name"], url=url)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed Pokemon entry from {self.source}: {item!r}")
            raise CatalogParseError(
                f"Malformed Pokemon entry from {self.source}: {item!r}"
            ) from e
