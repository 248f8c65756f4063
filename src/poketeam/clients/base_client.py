from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from poketeam.config.settings import settings
from poketeam.models.pokemon import Pokemon

# Transient statuses; anything else in 4xx/5xx fails immediately
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class CatalogError(Exception):
    """Raised when the Pokemon catalog cannot be retrieved."""

    pass


class AuthenticationError(CatalogError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RateLimitError(CatalogError):
    """Exception raised for rate limit errors (429)."""

    pass


class CatalogParseError(CatalogError):
    """The catalog answered, but the payload is not a usable Pokemon list."""

    pass


class BaseCatalogClient(ABC):
    """Abstract base class for Pokemon catalog clients."""

    source: str = "unknown"

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    @abstractmethod
    async def get_pokemon_list(self) -> List[Pokemon]:
        """Retrieve the full Pokemon list.

        Returns:
            The catalog entries, in the order the remote API lists them.

        Raises:
            CatalogError: if the list could not be fetched or parsed.
        """
        pass

    @retry(
        stop=stop_after_attempt(4),  # 3 retries, 4 attempts total
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (httpx.RequestError, httpx.HTTPStatusError, RateLimitError)
        ),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request with retry logic."""
        logger.debug(f"Making request {method} {url} (params: {params})")
        try:
            response = await self.client.request(
                method,
                url,
                headers=headers,
                params=params,
                **kwargs,
            )

            if response.status_code in {401, 403}:
                logger.warning(
                    f"Authentication error ({response.status_code}) for {self.source} at {url}."
                )
                raise AuthenticationError(
                    f"Authentication failed ({response.status_code}) for {self.source}"
                )

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After")
                logger.warning(
                    f"Rate limit hit (429) for {self.source} at {url}. Retry-After: {retry_after}"
                )
                raise RateLimitError(f"Rate limited by {self.source}")

            response.raise_for_status()
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        except CatalogError:
            raise
        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    f"Retrying request for {self.source} due to status {e.response.status_code}: {e}"
                )
                raise  # tenacity retries it
            logger.error(
                f"HTTP error during request for {self.source}: {e.response.status_code} - {e}"
            )
            raise CatalogError(f"HTTP error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning(f"Request error for {self.source}, retrying: {e}")
            raise

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source}")
