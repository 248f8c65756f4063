# src/poketeam/utils/misc_utils.py
import re

_TRAILING_ID = re.compile(r"/(\d+)/?$")


def parse_resource_id(url: str) -> int:
    """Extracts the numeric id from a PokeAPI resource URL.

    ``https://pokeapi.co/api/v2/pokemon/25/`` -> ``25``. Raises ValueError if
    the URL does not end in an integer path segment.
    """
    if not isinstance(url, str):
        raise TypeError(f"Resource URL must be a string, got {type(url).__name__}")
    match = _TRAILING_ID.search(url.strip())
    if not match:
        raise ValueError(f"No resource id found in URL: {url!r}")
    return int(match.group(1))
