# src/poketeam/models/pokemon.py
from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class Pokemon(BaseModel):
    """A single catalog entry as returned by the PokeAPI list endpoint."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    id: PositiveInt
    name: str = Field(..., min_length=1)
    url: str  # Detail resource, e.g. https://pokeapi.co/api/v2/pokemon/1/
