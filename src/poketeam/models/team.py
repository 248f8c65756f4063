# src/poketeam/models/team.py
from typing import Dict, List

from .pokemon import Pokemon

MAX_TEAM_SIZE = 6

# Ordered by insertion, unique by Pokemon.id, at most MAX_TEAM_SIZE members
Team = List[Pokemon]

# user id -> Team; a missing key means an empty team
TeamRegistry = Dict[str, Team]
