import sys
import argparse
import asyncio
from typing import List

# --- Settings/Logging ---
from poketeam.logging.setup import setup_logging
from poketeam.config.settings import settings

setup_logging()

from loguru import logger

# --- Catalog and Team Service ---
from poketeam.clients.base_client import CatalogError
from poketeam.clients.pokeapi_client import PokeApiClient
from poketeam.models.pokemon import Pokemon
from poketeam.models.team import MAX_TEAM_SIZE
from poketeam.services.team_service import TeamService

from rich import print
from rich.panel import Panel
from rich.table import Table


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch the Pokemon catalog and build a team for a user."
    )
    parser.add_argument("--user", default="trainer", help="User id owning the team")
    parser.add_argument(
        "--toggle",
        nargs="*",
        default=[],
        metavar="NAME",
        help="Pokemon names to toggle in the user's team, in order",
    )
    parser.add_argument(
        "--show",
        type=int,
        default=20,
        help="Number of catalog entries to print (0 to hide the catalog)",
    )
    return parser.parse_args(argv)


def render_catalog(pokemon_list: List[Pokemon], limit: int) -> Table:
    table = Table(title=f"Pokemon catalog ({len(pokemon_list)} entries)")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("URL", style="dim")
    for pokemon in pokemon_list[:limit]:
        table.add_row(str(pokemon.id), pokemon.name, pokemon.url)
    return table


def render_team(user_id: str, team: List[Pokemon]) -> Panel:
    if team:
        body = "\n".join(f"{i + 1}. {p.name} (#{p.id})" for i, p in enumerate(team))
    else:
        body = "[dim]No Pokemon yet[/dim]"
    return Panel(body, title=f"Team of {user_id} ({len(team)}/{MAX_TEAM_SIZE})")


async def main(argv: List[str]) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    logger.info(f"Starting Poketeam against {settings.pokeapi_base_url}")

    client = PokeApiClient()
    service = TeamService(client)
    try:
        try:
            pokemon_list = await service.get_catalog_list()
        except CatalogError as e:
            logger.error(f"Could not retrieve the Pokemon catalog: {e}")
            return 1

        if args.show > 0:
            print(render_catalog(pokemon_list, args.show))

        by_name = {p.name: p for p in pokemon_list}
        for name in args.toggle:
            pokemon = by_name.get(name.lower())
            if pokemon is None:
                logger.warning(f"Unknown Pokemon '{name}', skipping.")
                continue
            if service.toggle_pokemon_in_team(args.user, pokemon):
                logger.success(f"Toggled {pokemon.name} for {args.user}.")
            else:
                logger.warning(
                    f"Team of {args.user} is full, could not add {pokemon.name}."
                )

        print(render_team(args.user, service.get_user_team(args.user)))
        return 0
    finally:
        await client.close()


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main(sys.argv[1:])))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
