"""CLI for registering the bot's application commands with Discord.

Usage:
    python -m reaction_csv.register
    python -m reaction_csv.register --guild 123456789012345678
    python -m reaction_csv.register --dry-run

Bulk-overwrites the command set, so commands removed from
reaction_csv.commands are unregistered too.
"""

from __future__ import annotations

import argparse
import json
import sys

import httpx

from reaction_csv.commands import registrable_commands
from reaction_csv.config import Settings, settings


def commands_url(cfg: Settings, guild_id: str | None = None) -> str:
    base = f"{cfg.api_base.rstrip('/')}/applications/{cfg.application_id}"
    if guild_id:
        return f"{base}/guilds/{guild_id}/commands"
    return f"{base}/commands"


def register_commands(cfg: Settings, guild_id: str | None = None) -> list[dict]:
    """PUT the command list; returns Discord's registered command objects."""
    response = httpx.put(
        commands_url(cfg, guild_id),
        json=registrable_commands(),
        headers={"Authorization": f"Bot {cfg.token}"},
        timeout=30.0,
    )
    response.raise_for_status()
    return response.json()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="reaction-csv-register",
        description="Register reaction CSV bot commands with Discord",
    )
    parser.add_argument("--guild", help="Register to one guild instead of globally")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the command payload without calling Discord",
    )
    args = parser.parse_args(argv)

    if args.dry_run:
        print(json.dumps(registrable_commands(), indent=2))
        return

    if not settings.application_id or not settings.token:
        print(
            "ERROR: DISCORD_APPLICATION_ID and DISCORD_TOKEN must be set",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        registered = register_commands(settings, args.guild)
    except httpx.HTTPStatusError as e:
        print(
            f"ERROR: Discord returned HTTP {e.response.status_code}: {e.response.text}",
            file=sys.stderr,
        )
        sys.exit(1)

    scope = f"guild {args.guild}" if args.guild else "global"
    print(f"Registered {len(registered)} commands ({scope}):")
    for command in registered:
        print(f"  {command.get('name')}")


if __name__ == "__main__":
    main()
