"""Subcommand modules for namectl.

Provides register_commands() which uses deferred imports to keep
``namectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from namectl.commands.corpus import corpus
    from namectl.commands.keys import keys
    from namectl.commands.zone import zone

    cli.add_command(zone)
    cli.add_command(corpus)
    cli.add_command(keys)

    # --- Standalone commands ---
    from namectl.commands.compile_cmd import compile_cmd
    from namectl.commands.lookup import lookup

    cli.add_command(compile_cmd)
    cli.add_command(lookup)
