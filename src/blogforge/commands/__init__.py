"""Subcommand modules for blogforge.

Provides register_commands() which uses deferred imports to keep
``blogforge --help`` fast as the codebase grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    4 groups (have subcommands) + 3 standalone commands.
    """
    # --- Groups ---
    from blogforge.commands.articles import articles
    from blogforge.commands.authors import authors
    from blogforge.commands.categories import categories
    from blogforge.commands.images import images

    cli.add_command(articles)
    cli.add_command(authors)
    cli.add_command(categories)
    cli.add_command(images)

    # --- Standalone commands ---
    from blogforge.commands.doctor import doctor, stats
    from blogforge.commands.init_cmd import init_cmd

    cli.add_command(doctor)
    cli.add_command(stats)
    cli.add_command(init_cmd)
