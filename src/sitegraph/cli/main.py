"""
sitegraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import build, explore, roots, stats, view


@click.group()
@click.version_option(package_name="sitegraph")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """sitegraph: Semantic graph explorer for site maps.

    Builds a typed graph from a sitemap and extracts focused
    neighborhoods of it.

    \b
    Quick Start:
      sitegraph build sitemap.xml
      sitegraph roots
      sitegraph explore blog --depth 2
      sitegraph view blog --output blog.html
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(build.build)
main.add_command(roots.roots)
main.add_command(explore.explore)
main.add_command(view.view)
main.add_command(stats.stats)

if __name__ == "__main__":
    main()
