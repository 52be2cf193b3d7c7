"""
pubscope CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import bundle, pom, resolve, why


@click.group()
@click.version_option(package_name="pubscope")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """pubscope: Publication scope resolution for multi-project builds.

    Decides which dependencies a published artifact declares, under which
    scope and version, and which ones are bundled into it.

    \b
    Quick Start:
      pubscope resolve -m pubscope.toml
      pubscope why com.example:lib
      pubscope pom > dependencies.xml
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(message)s",
        datefmt="[%X]"
    )


# Register commands
main.add_command(resolve.resolve)
main.add_command(why.why)
main.add_command(pom.pom)
main.add_command(bundle.bundle)

if __name__ == "__main__":
    main()
