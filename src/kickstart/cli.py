"""Top-level Click group for the kickstart CLI."""

import click

from kickstart.scaffold.cli import apply_cmd


@click.group()
def main():
    """kickstart - customize a freshly generated Rails application."""


main.add_command(apply_cmd)
