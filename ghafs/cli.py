#!/usr/bin/env python3

import click

from ghafs.commands.mount import mount_handler
from ghafs.commands.fs import ls_handler, cat_handler
from ghafs.commands.config import config_cmd


@click.group()
@click.version_option(package_name='ghafs')
def cli():
    """ghafs - GitHub release assets as a read-only filesystem.

    Mounts the releases of a repository so that each release tag is a
    directory and each release asset is a file inside it.
    """
    pass


cli.add_command(mount_handler, name='mount')
cli.add_command(ls_handler, name='ls')
cli.add_command(cat_handler, name='cat')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
