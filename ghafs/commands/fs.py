"""
Release tree commands for ghafs.

Browse and read a repository's releases through the same tree the
mount serves, without mounting anything.
"""

import sys
import json

import click
from rich.console import Console
from rich.table import Table

from ..api import build_tree
from ..cli_utils import add_common_options, handle_errors, load_settings

console = Console()


def format_size(size: int) -> str:
    """Format a byte count for display."""
    if size < 1024:
        return f"{size}B"
    elif size < 1024 * 1024:
        return f"{size/1024:.1f}KB"
    return f"{size/(1024*1024):.1f}MB"


def _entry(node) -> dict:
    attrs = node.attributes()
    return {
        'name': node.name,
        'type': 'directory' if attrs.is_dir else 'file',
        'size': None if attrs.is_dir else attrs.size,
        'modified': attrs.mtime.isoformat(),
    }


@click.command('ls')
@add_common_options('repo')
@click.argument('path', default='/')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
@add_common_options('token', 'verbose')
@handle_errors
def ls_handler(repo, path, json_output, token, verbose):
    """List a directory of the release tree.

    PATH is "/" for the list of release tags, or "/TAG" for the
    assets of one release.

    Examples:

    \b
        ghafs ls owner/repo
        ghafs ls owner/repo /v1.0 --json
    """
    _, settings = load_settings(token, verbose)
    owner, name = repo
    node = build_tree(owner, name, settings).resolve(path)

    if not node.attributes().is_dir:
        entries = [_entry(node)]
    else:
        entries = [_entry(child) for child in node.children()]

    if json_output:
        for entry in entries:
            print(json.dumps(entry, ensure_ascii=False))
        return

    table = Table(show_header=True, header_style="bold cyan", title=f"{owner}/{name}:{path}")
    table.add_column("Name", style="green")
    table.add_column("Type", style="blue")
    table.add_column("Size", justify="right", style="dim")
    table.add_column("Modified", style="dim")

    for entry in entries:
        icon = '📁' if entry['type'] == 'directory' else '📄'
        size_str = format_size(entry['size']) if entry['size'] is not None else ''
        table.add_row(f"{icon} {entry['name']}", entry['type'], size_str, entry['modified'])

    console.print(table)


@click.command('cat')
@add_common_options('repo')
@click.argument('path')
@click.option('-o', '--output', type=click.Path(dir_okay=False, writable=True),
              help='Write content to a file instead of stdout')
@add_common_options('token', 'verbose')
@handle_errors
def cat_handler(repo, path, output, token, verbose):
    """Print the content of a release asset.

    Examples:

    \b
        ghafs cat owner/repo /v1.0/checksums.txt
        ghafs cat owner/repo /v1.0/app.tar.gz -o app.tar.gz
    """
    _, settings = load_settings(token, verbose)
    owner, name = repo
    content = build_tree(owner, name, settings).resolve(path).read()

    if output:
        with open(output, 'wb') as f:
            f.write(content)
        click.echo(f"Wrote {len(content)} bytes to {output}", err=True)
    else:
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
