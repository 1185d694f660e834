"""
Mount command for ghafs.
"""

import click

from ..cli_utils import add_common_options, handle_errors, load_settings


@click.command('mount')
@add_common_options('repo')
@click.argument('mountpoint', type=click.Path(file_okay=False))
@add_common_options('token')
@click.option('--background', is_flag=True, help='Detach from the terminal after mounting')
@click.option('--single-thread', is_flag=True, help='Dispatch FUSE callbacks on one thread')
@click.option('--allow-other', is_flag=True, help='Allow other users to access the mount')
@add_common_options('verbose')
@handle_errors
def mount_handler(repo, mountpoint, token, background, single_thread, allow_other, verbose):
    """Mount the releases of OWNER/REPO at MOUNTPOINT.

    Each release appears as a directory named by its tag, containing
    one read-only file per release asset.

    Examples:

    \b
        ghafs mount torvalds/linux /mnt/linux-releases
        ls /mnt/linux-releases/v6.1
        fusermount -u /mnt/linux-releases
    """
    from ..mount import mount_release_fs

    config, settings = load_settings(token, verbose)
    mount_config = config.get('mount', {})
    owner, name = repo

    mount_release_fs(
        owner,
        name,
        mountpoint,
        settings,
        foreground=not background and mount_config.get('foreground', True),
        threads=not single_thread and mount_config.get('threads', True),
        allow_other=allow_other or mount_config.get('allow_other', False),
    )
