"""
Command-line interface for bender-config.

Commands:
    config: Run the configuration wizard
    config init: Create a default configuration file
    config show: Show the configuration file
    config get: Get a key (or a whole section) from the configuration
    config set: Set a key in the configuration file
    config path: Print the path of the configuration file
    config reset: Reset the configuration to its default values
    config check: Check that the configured paths are writable

Example:
    $ bender-config config init
    $ bender-config config set max_workers 16
    $ bender-config -c ./bender.yaml config show
"""

import logging
import os
import sys

import click

from bender_config import __version__
from bender_config.config import Config, default, load, save, serialize
from bender_config.config.codec import dump
from bender_config.errors import ConfigError, NotFoundError, UnknownKeyError
from bender_config.utils import setup_logging
from bender_config.wizard import run_wizard

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = '/etc/bender/config.yaml'


def fail(error: ConfigError) -> None:
    """Report a library error and exit with status 1."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def load_for_reading(ctx: click.Context) -> Config:
    """Load the config and apply BENDER_* environment overrides.

    Unless -v or -q was given, the log level follows the config.
    """
    config = load(ctx.obj['config_path'])
    config.update_from_env()
    if not ctx.obj['log_level_fixed']:
        setup_logging(config.logging.level)
    return config


@click.group()
@click.option('--config', '-c', 'config_path', type=click.Path(dir_okay=False),
              envvar='BENDER_CONFIG', default=DEFAULT_CONFIG_PATH, show_default=True,
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-essential output')
@click.version_option(__version__, prog_name='bender-config')
@click.pass_context
def main(ctx, config_path, verbose, quiet):
    """bender-config - a cli to the bender configuration file."""
    ctx.ensure_object(dict)

    if quiet:
        log_level = 'ERROR'
    elif verbose:
        log_level = 'DEBUG'
    else:
        log_level = 'WARNING'

    setup_logging(log_level)

    ctx.obj['config_path'] = config_path
    ctx.obj['log_level_fixed'] = quiet or verbose


@main.group(invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Run the configuration wizard, or one of the subcommands below."""
    if ctx.invoked_subcommand is not None:
        return

    path = ctx.obj['config_path']
    try:
        existing = load(path)
    except NotFoundError:
        existing = None
    except ConfigError as e:
        fail(e)

    updated = run_wizard(existing)
    try:
        save(updated, path)
    except ConfigError as e:
        fail(e)
    click.echo(f"Saved configuration to {path}")


@config.command()
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing file')
@click.pass_context
def init(ctx, force):
    """Create a configuration file with default values."""
    path = ctx.obj['config_path']
    if os.path.exists(path) and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    config_obj = default()
    config_obj.paths.config = os.path.abspath(path)
    try:
        save(config_obj, path)
    except ConfigError as e:
        fail(e)
    click.echo(f"Created {path}")


@config.command()
@click.pass_context
def show(ctx):
    """Show the configuration file."""
    try:
        config_obj = load_for_reading(ctx)
    except ConfigError as e:
        fail(e)
    click.echo(serialize(config_obj), nl=False)


@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a key from the configuration file.

    KEY is either 'section.field', a unique field name such as 'max_workers',
    or a section name such as 'paths' to print the whole section.
    """
    try:
        config_obj = load_for_reading(ctx)
    except ConfigError as e:
        fail(e)

    data = config_obj.to_dict()
    if key in data:
        click.echo(dump(data[key]), nl=False)
        return

    try:
        click.echo(config_obj.get(key))
    except UnknownKeyError as e:
        fail(e)


@config.command(name='set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a key in the configuration file.

    The file is created with defaults if it does not exist yet.
    """
    path = ctx.obj['config_path']
    try:
        try:
            config_obj = load(path)
        except NotFoundError:
            logger.info("%s does not exist, starting from defaults", path)
            config_obj = default()
        config_obj.set(key, config_obj.parse_value(key, value))
        save(config_obj, path)
    except ConfigError as e:
        fail(e)

    click.echo(f"{key} = {config_obj.get(key)}")


@config.command()
@click.pass_context
def path(ctx):
    """Print the path of the configuration file."""
    click.echo(os.path.abspath(ctx.obj['config_path']))


@config.command()
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def reset(ctx, yes):
    """Reset the configuration to its default values."""
    config_path = ctx.obj['config_path']
    if not yes:
        click.confirm(f"Reset {config_path} to defaults?", default=False, abort=True)

    try:
        save(default(), config_path)
    except ConfigError as e:
        fail(e)
    click.echo(f"Reset {config_path} to defaults")


@config.command()
@click.pass_context
def check(ctx):
    """Check that the configured paths are writable."""
    try:
        config_obj = load_for_reading(ctx)
    except ConfigError as e:
        fail(e)

    all_ok = True
    for key, result in config_obj.check_paths().items():
        all_ok = all_ok and result
        label = click.style('  OK  ', fg='green') if result else click.style(' FAIL ', fg='red')
        click.echo(f"{label} {key}: {config_obj.get(key)}")

    if not all_ok:
        sys.exit(1)


if __name__ == '__main__':
    main()
