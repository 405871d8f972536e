"""
Interactive configuration wizard.

The wizard either creates a new configuration or walks through an existing
one. For every field it offers the current value as the default answer; when
an existing value differs from the built-in default, both are shown side by
side so the operator can keep, reset or override it.
"""

import copy
import logging
import shutil
from typing import Optional

import click

from bender_config.config.settings import SECTIONS, Config, default
from bender_config.errors import ValidationError

logger = logging.getLogger(__name__)


def print_section_label(message: str) -> None:
    """Print a section label framed by rules across the terminal width."""
    width = min(shutil.get_terminal_size().columns, 80)
    click.echo('-' * width)
    click.echo(message.center(width))
    click.echo('-' * width)


def ask(config: Config, key: str, suggestion) -> None:
    """Prompt for one field until a valid value is entered, then set it."""
    while True:
        text = click.prompt(key, default=str(suggestion))
        try:
            config.set(key, config.parse_value(key, text))
            return
        except ValidationError as e:
            click.secho(f"  Error: {e}", fg='red', err=True)


def run_wizard(existing: Optional[Config] = None) -> Config:
    """Interactively build a Config.

    Args:
        existing: Config to update, or None to start from defaults

    Returns:
        A new Config; ``existing`` is not modified
    """
    defaults = default()
    config = copy.deepcopy(existing) if existing is not None else default()

    if existing is None:
        click.echo("Creating a new bender configuration.")
    else:
        click.echo("Updating the existing bender configuration.")

    for section_cls in SECTIONS:
        print_section_label(section_cls.name)
        for name in section_cls.field_names():
            key = f'{section_cls.name}.{name}'
            current = config.get(key)
            default_value = defaults.get(key)
            if existing is not None and current != default_value:
                click.echo(f"  existing: {current}   default: {default_value}")
            ask(config, key, current)

    logger.debug("Wizard finished")
    return config
