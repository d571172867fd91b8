#!/usr/bin/env python3
"""
eakwell CLI

Small command line front end for the request and id helpers.
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click

from . import __version__
from .ajax import AjaxOptions, ajax
from .config import load_config, set_config, setup_logging
from .errors import EakwellError
from .text import uuid as make_uuid

logger = logging.getLogger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to a YAML configuration file')
@click.version_option(version=__version__, prog_name='eakwell')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, config_path: Optional[str]):
    """eakwell utility commands"""
    try:
        config = load_config(config_path)
    except EakwellError as e:
        raise click.ClickException(str(e))

    if debug:
        config.log_level = 'DEBUG'
    elif verbose:
        config.log_level = 'INFO'
    else:
        # Production mode - only show warnings and errors
        config.log_level = 'WARNING'

    set_config(config)
    setup_logging(config)
    ctx.obj = config


@cli.command()
@click.option('--count', '-n', default=1, show_default=True, type=click.IntRange(min=1),
              help='Number of ids to print')
def uuid(count: int):
    """Print random (version 4) UUIDs"""
    for _ in range(count):
        click.echo(make_uuid())


@cli.command()
@click.argument('url')
@click.option('--verb', type=click.Choice(['GET', 'POST', 'PUT', 'DELETE'], case_sensitive=False),
              default='GET', show_default=True, help='HTTP method')
@click.option('--data', help='JSON payload (query for GET, body for POST)')
@click.option('--timeout', type=float, help='Request timeout in seconds')
@click.option('--response-type', type=click.Choice(['json', 'text']), default='json',
              show_default=True, help='How to decode the response body')
def fetch(url: str, verb: str, data: Optional[str], timeout: Optional[float], response_type: str):
    """Request URL and print the response"""
    try:
        payload = json.loads(data) if data else None
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint='--data')

    options = AjaxOptions(
        url=url,
        verb=verb.upper(),
        data=payload,
        timeout=timeout,
        response_type=response_type
    )

    try:
        result = asyncio.run(ajax(options))
    except EakwellError as e:
        logger.debug(f"Request failed: {e.to_dict()}")
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if response_type == 'json':
        click.echo(json.dumps(result, indent=2, default=str))
    else:
        click.echo(result)


def main():
    """Main entry point"""
    cli()


if __name__ == '__main__':
    main()
