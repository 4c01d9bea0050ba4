#!/usr/bin/env python3
"""
Configuration Management Commands for tokenmsg CLI

Commands for inspecting the effective configuration and available profiles.
"""

from typing import Optional

import click

from cli.config import DEFAULT_CONFIG, ENV_PREFIX, PROFILES
from cli.main import pass_context, CLIContext


@click.group()
@pass_context
def config(ctx: CLIContext):
    """
    Configuration management commands.

    Show the merged configuration and the available profiles.
    """
    ctx.logger.debug("Config command group invoked")


@config.command('show')
@click.option('--key', help='Dotted key to show, e.g. cli.output_format')
@click.option('--sources', 'show_sources', is_flag=True,
              help='List the configuration sources that were applied')
@pass_context
def show(ctx: CLIContext, key: Optional[str], show_sources: bool):
    """Show the effective configuration."""
    if show_sources:
        ctx.output(ctx.config_manager.sources)
        return

    if key:
        value = ctx.get_config(key)
        if value is None:
            raise click.BadParameter(f"Unknown configuration key: {key}", param_hint="--key")
        ctx.output({key: value})
        return

    ctx.output(ctx.config, "yaml" if ctx.output_format == "table" else None)


@config.command('profiles')
@pass_context
def profiles(ctx: CLIContext):
    """List configuration profiles and what they override."""
    rows = {}
    for name, overrides in sorted(PROFILES.items()):
        changed = [
            f"{section}.{option}={value}"
            for section, options in overrides.items()
            for option, value in options.items()
            if DEFAULT_CONFIG.get(section, {}).get(option) != value
        ]
        rows[name] = ", ".join(changed) or "-"

    ctx.output(rows)
    ctx.logger.debug(f"Environment overrides use the {ENV_PREFIX} prefix")
