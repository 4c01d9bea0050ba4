#!/usr/bin/env python3
"""
Token Instantiation Message - Command Line Interface

A CLI for checking fungible-token instantiation messages before they are
submitted, inspecting their minting configuration and exporting the message
schema.
"""

import functools
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml
from pydantic import ValidationError as DecodeError

from cli.config import ConfigurationError, ConfigurationManager, PROFILES
from cli.output import OUTPUT_FORMATS, OutputFormatter
from tokenmsg.schema import InstantiateMsg

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class MessageDecodeError(click.ClickException):
    """Raised when a message file cannot be read or decoded."""
    exit_code = 2


# Global CLI context
class CLIContext:
    """Global CLI context for sharing state across commands."""

    def __init__(self):
        self.config_file: Optional[str] = None
        self.profile: Optional[str] = None
        self.output_format: str = "table"
        self.verbose: int = 0
        self.config: Dict[str, Any] = {}
        self.config_manager: Optional[ConfigurationManager] = None
        self.logger: logging.Logger = logging.getLogger('tokenmsg-cli')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }

        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(LOG_FORMAT)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        for name in ('tokenmsg-cli', 'validator'):
            logger = logging.getLogger(name)
            for old_handler in list(logger.handlers):
                logger.removeHandler(old_handler)
            logger.addHandler(handler)
            logger.setLevel(level)
            logger.propagate = False

        self.logger = logging.getLogger('tokenmsg-cli')

    def load_config(self):
        """Load hierarchical configuration."""
        self.config_manager = ConfigurationManager(self.config_file, self.profile)
        try:
            self.config = self.config_manager.load()
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e
        self.logger.debug(f"Configuration sources: {', '.join(self.config_manager.sources)}")

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key with fallback to default."""
        if self.config_manager is None:
            return default
        return self.config_manager.get(key, default)

    def validator_config(self) -> Dict[str, Any]:
        """Validator engine settings, with CLI verbosity taking precedence."""
        config = dict(self.get_config('validator', {}) or {})
        if self.verbose:
            config['log_level'] = 'DEBUG' if self.verbose >= 2 else 'INFO'
        return config

    def output(self, data: Any, format_override: Optional[str] = None):
        """Output data in specified format."""
        formatter = OutputFormatter(format_override or self.output_format)
        click.echo(formatter.format(data))


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


@click.group(context_settings={'help_option_names': ['-h', '--help']},
             invoke_without_command=True)
@click.option('--config-file', '-c',
              type=click.Path(dir_okay=False),
              help='Path to configuration file')
@click.option('--profile',
              type=click.Choice(sorted(PROFILES)),
              help='Configuration profile')
@click.option('--output-format', '-o',
              type=click.Choice(OUTPUT_FORMATS),
              default=None,
              help='Output format (defaults to cli.output_format)')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.option('--version',
              is_flag=True,
              help='Show version information')
@pass_context
def cli(ctx: CLIContext, config_file: Optional[str], profile: Optional[str],
        output_format: Optional[str], verbose: int, version: bool):
    """
    Token instantiation message tools.

    Check fungible-token instantiation messages (name, symbol, decimals)
    before submitting them, and inspect their minting configuration.

    Examples:
        tokenmsg instantiate validate msg.json
        tokenmsg -o json instantiate cap msg.yml
        tokenmsg instantiate schema
        tokenmsg config show
    """

    if version:
        from cli import __version__
        click.echo(f"tokenmsg v{__version__}")
        sys.exit(0)

    ctx.config_file = config_file
    ctx.profile = profile

    ctx.verbose = verbose
    ctx.setup_logging()
    ctx.load_config()

    if not verbose:
        configured_verbose = ctx.get_config('cli.verbose', 0) or 0
        try:
            ctx.verbose = int(configured_verbose)
        except (TypeError, ValueError):
            raise click.BadParameter(
                f"Verbosity in configuration must be an integer: {configured_verbose}",
                param_hint="cli.verbose"
            )
        if ctx.verbose:
            ctx.setup_logging()

    configured_format = ctx.get_config('cli.output_format', 'table')
    ctx.output_format = output_format or configured_format
    if ctx.output_format not in OUTPUT_FORMATS:
        raise click.BadParameter(
            f"Unsupported output format in configuration: {ctx.output_format}",
            param_hint="cli.output_format"
        )

    ctx.logger.debug("CLI initialized with context")

    click_ctx = click.get_current_context()
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())


# Error handling wrapper
def handle_cli_error(func):
    """Decorator to handle CLI errors gracefully."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("\nOperation cancelled by user.", err=True)
            sys.exit(130)
        except Exception as e:
            ctx = None
            current = click.get_current_context(silent=True)
            if current is not None:
                ctx = current.find_object(CLIContext)

            click.echo(f"Error: {e}", err=True)
            if ctx and ctx.verbose >= 2:
                click.echo(traceback.format_exc(), err=True)
            else:
                click.echo("Use -vv for detailed error information.", err=True)

            sys.exit(1)

    return wrapper


def load_message_file(file_path: str) -> Dict[str, Any]:
    """Load a raw instantiation message from a JSON or YAML file."""
    path = Path(file_path)
    if not path.exists():
        raise MessageDecodeError(f"File not found: {file_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix in ['.yml', '.yaml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise MessageDecodeError(f"Invalid JSON in {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise MessageDecodeError(f"Invalid YAML in {file_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MessageDecodeError(f"Cannot read {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise MessageDecodeError(f"{file_path} must contain a single message object")
    return data


def decode_message(data: Dict[str, Any], source: str = "message") -> InstantiateMsg:
    """Decode a raw message, turning decoding failures into CLI errors."""
    try:
        return InstantiateMsg.model_validate(data)
    except DecodeError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise MessageDecodeError(f"Invalid instantiate message in {source}: {problems}") from e


# Command registration
def register_commands():
    """Register all command modules with the main CLI."""
    from cli.commands.instantiate import instantiate
    from cli.commands.config import config

    cli.add_command(instantiate)
    cli.add_command(config)


def main():
    """Console script entry point."""
    register_commands()
    handle_cli_error(cli)(prog_name='tokenmsg')


# Main entry point
if __name__ == '__main__':
    main()
