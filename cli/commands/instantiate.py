#!/usr/bin/env python3
"""
Instantiation Message Commands for tokenmsg CLI

Commands for checking token instantiation messages, inspecting their minting
configuration and exporting the message schema.
"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from cli.main import pass_context, CLIContext, decode_message, load_message_file
from tokenmsg.schema import InstantiateMsg
from validator.core import ConfigurationError, ValidationEngine, create_default_validator


@click.group()
@pass_context
def instantiate(ctx: CLIContext):
    """
    Instantiation message commands.

    Validate messages and inspect their minting configuration.
    """
    ctx.logger.debug("Instantiate command group invoked")


def _build_engine(ctx: CLIContext) -> ValidationEngine:
    try:
        return create_default_validator(ctx.validator_config())
    except ConfigurationError as e:
        raise click.ClickException(f"Invalid validator configuration: {e}") from e


@instantiate.command('validate')
@click.argument('msg_files', nargs=-1, required=True, type=click.Path(dir_okay=False))
@pass_context
def validate(ctx: CLIContext, msg_files: Tuple[str, ...]):
    """
    Validate one or more instantiation messages.

    Each file holds a JSON or YAML message. Checks run in order (name,
    symbol, decimals) and only the first failure is reported. Exits with
    status 1 if any message is rejected.

    Examples:
        tokenmsg instantiate validate msg.json
        tokenmsg -o json instantiate validate a.json b.yml
    """
    engine = _build_engine(ctx)

    results = []
    rejected = 0
    for msg_file in msg_files:
        msg = decode_message(load_message_file(msg_file), source=msg_file)
        context = engine.validate_instantiate(msg)
        if context.has_errors():
            rejected += 1
        results.append((msg_file, context))

    if len(results) == 1:
        _, context = results[0]
        ctx.output(context.get_summary())
    else:
        ctx.output([
            {
                "file": Path(msg_file).name,
                "symbol": context.msg.symbol,
                "result": context.get_summary()["validation_result"],
                "error": context.error_message,
            }
            for msg_file, context in results
        ])

    if rejected:
        for msg_file, context in results:
            if context.has_errors():
                click.echo(f"Rejected {msg_file}: {context.error_message}", err=True)
        sys.exit(1)

    click.echo(f"{len(results)} instantiate message(s) valid", err=True)


@instantiate.command('cap')
@click.argument('msg_file', type=click.Path(dir_okay=False))
@pass_context
def cap(ctx: CLIContext, msg_file: str):
    """
    Show the supply cap and minting policy of a message.

    The cap is reported as "-" both when minting is disabled and when the
    minter is uncapped; the minting policy tells the two apart.
    """
    msg = decode_message(load_message_file(msg_file), source=msg_file)
    supply_cap = msg.get_cap()

    ctx.output({
        "minting_policy": msg.minting_policy().value,
        "minter": msg.mint.minter if msg.mint else None,
        "cap": str(supply_cap) if supply_cap is not None else None,
    })


@instantiate.command('schema')
@click.option('--mode', type=click.Choice(['validation', 'serialization']),
              default='validation', help='Schema for decoding or for encoding')
@click.option('--output-file', type=click.Path(dir_okay=False),
              help='Write the schema to a file instead of stdout')
@pass_context
def schema(ctx: CLIContext, mode: str, output_file: Optional[str]):
    """Print the JSON schema of the instantiation message."""
    document = InstantiateMsg.model_json_schema(mode=mode)

    if output_file:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(document, f, indent=2)
        ctx.logger.info(f"Schema written to {path}")
        click.echo(f"Schema written to {path}", err=True)
        return

    ctx.output(document, "json")
