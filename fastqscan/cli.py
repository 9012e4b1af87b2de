#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for FastQScan.

This module provides the main CLI entry point and all subcommands for
FASTQ quality-control scanning.
"""

import json
import logging
import sys
import zlib
from pathlib import Path

import click
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError,
    load_config,
    log_level,
    save_config_template,
    validate_config,
)
from .utils.workflow_runner import MAX_MALFORMED_RECORDS, scan_files

logger = logging.getLogger(__name__)


def _configure_logging(config, verbose=False, quiet=False):
    """Configure root logging from the config, with CLI flag overrides."""
    level = log_level(config)
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    handlers = [logging.StreamHandler()]
    log_file = config['output']['logging']['log_file']
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _load_checked_config(config_file):
    """Load and validate a config file, exiting with status 1 on any problem."""
    try:
        config = load_config(Path(config_file) if config_file else None)
    except (ConfigValidationError, FileNotFoundError) as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)
    return config


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    FastQScan: fast and safe quality control for FASTQ files

    Computes per-read and per-position statistics (base quality, read
    quality, base composition, GC content and read lengths) in one pass
    and reports them as JSON.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Scan Command
# ============================================================================

@main.command()
@click.option('-1', '--read1', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='First FASTQ file (plain or .gz)')
@click.option('-2', '--read2', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Second FASTQ file (plain or .gz)')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the JSON report to this file instead of stdout')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (YAML)')
@click.pass_context
def scan(ctx, read1, read2, output, config_file):
    """Scan two FASTQ files and report all quality-control statistics."""
    ctx.ensure_object(dict)
    config = _load_checked_config(config_file)
    _configure_logging(config, ctx.obj.get('VERBOSE', False), ctx.obj.get('QUIET', False))

    logger.info(f"Read 1: {read1}")
    logger.info(f"Read 2: {read2}")

    try:
        reports, summaries = scan_files(
            [read1, read2],
            progress_interval=config['processing']['progress_interval'],
        )
    except (OSError, EOFError, zlib.error) as e:
        logger.error(f"Failed to read FASTQ input: {e}")
        click.echo(f"✗ Error reading FASTQ input: {e}", err=True)
        sys.exit(1)

    for summary in summaries:
        logger.debug(f"Scan summary: {summary.to_dict()}")
        if summary.halted:
            logger.warning(
                f"{summary.source}: stopped early after more than {MAX_MALFORMED_RECORDS} "
                f"malformed records; report covers {summary.records_processed:,} records"
            )

    try:
        payload = json.dumps(reports, indent=config['output']['json_indent'], allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialise report: {e}")
        click.echo(f"✗ Error serialising JSON report: {e}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(payload + "\n")
        logger.info(f"Report written to {output}")
    else:
        click.echo(payload)

    logger.info("Processing complete")


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='fastqscan_config.yaml',
              help='Output configuration file path')
def config_init(output):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating configuration template: {output}")

    try:
        save_config_template(Path(output))
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")
    config = _load_checked_config(config_file)

    click.echo("✓ Configuration is valid")
    click.echo(f"  Progress interval: {config['processing']['progress_interval']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    config = _load_checked_config(config_file)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nProcessing:")
    click.echo(f"  Progress interval: {config['processing']['progress_interval']} records")
    click.echo("\nOutput:")
    click.echo(f"  JSON indent: {config['output']['json_indent']}")
    click.echo(f"  Log level: {config['output']['logging']['level']}")
    click.echo(f"  Log file: {config['output']['logging']['log_file'] or '(none)'}")


if __name__ == '__main__':
    main()
