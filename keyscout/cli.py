# === FILE: keyscout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point of KeyScout.

Commands:
  find      Scan one JavaScript URL for .post(url).set("x-api-key", key) pairs
  crawl     Scan every external script of a page
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file

find options:
  --unique            Keep only unique [url, key] pairs
  --json              Print JSON instead of text
  --context[=N]       Show N characters of surrounding context (40 without a value)
  --timeout SEC       Request timeout

crawl options:
  --json, --context, --unique, --timeout as above
  --output, -o        Write results to a timestamped file under captures/
  --html PATH         Also render an HTML report
  --concurrency N     Scripts scanned at the same time

Exit codes:
  find:  0 success, 2 missing URL, 3 fetch failure, 1 other errors
  crawl: 0 success (also when no scripts are found), 1 missing URL or fatal error

Example:
  keyscout crawl https://example.com --unique --context=20 -o
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from keyscout import __version__
from keyscout.config import load_config, with_overrides
from keyscout.crawler.fetcher import FetchError, fetch_text
from keyscout.engine import start_crawl
from keyscout.logger import DEFAULT_FORMAT, init_logging, logger
from keyscout.report.html_report import render_html
from keyscout.report.json_report import write_capture
from keyscout.report.text_report import render_text
from keyscout.scanner import scan

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

EXIT_ERROR = 1
EXIT_FETCH_FAILED = 3

DEFAULT_CONTEXT = 40


def print_error(message: str, code: int = EXIT_ERROR):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


def context_option(func):
    return click.option(
        '--context', 'context',
        type=click.IntRange(min=0),
        is_flag=False,
        flag_value=DEFAULT_CONTEXT,
        default=None,
        help=f'Characters of surrounding context ({DEFAULT_CONTEXT} without a value)'
    )(func)


def timeout_option(func):
    return click.option(
        '--timeout', 'timeout',
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help='Timeout for a single request (seconds)'
    )(func)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='KeyScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if omitted)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """KeyScout: find hard-coded x-api-key pairs in JavaScript."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=DEFAULT_FORMAT
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load config: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('find', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--unique', is_flag=True, help='Show only unique [url, key] pairs')
@click.option('--json', 'json_mode', is_flag=True, help='Output as JSON')
@context_option
@timeout_option
@click.pass_context
def find(ctx, url, unique, json_mode, context, timeout):
    """Scan the JavaScript at URL for .post/.set("x-api-key") pairs."""
    cfg = with_overrides(ctx.obj['config'], unique=unique or None, context=context, timeout=timeout)
    try:
        text = asyncio.run(fetch_text(url, cfg))
    except FetchError as e:
        print_error(f'Fetch failed: {e}', EXIT_FETCH_FAILED)

    try:
        pairs = scan(text, unique=cfg.unique, context=cfg.context)
    except Exception as e:
        logger.exception("Scan of %s failed", url)
        print_error(f'Scan failed: {e}')

    if json_mode:
        payload = {'url': url, 'count': len(pairs), 'pairs': [p.as_dict() for p in pairs]}
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    click.echo(render_text(url, pairs, unique=cfg.unique), nl=False)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url', required=False)
@click.option('--json', 'json_mode', is_flag=True, help='Report pairs as JSON')
@context_option
@click.option('--unique', is_flag=True, help='Show only unique [url, key] pairs')
@click.option(
    '--output', '-o', 'output',
    is_flag=True,
    help='Write results to a timestamped file instead of the console'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save an HTML report'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Scripts scanned at the same time'
)
@timeout_option
@click.pass_context
def crawl(ctx, root_url, json_mode, context, unique, output, html_output, concurrency, timeout):
    """Scan every <script src> of the page at ROOT_URL."""
    if not root_url:
        click.echo(ctx.get_usage(), err=True)
        print_error('Missing argument ROOT_URL.')

    cfg = with_overrides(
        ctx.obj['config'],
        unique=unique or None,
        context=context,
        concurrency=concurrency,
        timeout=timeout,
    )

    click.echo(f'Fetching scripts from: {root_url}')
    try:
        report = asyncio.run(start_crawl(root_url, cfg))
    except Exception as e:
        logger.error("Crawl of %s failed: %s", root_url, e)
        print_error(f'Fatal error: {e}')

    if not report.scripts:
        click.echo('No external script tags found.')
        return

    count = len(report.scripts)
    click.echo(f'Found {count} script{"s" if count != 1 else ""}:\n')
    for script in report.scripts:
        click.echo(f' • {script}')
    click.echo('')

    if not output:
        for outcome in report.outcomes:
            if not outcome.ok:
                click.echo(f'--- {outcome.url} ---\nError: {outcome.error}\n')
                continue
            element = outcome.as_dict(json_mode=json_mode, unique=cfg.unique)
            click.echo(json.dumps(element, ensure_ascii=False, indent=2) + '\n')
    else:
        try:
            saved = write_capture(report, cfg.output_dir, unique=cfg.unique)
        except OSError as e:
            logger.error("Writing capture failed: %s", e)
            print_error(f'Fatal error: {e}')
        click.echo(f'Results written to file: {saved}')

    if html_output:
        try:
            saved_html = render_html(report, cfg.template_dir, html_output)
        except Exception as e:
            print_error(f'Fatal error: failed to save HTML report: {e}')
        click.echo(f'HTML report: {saved_html}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
