# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for SiteMapper.

Commands:
  crawl ROOT_URL [RATE]   Crawl a site and write its sitemap (RATE: requests/second, default 1)
  config                  Show the effective configuration

crawl options:
  --config PATH       YAML/JSON config file (CLI values take precedence)
  --output PATH       Sitemap file (default: sitemap.json, overwritten)
  --html PATH         Also render an HTML sitemap
  --template DIR      Directory with sitemap.html.j2
  --concurrency INT   Worker pool size (1 = depth-first order)
  --timeout SEC       Per-request timeout
  --deadline SEC      Overall crawl deadline
  --link-format FMT   "object" or "url"
  --pretty            Indent the JSON output
  --log-level LEVEL   DEBUG, INFO, ...
  --log-file PATH     Log file (stderr only if not set)
  --log-format FORMAT Log format string

Misc:
  --version, -v       Show the SiteMapper version

Example:
  site-mapper crawl https://example.com 2 --pretty --html sitemap.html
"""
import sys
import asyncio
import json
from pathlib import Path

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import COULD_NOT_PROCESS, URL_NOT_PROVIDED, start_crawl
from site_mapper.logger import DEFAULT_FORMAT, init_logging, logger
from site_mapper.report.json_report import render_json
from site_mapper.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)

def log_options(func):
    func = click.option(
        '--log-format', 'log_format',
        default=DEFAULT_FORMAT,
        show_default=True,
        help='Log format string'
    )(func)
    func = click.option(
        '--log-file', 'log_file',
        default=None,
        type=click.Path(writable=True, dir_okay=False, path_type=Path),
        help='Log file (stderr only if not set)'
    )(func)
    func = click.option(
        '--log-level', 'log_level',
        default='INFO', show_default=True,
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
        help='Logging level'
    )(func)
    return func

def config_option(func):
    return click.option(
        '--config', '-c', 'config_path',
        default=None,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='YAML or JSON config file.'
    )(func)

def _load(config_path, **overrides):
    try:
        return load_config(config_path, **overrides)
    except (ValidationError, ValueError, TypeError, OSError) as e:
        print_error(f'Could not load configuration: {e}')

@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
def cli():
    """SiteMapper command group."""

@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url', required=False)
@click.argument('rate', required=False)
@config_option
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Sitemap JSON file [default: sitemap.json]'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save an HTML sitemap'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (packaged template if not set)'
)
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Worker pool size')
@click.option('--timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option('--deadline', 'crawl_deadline', type=float, default=None, help='Overall crawl deadline (seconds)')
@click.option('--link-format', type=click.Choice(['object', 'url']), default=None, help='Link schema in the JSON output')
@click.option('--pretty', is_flag=True, help='Indent the JSON output (2 spaces)')
@log_options
def crawl(root_url, rate, config_path, output, html_output, template_dir, concurrency,
          timeout, crawl_deadline, link_format, pretty, log_level, log_file, log_format):
    """Crawl ROOT_URL at RATE requests per second and write the sitemap."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    if not root_url and config_path is None:
        logger.error('URL is null.')
        click.echo(URL_NOT_PROVIDED)
        return

    cfg = _load(
        config_path,
        root_url=root_url,
        rate_limit=rate,
        concurrency=concurrency,
        timeout=timeout,
        crawl_deadline=crawl_deadline,
        link_format=link_format,
        output=str(output) if output else None,
    )
    click.echo(f'Crawling {cfg.root_url} at {cfg.rate_limit} request(s)/s', err=True)
    try:
        pages = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    try:
        saved_json = render_json(pages, cfg.output, cfg.link_format, indent=2 if pretty else None)
    except (TypeError, ValueError) as e:
        logger.error('Could not serialize sitemap: %s', e)
        print_error(COULD_NOT_PROCESS)
    except OSError as e:
        print_error(f'COULD NOT CREATE SITEMAP FILE: {e}')
    click.echo(f'Sitemap: {saved_json} ({len(pages)} pages)')

    if html_output:
        try:
            saved_html = render_html(pages, template_dir, html_output)
            click.echo(f'HTML sitemap: {saved_html}')
        except Exception as e:
            print_error(f'Could not save HTML sitemap: {e}')

@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url', required=False)
@config_option
def show_config(root_url, config_path):
    """Show the effective configuration as JSON."""
    cfg = _load(config_path, root_url=root_url)
    click.echo(json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False))

if __name__ == "__main__":
    cli()
