#!/usr/bin/env python3
"""
Точка входа для запуска LeadMiner через командную строку.

Команды:
  scrape URL  Собрать email-адреса, телефоны и имена со страницы (или сайта с --deep)
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scrape опции:
  --deep              Обойти все страницы того же домена
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --quiet             Не печатать прогресс глубокого сканирования

Пример:
  lead-miner scrape example.com --deep --json leads.json
"""
import asyncio
import sys
from pathlib import Path

import click

from lead_miner import __version__
from lead_miner.config import load_config
from lead_miner.crawler.models import CrawlSnapshot, ScrapeRequest
from lead_miner.engine import start_scan
from lead_miner.logger import init_logging
from lead_miner.progress import format_eta
from lead_miner.report.html_report import render_html
from lead_miner.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def print_progress(snapshot: CrawlSnapshot) -> None:
    progress = snapshot.progress
    current = progress.current_url or "done"
    click.echo(
        f"[{progress.completed}/{progress.discovered}] {current}  eta {format_eta(snapshot.eta_seconds)}",
        err=True,
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LeadMiner, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд LeadMiner CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--deep', is_flag=True, help='Обойти все страницы того же домена')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--quiet', '-q', is_flag=True, help='Не печатать прогресс')
@click.pass_context
def scrape(ctx, url, deep, json_output, html_output, template_dir, pretty, quiet):
    """Собрать контакты с URL и вывести/сохранить результат."""
    cfg = ctx.obj['config']
    request = ScrapeRequest(target_url=url, deep_scan=deep)
    on_snapshot = None if (quiet or not deep) else print_progress
    try:
        response = asyncio.run(start_scan(request, cfg, on_snapshot))
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    if not json_output and not html_output:
        click.echo(response.json(pretty=pretty))

    if json_output:
        try:
            saved_json = render_json(response, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(response, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if not response.success:
        print_error(response.error or 'Сканирование завершилось с ошибкой')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
