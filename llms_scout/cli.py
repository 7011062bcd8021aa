# === FILE: llms_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера LLMSScout через командную строку.

Команды:
  crawl     Обойти сайт компании, разбить страницы на пакеты и вывести/сохранить результат
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  URL                 Стартовый URL (перекрывает seed_url из конфига)
  --engine NAME       playwright | http
  --max-pages INT     Бюджет страниц
  --max-depth INT     Максимальная глубина
  --batch-size INT    Размер пакета для генерации
  --concurrency INT   Число одновременных загрузок
  --out-dir DIR       Сохранять пакеты (JSON или llms.txt-черновики) в папку
  --outline           Генерировать черновик llms.txt вместо JSON-пакетов
  --json PATH         Сохранить итоговый JSON-отчёт в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Дополнительно:
  --version, -v       Показать версию LLMSScout

Пример:
  llms-scout crawl https://example.com --engine http --max-pages 20 --out-dir out --outline
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from llms_scout import __version__
from llms_scout.config import DEFAULT_CONFIG_PATH, CrawlConfig, read_config_file
from llms_scout.engine import start_crawl
from llms_scout.errors import ScoutError, SeedFetchError
from llms_scout.logger import DEFAULT_FORMAT, init_logging
from llms_scout.report import CollectingGenerator, JsonBatchWriter, OutlineGenerator
from llms_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LLMSScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд LLMSScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    data = {}
    if config_path is not None or DEFAULT_CONFIG_PATH.exists():
        try:
            data = read_config_file(config_path)
        except Exception as e:
            print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config_data'] = data


def _build_config(data, overrides) -> CrawlConfig:
    merged = dict(data)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    if 'seed_url' not in merged:
        print_error('Не задан стартовый URL: передайте URL аргументом или seed_url в конфиге')
    try:
        return CrawlConfig(**merged)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--engine', '-e', type=click.Choice(['playwright', 'http']), default=None,
              help='Движок загрузки страниц')
@click.option('--max-pages', '-l', 'max_pages', type=int, default=None, help='Бюджет страниц (override max_pages)')
@click.option('--max-depth', '-d', 'max_depth', type=int, default=None, help='Максимальная глубина обхода')
@click.option('--batch-size', '-b', 'batch_size', type=int, default=None, help='Размер пакета для генерации')
@click.option('--concurrency', '-n', type=int, default=None, help='Число одновременных загрузок')
@click.option(
    '--out-dir', '-o', 'out_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Папка для пакетов'
)
@click.option('--outline', is_flag=True, help='Генерировать черновик llms.txt по каждому пакету')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Таймаут всего обхода (секунд)')
@click.pass_context
def crawl(ctx, url, engine, max_pages, max_depth, batch_size, concurrency,
          out_dir, outline, json_output, pretty, crawl_timeout):
    """Обойти сайт и разбить страницы на пакеты для генерации."""
    cfg = _build_config(ctx.obj['config_data'], {
        'seed_url': url,
        'engine': engine,
        'max_pages': max_pages,
        'max_depth': max_depth,
        'batch_size': batch_size,
        'concurrency': concurrency,
        'crawl_timeout': crawl_timeout,
    })

    if outline:
        generator = OutlineGenerator(cfg.company_name, cfg.company_description, out_dir=out_dir)
    elif out_dir is not None:
        generator = JsonBatchWriter(out_dir)
    else:
        generator = CollectingGenerator()

    click.echo(f'Starting crawl: {cfg.seed}', err=True)
    try:
        result = asyncio.run(start_crawl(cfg, generator=generator))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {cfg.crawl_timeout} секунд')
    except SeedFetchError as e:
        print_error(str(e))
    except ScoutError as e:
        print_error(f'Ошибка при обходе: {e}')

    if json_output:
        try:
            saved = render_json(result, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')
        return

    indent = 2 if pretty else None
    click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=indent))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать текущую конфигурацию в JSON."""
    cfg = _build_config(ctx.obj['config_data'], {'seed_url': url})
    click.echo(cfg.model_dump_json(indent=2))


# expose these names at module level for test monkey-patching
cli.start_crawl = start_crawl
cli.render_json = render_json

if __name__ == "__main__":
    cli()
