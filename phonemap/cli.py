"""
phonemap CLI.

Commands:
  - lookup: parse a phone number, enrich it through the configured model
    backend, and print the details with an approximate map location
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import click
import httpx

from phonemap import __version__
from phonemap.actions import ActionResult, get_phone_number_details, is_well_formed
from phonemap.config import PhonemapSettings, build_enricher, load_settings
from phonemap.core.enrich import PhoneNumberEnricher
from phonemap.core.geo import map_view_for
from phonemap.io.report import build_report, export_json, render_details, render_map
from phonemap.logging_config import configure_logging
from phonemap.net.http import build_async_client

logger = logging.getLogger(__name__)


async def lookup_async(
    number: str,
    *,
    settings: PhonemapSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ActionResult:
    async with build_async_client(settings.http_config(), transport=transport) as client:
        enricher = build_enricher(settings, client=client)
        orchestrator = PhoneNumberEnricher(enricher, timeout_seconds=settings.llm_timeout_seconds)
        return await get_phone_number_details(number, enricher=orchestrator)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """Phone number lookup with model-assisted enrichment."""


@main.command("lookup")
@click.argument("number", type=str)
@click.option("--json", "as_json", is_flag=True, help="Print the JSON report to stdout.")
@click.option(
    "--report",
    "report_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the JSON report to a file.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config path.",
)
@click.option(
    "--enricher",
    "enricher_name",
    type=click.Choice(["openai", "offline"], case_sensitive=False),
    default=None,
    help="Override the configured enrichment backend.",
)
def lookup_cmd(
    number: str,
    as_json: bool,
    report_path: Path | None,
    config_path: Path | None,
    enricher_name: str | None,
) -> None:
    """
    Look up NUMBER (international format, e.g. +16502530000).
    """

    settings = load_settings(yaml_path=config_path)
    if enricher_name:
        settings = settings.model_copy(update={"enricher": enricher_name.lower()})
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)

    number = number.strip()
    if not is_well_formed(number):
        raise click.ClickException(
            "Please enter a valid international phone number (e.g., +12025550123)."
        )

    try:
        result = asyncio.run(lookup_async(number, settings=settings))
    except Exception as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc

    if result.data is None:
        raise click.ClickException(result.error or "No data received.")

    map_view = map_view_for(result.data)
    report: dict[str, Any] = build_report(
        number, result.data, map_view, enricher=settings.enricher
    )

    if report_path is not None:
        export_json(report, report_path)

    if as_json:
        click.echo(json.dumps(report, indent=2, sort_keys=True))
    else:
        click.echo(render_details(result.data), nl=False)
        click.echo("")
        click.echo(render_map(map_view), nl=False)
