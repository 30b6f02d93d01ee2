"""
BookingDesk CLI — smoke-test a deployment from the command line.

Usage:
    bookingdesk business list                 — list business variants
    bookingdesk business show [slug]          — print one variant's config
    bookingdesk availability <date> [--mode]  — ask the backend for free slots
    bookingdesk chat "<message>"              — get the chat widget's reply
"""

from __future__ import annotations

import asyncio
import json
import logging

import click

from bookingdesk.config import get_settings
from bookingdesk.core.brain import Brain
from bookingdesk.core.business_loader import list_businesses, load_business_config
from bookingdesk.core.chat import ChatResponder, EmptyCompletion
from bookingdesk.core.normalizers import normalize_date, normalize_mode
from bookingdesk.core.validators import is_iso_date
from bookingdesk.integrations.google_script import GoogleScriptClient

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(verbose: bool):
    """BookingDesk — bookings, availability and chat for small businesses."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@cli.group()
def business():
    """Inspect business variants."""


@business.command("list")
def business_list():
    """List available business variants."""
    settings = get_settings()
    slugs = list_businesses(settings.businesses_dir)
    if not slugs:
        click.echo(f"No business variants in {settings.businesses_dir}/")
        return
    for slug in slugs:
        marker = "*" if slug == settings.business_slug else " "
        click.echo(f"{marker} {slug}")


@business.command("show")
@click.argument("slug", required=False)
def business_show(slug: str | None):
    """Print a business variant's configuration."""
    settings = get_settings()
    try:
        cfg = load_business_config(settings.businesses_dir, slug or settings.business_slug)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(cfg.model_dump(), ensure_ascii=False, indent=2))


@cli.command()
@click.argument("date")
@click.option("--mode", default="BOOKING", help="BOOKING or REQUEST")
def availability(date: str, mode: str):
    """Ask the booking backend for the free slots of DATE."""
    iso = normalize_date(date)
    if not is_iso_date(iso):
        click.echo("Error: date must be YYYY-MM-DD or DD/MM/YYYY", err=True)
        raise SystemExit(1)
    asyncio.run(_availability(iso, normalize_mode(mode)))


async def _availability(date: str, mode: str):
    client = GoogleScriptClient.from_settings(get_settings())
    result = await client.send("get_availability", {"date": date, "mode": mode, "requestMode": mode == "REQUEST"})
    if not result.ok:
        click.echo(f"Error ({result.http_status}): {result.error}", err=True)
        raise SystemExit(1)

    slots = result.data.get("freeSlots") or []
    click.echo(f"{date} [{mode}]: {len(slots)} free slot(s)")
    for slot in slots:
        click.echo(f"  {slot}")


@cli.command()
@click.argument("message")
def chat(message: str):
    """Print the chat widget's reply to MESSAGE."""
    asyncio.run(_chat(message))


async def _chat(message: str):
    settings = get_settings()
    cfg = load_business_config(settings.businesses_dir, settings.business_slug)
    responder = ChatResponder(cfg, Brain.from_settings(settings))
    try:
        reply = await responder.reply(message)
    except EmptyCompletion as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except Exception as e:
        logger.debug("Chat completion failed", exc_info=True)
        click.echo(f"Error (chat): {e}", err=True)
        raise SystemExit(1)
    suffix = " (fallback)" if reply.fallback else ""
    click.echo(f"{reply.text}{suffix}")


if __name__ == "__main__":
    cli()
