"""
Publishing helper commands.

This module handles token estimates for manuscripts and KDP royalty
calculations.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional

import click
from book_author import KdpService
from book_author.models import BookFormatType, KdpMarketplace
from llm_core import CLAUDE_SONNET_4_5, TokenCounter, settings

from .common import fail, unwrap_or_exit


@click.command("tokens")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--model", "-m", default=None, help="Model id used for limits and pricing.")
@click.help_option("--help", "-h")
def tokens_command(file: str, model: Optional[str]) -> None:
    """
    Estimate tokens for a text file.

    FILE: Text or Markdown file to measure
    """
    model = model or settings.default_model or CLAUDE_SONNET_4_5.model_id
    text = Path(file).read_text(encoding="utf-8")
    counter = TokenCounter()
    tokens = counter.estimate_tokens(text)

    click.echo(f"Model: {model}")
    click.echo(f"Characters: {len(text):,}")
    click.echo(f"Estimated tokens: {tokens:,}")
    click.echo(f"Context window: {counter.max_context_tokens(model):,}")
    click.echo(f"Fits in context: {'yes' if counter.fits_in_context(text, model) else 'no'}")
    click.echo(f"Estimated input cost: ${counter.estimate_cost(model, tokens, 0):.4f}")


@click.command("royalties")
@click.argument("price", type=str)
@click.option(
    "--format",
    "format_name",
    type=click.Choice([BookFormatType.EBOOK.value, BookFormatType.PAPERBACK.value]),
    default=BookFormatType.EBOOK.value,
    help="Book format.",
)
@click.option(
    "--marketplace",
    type=click.Choice([m.value for m in KdpMarketplace], case_sensitive=False),
    default=KdpMarketplace.US.value,
    help="Amazon marketplace.",
)
@click.option("--pages", type=int, default=None, help="Page count (required for paperbacks).")
@click.help_option("--help", "-h")
def royalties_command(price: str, format_name: str, marketplace: str, pages: Optional[int]) -> None:
    """
    Estimate the KDP royalty for a list price.

    PRICE: List price, for example 4.99

    Examples:
      python -m cli royalties 4.99
      python -m cli royalties 14.99 --format paperback --pages 320
    """
    try:
        list_price = Decimal(price)
    except ArithmeticError:
        fail(f"Invalid price: {price}")
    if not list_price.is_finite():
        fail(f"Invalid price: {price}")

    service = KdpService()
    format_type = BookFormatType(format_name)
    print_specs = None
    if format_type == BookFormatType.PAPERBACK:
        if pages is None:
            fail("--pages is required for paperbacks")
        print_specs = unwrap_or_exit(service.calculate_print_specs(pages))
        click.echo(f"Printing cost: {print_specs.printing_cost:.2f}")
        click.echo(f"Minimum list price: {print_specs.minimum_list_price:.2f}")

    pricing = unwrap_or_exit(
        service.calculate_royalties(list_price, KdpMarketplace(marketplace.upper()), format_type, print_specs)
    )
    click.echo(f"Royalty rate: {pricing.royalty_percentage}%")
    click.echo(f"Delivery cost: {pricing.delivery_cost:.2f} {pricing.currency}")
    click.echo(f"Estimated royalty: {pricing.estimated_royalty:.2f} {pricing.currency}")
