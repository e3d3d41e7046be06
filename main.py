#!/usr/bin/env python3
"""give.it product button tool - Entry point."""
import json
import logging
import sys

import click
from colorama import Fore, Style, init

from config import app_config
from giveit import VERSION
from giveit.builder import PayloadPipeline
from giveit.crypt import AesCrypt, KeyHolder
from giveit.errors import EncoderUnavailableError, EncodingError
from giveit.exporter.json_exporter import JsonExporter
from giveit.product.document import ProductDocument

# Initialize colorama
init(autoreset=True)


def load_product(path: str) -> ProductDocument:
    """Load a product document from a JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="PRODUCT_FILE") from e

    if not isinstance(data, dict):
        raise click.BadParameter("product file must contain a JSON object", param_hint="PRODUCT_FILE")

    try:
        return ProductDocument.from_dict(data)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="PRODUCT_FILE") from e


def print_errors(messages):
    """Print accumulated errors, one per line."""
    for message in messages:
        click.echo(f"{Fore.RED}  - {message}", err=True)


@click.group()
@click.version_option(version=VERSION)
@click.option("--log-level", default=app_config.log_level, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(log_level):
    """give.it product button tool - Validate and render product buttons."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("product_file", type=click.Path(exists=True, dir_okay=False))
def validate(product_file):
    """Check a product file against the required fields."""
    product = load_product(product_file)

    if product.validate():
        click.echo(f"{Fore.GREEN}✅ Product is valid")
        for warning in product.warnings:
            click.echo(f"{Fore.YELLOW}⚠ {warning.message}")
        return

    click.echo(f"{Fore.RED}❌ Product is invalid:", err=True)
    print_errors(product.error_messages())
    sys.exit(1)


@cli.command()
@click.argument("product_file", type=click.Path(exists=True, dir_okay=False))
def fingerprint(product_file):
    """Print the fingerprint and the payload of a product file."""
    product = load_product(product_file)

    click.echo(f"{Fore.CYAN}Fingerprint: {Style.RESET_ALL}{product.metadata.fingerprint}")
    click.echo(JsonExporter().export_pretty(product))


@cli.command()
@click.argument("product_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--button-type", default=app_config.button_type, show_default=True,
              help="Button variant to render")
@click.option("--verbose", is_flag=True, default=app_config.render_errors,
              help="Render errors into the output instead of failing silently")
@click.option("--data-key", default=app_config.data_key, help="Data key used to encrypt the product")
def render(product_file, button_type, verbose, data_key):
    """Render the button HTML for a product file."""
    product = load_product(product_file)
    pipeline = PayloadPipeline(KeyHolder(data_key), render_errors=verbose)

    try:
        result = pipeline.render(product, button_type=button_type)
    except EncoderUnavailableError as e:
        click.echo(f"{Fore.RED}❌ {e.message} (set GIVEIT_DATA_KEY or pass --data-key)", err=True)
        sys.exit(2)

    if result.fragment:
        click.echo(result.fragment)

    if not result:
        if not verbose:
            click.echo(f"{Fore.RED}❌ Product was not rendered (use --verbose for details)", err=True)
        sys.exit(1)


@cli.command()
@click.argument("blob")
@click.option("--data-key", default=app_config.data_key, help="Data key the product was encrypted with")
def decode(blob, data_key):
    """Decrypt an encoded product blob."""
    try:
        plaintext = AesCrypt().decode(blob, data_key)
    except EncodingError as e:
        click.echo(f"{Fore.RED}❌ {e.message}", err=True)
        sys.exit(1)

    click.echo(json.dumps(json.loads(plaintext), indent=2, sort_keys=True, ensure_ascii=False))


if __name__ == "__main__":
    cli()
