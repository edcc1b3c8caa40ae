"""CLI interface for the Shoppable catalog and shopping cart."""

import json
import logging
import sys
from pathlib import Path

import typer

from shoppable.cart import CartBadgePresenter, CartEntryShapeError, CartStore
from shoppable.catalog import CatalogLoader, CatalogLoadError
from shoppable.config import ShoppableSettings, get_settings
from shoppable.storage import get_settings_store
from shoppable.tabbar import TabBar

app = typer.Typer(help="Shoppable catalog and shopping cart")


def setup_logging(settings: ShoppableSettings) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )

    # Set specific logger levels
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def load_settings() -> ShoppableSettings:
    settings = get_settings()
    setup_logging(settings)
    return settings


def open_cart(settings: ShoppableSettings) -> CartStore:
    """Create the cart store and load the saved entries."""
    cart_store = CartStore(get_settings_store(settings), key=settings.cart_key)
    cart_store.load_from_persistence()
    return cart_store


def emit(json_data: str, output: str | None) -> None:
    """Write JSON to a file or stdout."""
    if output:
        with open(output, "w") as f:
            f.write(json_data)
        typer.echo(f"Results saved to {output}", err=True)
    else:
        typer.echo(json_data)


@app.command()
def collections(
    resource: str | None = typer.Option(
        None,
        "--resource",
        "-r",
        help="Catalog resource name. Defaults to the configured catalog.",
    ),
    catalog_dir: str | None = typer.Option(
        None,
        "--catalog-dir",
        "-d",
        help="Directory holding catalog resources. Defaults to the bundled catalog.",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path. If not specified, prints to stdout.",
    ),
):
    """Print the product catalog as JSON."""
    settings = load_settings()
    loader = CatalogLoader(catalog_dir or settings.catalog_dir, strict=True)
    resource_name = resource or settings.catalog_resource

    try:
        product_collections = loader.load(resource_name)
    except CatalogLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    emit(
        json.dumps([c.model_dump() for c in product_collections], indent=2),
        output,
    )
    typer.echo(
        f"Loaded {len(product_collections)} collections from catalog '{resource_name}'",
        err=True,
    )


@app.command()
def cart(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path. If not specified, prints to stdout.",
    ),
):
    """Print the saved shopping cart entries as JSON."""
    cart_store = open_cart(load_settings())

    emit(json.dumps(cart_store.current_entries(), indent=2), output)
    typer.echo(f"{cart_store.count()} items in cart", err=True)


@app.command()
def badge():
    """Print the cart tab badge. Prints nothing when the cart is empty."""
    cart_store = open_cart(load_settings())

    value = CartBadgePresenter().badge_for(cart_store)
    if value is not None:
        typer.echo(value)


@app.command("save-cart")
def save_cart(
    product_ids: list[str] | None = typer.Argument(
        None,
        help="Product identifiers to store as the cart, one entry each.",
    ),
    input_file: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON file holding an array of cart entries to store verbatim.",
    ),
):
    """Replace the saved shopping cart."""
    settings = load_settings()

    if input_file is not None and product_ids:
        typer.echo("Error: pass product ids or --input, not both", err=True)
        raise typer.Exit(1)

    if input_file is not None:
        try:
            entries = json.loads(input_file.read_text())
        except (OSError, ValueError) as e:
            typer.echo(f"Error: could not read {input_file}: {e}", err=True)
            raise typer.Exit(1)
    else:
        entries = [{"id": product_id} for product_id in product_ids or []]

    cart_store = CartStore(get_settings_store(settings), key=settings.cart_key)
    try:
        cart_store.save_to_persistence(entries=entries)
    except CartEntryShapeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Saved {cart_store.count()} items to the cart", err=True)


@app.command()
def tabs(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path. If not specified, prints to stdout.",
    ),
):
    """Set up the tab bar and print its state as JSON."""
    settings = load_settings()
    tab_bar = TabBar.from_settings(settings)

    try:
        tab_bar.setup()
    except CatalogLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    emit(tab_bar.snapshot().model_dump_json(indent=2), output)


if __name__ == "__main__":
    app()
