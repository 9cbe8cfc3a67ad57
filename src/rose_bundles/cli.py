"""CLI interface for rose-bundles."""

import json
import logging
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from rose_bundles import __version__
from rose_bundles.bundles.grammar import parse_bundle_string
from rose_bundles.bundles.related import get_related_bundles
from rose_bundles.bundles.resolver import resolve_product
from rose_bundles.bundles.selection import apply_selection, initial_selections
from rose_bundles.bundles.tree import build_slot_tree, missing_paths
from rose_bundles.catalog import (
    CatalogError,
    available_products,
    extract_filters,
    filter_products,
    find_product,
    load_catalog,
)
from rose_bundles.config import get_catalog_path, load_settings
from rose_bundles.models.pydantic_models import (
    Product,
    ProductFilters,
    ResolverSettings,
    SelectionState,
    SlotView,
)

app = typer.Typer(
    name="rose-bundles",
    help="Inspect product bundles and resolve bundle configurations",
    add_completion=False,
)
console = Console()


def product_to_dict(product: Product | None) -> dict[str, Any] | None:
    """Convert a Product to a JSON-serializable dict using catalog key names."""
    if product is None:
        return None
    return product.model_dump(by_alias=True, exclude_none=True)


def output_json(data: Any) -> None:
    """Output JSON to stdout (for programmatic consumption)."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"rose-bundles version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show debug logging.",
    ),
) -> None:
    """Bundle configuration tools for the rose sale catalog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(
    catalog_path: Path | None, settings_path: Path | None, json_output: bool
) -> tuple[ResolverSettings, list[Product]]:
    """Load settings and the full catalog, exiting with code 1 on failure."""
    try:
        settings = load_settings(settings_path)
        products = load_catalog(get_catalog_path(catalog_path, settings))
    except (FileNotFoundError, CatalogError, ValidationError, yaml.YAMLError, ValueError) as e:
        if json_output:
            output_json({"status": "error", "error": str(e)})
        else:
            console.print(f"[red]Error loading catalog: {e}[/red]")
        raise typer.Exit(1) from e
    return settings, products


def _require_product(products: list[Product], product_id: str, json_output: bool) -> Product:
    product = find_product(products, product_id)
    if product is None:
        if json_output:
            output_json({"error": f"Product '{product_id}' not found"})
        else:
            console.print(f"[red]Product '{product_id}' not found.[/red]")
        raise typer.Exit(1)
    return product


def _parse_selections(values: list[str] | None, start: SelectionState) -> SelectionState:
    """Apply PATH=OPTION pairs in order, purging descendants like a re-pick."""
    selections = dict(start)
    for value in values or []:
        path, sep, option = value.partition("=")
        if not sep or not path.strip() or not option.strip():
            raise typer.BadParameter(f"Expected PATH=OPTION, got '{value}'", param_hint="--select")
        selections = apply_selection(selections, path.strip(), option.strip())
    return selections


CatalogOption = typer.Option(
    None,
    "--catalog",
    "-c",
    help="Path to products JSON/YAML snapshot.",
)
SettingsOption = typer.Option(
    None,
    "--settings",
    help="Path to settings YAML.",
)
SelectionsOption = typer.Option(
    None,
    "--select",
    "-s",
    help="Selection as PATH=OPTION (e.g. 0=rose-red, 1.0=Dark). Repeatable.",
)
JsonOption = typer.Option(
    False,
    "--json",
    help="Output as JSON (for programmatic consumption).",
)


@app.command()
def parse(
    bundle: str = typer.Argument(..., help="Bundle string, e.g. 'rose-red/rose-pink, choc'."),
    json_output: bool = JsonOption,
) -> None:
    """Parse a bundle string into slots."""
    slots = parse_bundle_string(bundle)

    if json_output:
        output_json({"slots": [slot.model_dump() for slot in slots], "count": len(slots)})
        return

    if not slots:
        console.print("[yellow]No slots found.[/yellow]")
        return

    table = Table(title=f"Bundle Slots ({len(slots)})")
    table.add_column("Path", style="cyan", justify="right")
    table.add_column("Options", style="white")
    table.add_column("Fixed", style="magenta", justify="center")

    for i, slot in enumerate(slots):
        fixed_str = "[green]Y[/green]" if slot.is_fixed else "[dim]N[/dim]"
        table.add_row(str(i), " / ".join(slot.options), fixed_str)

    console.print(table)


@app.command(name="resolve")
def resolve_command(
    product_id: str = typer.Argument(..., help="Id of the bundle product to configure."),
    select: list[str] | None = SelectionsOption,
    catalog: Path | None = CatalogOption,
    settings_path: Path | None = SettingsOption,
    json_output: bool = JsonOption,
) -> None:
    """Resolve a bundle configuration and print its summary."""
    settings, products = _load(catalog, settings_path, json_output)
    product = _require_product(products, product_id, json_output)

    start = initial_selections(product.bundle_items, seed_fixed=settings.seed_fixed_selections)
    selections = _parse_selections(select, start)
    result = resolve_product(product, selections, products, max_depth=settings.max_depth)
    missing = missing_paths(
        build_slot_tree(
            product.bundle_items,
            selections,
            products,
            max_depth=settings.max_depth,
            root_product_id=product.id,
        )
    )

    if json_output:
        output_json({
            "product_id": product.id,
            "is_valid": result.is_valid,
            "details": result.details_string,
            "selections": selections,
            "missing": missing,
            "preview_product": product_to_dict(result.preview_product),
        })
        return

    status = "[green]COMPLETE[/green]" if result.is_valid else "[red]SELECT ALL OPTIONS[/red]"
    lines = [
        f"[bold]Bundle:[/bold] {product.name}",
        f"[bold]Status:[/bold] {status}",
        f"[bold]Details:[/bold] {result.details_string or '-'}",
    ]
    if result.preview_product:
        lines.append(f"[bold]Preview:[/bold] {result.preview_product.name}")
    if missing:
        lines.append(f"[bold]Missing:[/bold] {', '.join(missing)}")

    console.print(Panel("\n".join(lines), title=product.id))


def _add_tree_nodes(node: Tree, views: list[SlotView]) -> None:
    for view in views:
        if view.selected is not None:
            choice = f"[green]{view.selected.label}[/green]"
        else:
            choice = "[red]Choose One[/red]"
        if view.is_fixed:
            label = f"[cyan]{view.path}[/cyan] {choice}"
        else:
            alternatives = " / ".join(opt.label for opt in view.options)
            label = f"[cyan]{view.path}[/cyan] {choice} [dim]({alternatives})[/dim]"
        branch = node.add(label)
        _add_tree_nodes(branch, view.children)


def _view_to_dict(view: SlotView) -> dict[str, Any]:
    return {
        "path": view.path,
        "is_fixed": view.is_fixed,
        "options": [opt.token for opt in view.options],
        "selected": view.selected.token if view.selected else None,
        "label": view.selected.label if view.selected else None,
        "children": [_view_to_dict(child) for child in view.children],
    }


@app.command()
def tree(
    product_id: str = typer.Argument(..., help="Id of the bundle product to show."),
    select: list[str] | None = SelectionsOption,
    catalog: Path | None = CatalogOption,
    settings_path: Path | None = SettingsOption,
    json_output: bool = JsonOption,
) -> None:
    """Show the slot tree of a bundle for the given selections."""
    settings, products = _load(catalog, settings_path, json_output)
    product = _require_product(products, product_id, json_output)

    selections = _parse_selections(select, {})
    views = build_slot_tree(
        product.bundle_items,
        selections,
        products,
        max_depth=settings.max_depth,
        root_product_id=product.id,
    )

    if json_output:
        output_json({"product_id": product.id, "slots": [_view_to_dict(v) for v in views]})
        return

    if not views:
        console.print(f"[yellow]{product.name} is not a bundle.[/yellow]")
        return

    root = Tree(f"[bold]{product.name}[/bold]")
    _add_tree_nodes(root, views)
    console.print(root)


@app.command()
def related(
    product_id: str = typer.Argument(..., help="Id of the product to find bundles for."),
    catalog: Path | None = CatalogOption,
    settings_path: Path | None = SettingsOption,
    json_output: bool = JsonOption,
) -> None:
    """List available bundles that include a product."""
    _, products = _load(catalog, settings_path, json_output)
    product = _require_product(products, product_id, json_output)

    bundles = get_related_bundles(product, available_products(products))

    if json_output:
        output_json({
            "product_id": product.id,
            "bundles": [product_to_dict(b) for b in bundles],
            "count": len(bundles),
        })
        return

    if not bundles:
        console.print(f"[yellow]No bundles include {product.name}.[/yellow]")
        return

    for bundle in bundles:
        console.print(f"[cyan]{bundle.id}[/cyan] {bundle.name} [dim]{bundle.bundle_items}[/dim]")


@app.command(name="catalog")
def list_catalog(
    category: str | None = typer.Option(None, "--category", help="Filter by category."),
    search: str | None = typer.Option(None, "--search", "-q", help="Search text."),
    in_stock: bool = typer.Option(False, "--in-stock", help="Only products in stock."),
    include_unavailable: bool = typer.Option(
        False, "--all", help="Include products no longer sold."
    ),
    catalog: Path | None = CatalogOption,
    settings_path: Path | None = SettingsOption,
    json_output: bool = JsonOption,
) -> None:
    """List catalog products."""
    _, products = _load(catalog, settings_path, json_output)
    if not include_unavailable:
        products = available_products(products)

    filters = ProductFilters(category=category, search_query=search, in_stock=in_stock)
    shown = filter_products(products, filters)

    if json_output:
        output_json({
            "products": [product_to_dict(p) for p in shown],
            "count": len(shown),
            "facets": extract_filters(products).model_dump(),
        })
        return

    if not shown:
        console.print("[yellow]No products found.[/yellow]")
        return

    table = Table(title=f"Products ({len(shown)} shown)")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white", max_width=30)
    table.add_column("Price", style="green", justify="right")
    table.add_column("Stock", style="blue", justify="right")
    table.add_column("Bundle", style="magenta", justify="center")

    for product in shown:
        table.add_row(
            product.id,
            product.name,
            f"{product.price:,.2f}",
            str(product.stock),
            "[green]Y[/green]" if product.is_bundle else "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()
