"""Product catalog snapshot loading and filtering."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from rose_bundles.models.pydantic_models import (
    CatalogFilters,
    PriceRange,
    Product,
    ProductFilters,
)

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Catalog file parsed but does not hold a list of products."""


def load_catalog(path: Path) -> list[Product]:
    """Load every product (available or not) from a snapshot file.

    JSON files must hold an array of products. YAML files may hold a list or
    a mapping with a ``products`` key. Both camelCase (``imageUrl``,
    ``bundleItems``) and snake_case keys are accepted.

    Args:
        path: Path to a .json, .yaml or .yml snapshot.

    Returns:
        Products in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        json.JSONDecodeError / yaml.YAMLError: If parsing fails.
        CatalogError: If the top-level structure is not a product list.
        ValidationError: If a product doesn't match the expected schema.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            raw: Any = json.load(f)
        else:
            raw = yaml.safe_load(f)

    if raw is None:
        raw = []
    if isinstance(raw, dict):
        raw = raw.get("products", [])
    if not isinstance(raw, list):
        raise CatalogError(f"Expected a list of products in {path}, got {type(raw).__name__}")

    products = [Product.model_validate(item) for item in raw]
    logger.info("Loaded %d products from %s", len(products), path)
    return products


def available_products(products: Iterable[Product]) -> list[Product]:
    """Products shown in the shop (unavailable ones are still used for bundle labels)."""
    return [p for p in products if p.available]


def find_product(products: Iterable[Product], product_id: str) -> Product | None:
    """Exact id lookup, as used for product pages."""
    for product in products:
        if product.id == product_id:
            return product
    return None


def filter_products(products: Iterable[Product], filters: ProductFilters) -> list[Product]:
    """Apply shop filters.

    A product must match every given criterion. Tags match if the product
    carries at least one of them. The search query is a case-insensitive
    substring match over name, description, category and tags.
    """
    query = filters.search_query.lower() if filters.search_query else None
    result: list[Product] = []

    for product in products:
        if filters.category and product.category != filters.category:
            continue
        if filters.min_price is not None and product.price < filters.min_price:
            continue
        if filters.max_price is not None and product.price > filters.max_price:
            continue
        if filters.in_stock and product.stock <= 0:
            continue
        if filters.tags and not any(tag in product.tags for tag in filters.tags):
            continue
        if query:
            haystacks = [product.name, product.description, product.category, *product.tags]
            if not any(query in text.lower() for text in haystacks):
                continue
        result.append(product)

    return result


def extract_filters(products: Iterable[Product]) -> CatalogFilters:
    """Collect the filter facets offered by a set of products."""
    products = list(products)
    if not products:
        return CatalogFilters()

    prices = [p.price for p in products]
    return CatalogFilters(
        categories=sorted({p.category for p in products}),
        tags=sorted({tag for p in products for tag in p.tags}),
        price_range=PriceRange(min=min(prices), max=max(prices)),
    )
