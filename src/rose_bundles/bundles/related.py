"""Upsell lookup: which bundles include a given product."""

from collections.abc import Iterable

from rose_bundles.models.pydantic_models import Product

BUNDLE_CATEGORY = "Bundle"


def get_related_bundles(product: Product, catalog: Iterable[Product]) -> list[Product]:
    """Find bundle products whose definition mentions ``product``.

    Matching is a case-insensitive substring check of the product id and name
    against each bundle string, so short ids may over-match.

    Args:
        product: Product being viewed.
        catalog: Product snapshot to search.

    Returns:
        Bundles in catalog order. Empty if the product has neither id nor name.
    """
    if not product.id and not product.name:
        return []

    product_id = product.id.lower()
    product_name = product.name.lower()

    related: list[Product] = []
    for candidate in catalog:
        if candidate.category != BUNDLE_CATEGORY or not candidate.bundle_items:
            continue
        if candidate.id == product.id:
            continue

        bundle_text = candidate.bundle_items.lower()
        if (product_id and product_id in bundle_text) or (
            product_name and product_name in bundle_text
        ):
            related.append(candidate)

    return related
