"""Recursive validation and description of a bundle selection tree."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rose_bundles.bundles.grammar import child_path, parse_bundle_string
from rose_bundles.bundles.options import CatalogIndex, resolve_option
from rose_bundles.models.pydantic_models import Product, ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8


@dataclass
class _LevelOutcome:
    is_valid: bool
    description: str
    preview_product: Product | None


def as_index(catalog: Iterable[Product] | CatalogIndex) -> CatalogIndex:
    """Return a CatalogIndex for either a product list or an existing index."""
    if isinstance(catalog, CatalogIndex):
        return catalog
    return CatalogIndex(catalog)


def resolve(
    root_bundle_string: str | None,
    selections: Mapping[str, str],
    catalog: Iterable[Product] | CatalogIndex,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    root_product_id: str | None = None,
) -> ValidationResult:
    """Validate and describe a selection tree.

    Algorithm, per level (starting at the root with an empty path prefix):
    1. Parse the level's bundle string into slots
    2. Effective option: the only option of a fixed slot, or the selection
       stored under the slot's path (unfilled if absent)
    3. Any unfilled selectable slot, at any depth, invalidates the whole tree
    4. Each filled slot contributes its label; a slot whose option is itself
       a bundle product contributes "Label (nested description)"
    5. The last root-level slot resolving to a product is the preview product

    Nested bundles already on the current chain, or deeper than ``max_depth``,
    are not expanded. That is a catalog data error and is logged, not raised.

    Args:
        root_bundle_string: Bundle text of the product being configured.
        selections: Path -> chosen option mapping.
        catalog: Product snapshot (an empty one degrades to plain labels).
        max_depth: Deepest nested level that is expanded.
        root_product_id: Id of the product being configured, for cycle checks.

    Returns:
        ValidationResult with validity, flattened details and preview product.

    Example:
        >>> catalog = [Product(id="choc", name="Chocolate Box", bundleItems='"Dark"/"Milk"')]
        >>> resolve("choc", {"0.0": "Dark"}, catalog).details_string
        'Chocolate Box (Dark)'
    """
    index = as_index(catalog)
    chain = (root_product_id.lower(),) if root_product_id else ()

    outcome = _resolve_level(root_bundle_string, "", selections, index, chain, 1, max_depth)

    return ValidationResult(
        is_valid=outcome.is_valid,
        details_string=outcome.description,
        preview_product=outcome.preview_product,
    )


def _resolve_level(
    bundle_str: str | None,
    prefix: str,
    selections: Mapping[str, str],
    index: CatalogIndex,
    chain: tuple[str, ...],
    depth: int,
    max_depth: int,
) -> _LevelOutcome:
    slots = parse_bundle_string(bundle_str)
    is_valid = True
    parts: list[str] = []
    preview: Product | None = None

    for i, slot in enumerate(slots):
        path = child_path(prefix, i)
        option = slot.options[0] if slot.is_fixed else selections.get(path)

        if not option:
            is_valid = False
            continue

        resolved = resolve_option(option, index)
        part = resolved.label
        sub_product = resolved.product

        if sub_product is not None:
            preview = sub_product

            if sub_product.bundle_items and _can_expand(sub_product, path, chain, depth, max_depth):
                nested = _resolve_level(
                    sub_product.bundle_items,
                    path,
                    selections,
                    index,
                    chain + (sub_product.id.lower(),),
                    depth + 1,
                    max_depth,
                )
                if not nested.is_valid:
                    is_valid = False
                if nested.description:
                    part = f"{part} ({nested.description})"

        parts.append(part)

    logger.debug(
        "Resolved level %r: %d slots, valid=%s", prefix or "<root>", len(slots), is_valid
    )
    return _LevelOutcome(is_valid=is_valid, description=", ".join(parts), preview_product=preview)


def _can_expand(
    product: Product, path: str, chain: tuple[str, ...], depth: int, max_depth: int
) -> bool:
    if product.id.lower() in chain:
        logger.error(
            "Bundle cycle at path %s: %s -> %s; nested bundle not expanded",
            path,
            " -> ".join(chain),
            product.id,
        )
        return False

    if depth >= max_depth:
        logger.error(
            "Bundle nesting deeper than %d levels at path %s (%s); nested bundle not expanded",
            max_depth,
            path,
            product.id,
        )
        return False

    return True


def resolve_product(
    product: Product,
    selections: Mapping[str, str],
    catalog: Iterable[Product] | CatalogIndex,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ValidationResult:
    """Resolve a product's own bundle, using its id for cycle detection.

    A product that is not a bundle resolves as valid with empty details.
    """
    return resolve(
        product.bundle_items,
        selections,
        catalog,
        max_depth=max_depth,
        root_product_id=product.id,
    )
