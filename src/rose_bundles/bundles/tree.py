"""Renderable slot tree for a bundle configuration."""

import logging
from collections.abc import Iterable, Mapping

from rose_bundles.bundles.grammar import child_path, parse_bundle_string
from rose_bundles.bundles.options import CatalogIndex, resolve_option
from rose_bundles.bundles.resolver import DEFAULT_MAX_DEPTH, as_index
from rose_bundles.models.pydantic_models import Product, SlotView

logger = logging.getLogger(__name__)


def build_slot_tree(
    root_bundle_string: str | None,
    selections: Mapping[str, str],
    catalog: Iterable[Product] | CatalogIndex,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    root_product_id: str | None = None,
) -> list[SlotView]:
    """Build the slots a configurator would show for the current selections.

    Nested slots are listed only under a slot whose effective option is a
    bundle product, mirroring what ``resolve`` walks. Cycles and overly deep
    nesting stop the descent the same way.
    """
    index = as_index(catalog)
    chain = (root_product_id.lower(),) if root_product_id else ()
    return _build_level(root_bundle_string, "", selections, index, chain, 1, max_depth)


def _build_level(
    bundle_str: str | None,
    prefix: str,
    selections: Mapping[str, str],
    index: CatalogIndex,
    chain: tuple[str, ...],
    depth: int,
    max_depth: int,
) -> list[SlotView]:
    views: list[SlotView] = []

    for i, slot in enumerate(parse_bundle_string(bundle_str)):
        path = child_path(prefix, i)
        options = [resolve_option(opt, index) for opt in slot.options]

        if slot.is_fixed:
            selected = options[0]
        else:
            chosen = selections.get(path)
            selected = resolve_option(chosen, index) if chosen else None

        children: list[SlotView] = []
        sub_product = selected.product if selected else None
        if sub_product is not None and sub_product.bundle_items:
            product_key = sub_product.id.lower()
            if product_key in chain or depth >= max_depth:
                logger.warning("Not descending into %s at path %s", sub_product.id, path)
            else:
                children = _build_level(
                    sub_product.bundle_items,
                    path,
                    selections,
                    index,
                    chain + (product_key,),
                    depth + 1,
                    max_depth,
                )

        views.append(
            SlotView(
                path=path,
                index=i,
                is_fixed=slot.is_fixed,
                options=options,
                selected=selected,
                children=children,
            )
        )

    return views


def iter_slot_views(views: Iterable[SlotView]) -> Iterable[SlotView]:
    """Depth-first iteration over a slot tree."""
    for view in views:
        yield view
        yield from iter_slot_views(view.children)


def missing_paths(views: Iterable[SlotView]) -> list[str]:
    """Paths of selectable slots that still need a choice."""
    return [view.path for view in iter_slot_views(views) if view.selected is None]
