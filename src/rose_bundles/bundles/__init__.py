"""Bundle grammar, resolution and selection modules."""

from rose_bundles.bundles.configurator import BundleConfigurator
from rose_bundles.bundles.grammar import parse_bundle_string
from rose_bundles.bundles.options import find_product_for_option, format_option_name
from rose_bundles.bundles.related import get_related_bundles
from rose_bundles.bundles.resolver import resolve, resolve_product
from rose_bundles.bundles.selection import apply_selection, initial_selections
from rose_bundles.bundles.tree import build_slot_tree

__all__ = [
    "BundleConfigurator",
    "apply_selection",
    "build_slot_tree",
    "find_product_for_option",
    "format_option_name",
    "get_related_bundles",
    "initial_selections",
    "parse_bundle_string",
    "resolve",
    "resolve_product",
]
