"""Configuration session for a single bundle product."""

import logging
from collections.abc import Callable, Sequence

from rose_bundles.bundles.options import CatalogIndex
from rose_bundles.bundles.resolver import DEFAULT_MAX_DEPTH, resolve_product
from rose_bundles.bundles.selection import (
    ResetSelections,
    SelectionAction,
    SelectOption,
    initial_selections,
    reduce_selections,
)
from rose_bundles.bundles.tree import build_slot_tree
from rose_bundles.models.pydantic_models import (
    Product,
    SelectionState,
    SlotView,
    ValidationResult,
)

logger = logging.getLogger(__name__)

ConfigChangeCallback = Callable[[bool, SelectionState, str, Product | None], None]


class BundleConfigurator:
    """Owns the selection state of one bundle being configured.

    Every change is resolved from scratch and reported through
    ``on_config_change(is_valid, selections, details_string, preview_product)``,
    so the caller can gate its "Add to Bundle" action on validity and keep the
    details string for the cart line.
    """

    def __init__(
        self,
        product: Product,
        catalog: Sequence[Product],
        on_config_change: ConfigChangeCallback | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        seed_fixed: bool = False,
    ) -> None:
        """Initialize with the product being configured.

        Args:
            product: Root product; its bundle_items define the slots.
            catalog: Product snapshot used to resolve options.
            on_config_change: Optional callback invoked after every change.
            max_depth: Deepest nested bundle level that is expanded.
            seed_fixed: Seed root fixed slots into the selection map.
        """
        self._catalog = list(catalog)
        self._index = CatalogIndex(self._catalog)
        self._on_config_change = on_config_change
        self._max_depth = max_depth
        self._seed_fixed = seed_fixed
        self._product = product
        self._selections: SelectionState = {}
        self._result = ValidationResult()
        self.set_product(product)

    @property
    def product(self) -> Product:
        return self._product

    @property
    def selections(self) -> SelectionState:
        return dict(self._selections)

    @property
    def result(self) -> ValidationResult:
        return self._result

    @property
    def is_valid(self) -> bool:
        return self._result.is_valid

    def set_product(self, product: Product) -> ValidationResult:
        """Switch to another root product, discarding all selections."""
        self._product = product
        self._selections = initial_selections(product.bundle_items, seed_fixed=self._seed_fixed)
        logger.debug("Configuring %s (%s)", product.id, product.bundle_items)
        return self._refresh()

    def set_catalog(self, catalog: Sequence[Product]) -> ValidationResult:
        """Replace the catalog snapshot (e.g. once loading finished) and re-resolve."""
        self._catalog = list(catalog)
        self._index = CatalogIndex(self._catalog)
        return self._refresh()

    def select(self, path: str, option: str) -> ValidationResult:
        """Pick ``option`` for the slot at ``path``."""
        return self.dispatch(SelectOption(path=path, option=option))

    def reset(self) -> ValidationResult:
        """Clear every selection of the current product."""
        return self.dispatch(ResetSelections())

    def dispatch(self, action: SelectionAction) -> ValidationResult:
        """Apply a selection action and re-resolve the whole tree."""
        if isinstance(action, ResetSelections):
            self._selections = initial_selections(
                self._product.bundle_items, seed_fixed=self._seed_fixed
            )
        else:
            self._selections = reduce_selections(self._selections, action)
        return self._refresh()

    def slot_tree(self) -> list[SlotView]:
        """Slots currently visible for the product, with nested children."""
        return build_slot_tree(
            self._product.bundle_items,
            self._selections,
            self._index,
            max_depth=self._max_depth,
            root_product_id=self._product.id,
        )

    def _refresh(self) -> ValidationResult:
        self._result = resolve_product(
            self._product, self._selections, self._index, max_depth=self._max_depth
        )

        if self._on_config_change:
            self._on_config_change(
                self._result.is_valid,
                dict(self._selections),
                self._result.details_string,
                self._result.preview_product,
            )

        return self._result
