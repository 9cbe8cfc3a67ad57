"""Data models for bundle configuration."""

from rose_bundles.models.pydantic_models import (
    CartItem,
    OptionKind,
    Product,
    ResolvedOption,
    ResolverSettings,
    SelectionState,
    Slot,
    SlotView,
    ValidationResult,
)

__all__ = [
    "CartItem",
    "OptionKind",
    "Product",
    "ResolvedOption",
    "ResolverSettings",
    "SelectionState",
    "Slot",
    "SlotView",
    "ValidationResult",
]
