"""Selection state transitions for a bundle configuration."""

from collections.abc import Mapping
from dataclasses import dataclass

from rose_bundles.bundles.grammar import parse_bundle_string
from rose_bundles.models.pydantic_models import SelectionState


@dataclass(frozen=True)
class SelectOption:
    """The user picked ``option`` for the slot at ``path``."""

    path: str
    option: str


@dataclass(frozen=True)
class ResetSelections:
    """The configured product changed; start over."""


SelectionAction = SelectOption | ResetSelections


def apply_selection(selections: Mapping[str, str], path: str, new_option: str) -> SelectionState:
    """Set the choice at ``path`` and purge everything nested under it.

    A different choice may be a different product with different nested
    slots (or none), so any descendant selection is stale once its ancestor
    changes. Re-picking the same option purges descendants as well.

    Args:
        selections: Current selection state (not modified).
        path: Dot-joined slot path being chosen.
        new_option: Option token picked for that slot.

    Returns:
        New selection state.

    Example:
        >>> apply_selection({"0": "a", "0.0": "x", "1": "c"}, "0", "b")
        {'1': 'c', '0': 'b'}
    """
    descendant_prefix = f"{path}."
    updated = {
        key: value for key, value in selections.items() if not key.startswith(descendant_prefix)
    }
    updated[path] = new_option
    return updated


def reduce_selections(state: Mapping[str, str], action: SelectionAction) -> SelectionState:
    """Pure reducer over selection actions."""
    if isinstance(action, SelectOption):
        return apply_selection(state, action.path, action.option)
    if isinstance(action, ResetSelections):
        return {}
    raise TypeError(f"Unknown selection action: {action!r}")


def initial_selections(bundle_str: str | None, seed_fixed: bool = False) -> SelectionState:
    """Selection state for a freshly opened bundle.

    Fixed slots are re-derived during resolution, so the map normally starts
    empty. With ``seed_fixed`` the root-level fixed slots are stored under
    their index, as the older flat bundle picker did; resolution ignores
    those entries, so both modes resolve identically.
    """
    if not seed_fixed:
        return {}

    return {
        str(i): slot.options[0]
        for i, slot in enumerate(parse_bundle_string(bundle_str))
        if slot.is_fixed
    }
