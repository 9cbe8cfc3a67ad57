"""Bundle string parsing."""

from rose_bundles.models.pydantic_models import Slot

SEGMENT_SEPARATOR = ","
OPTION_SEPARATOR = "/"
SELECTABLE_LABEL = "Select Option"


def parse_bundle_string(bundle_str: str | None) -> list[Slot]:
    """Parse a bundle definition into an ordered list of slots.

    Algorithm:
    1. Split on commas into segments, trimming each
    2. Drop empty segments
    3. Split each segment on slashes into options, trimming each
    4. Drop empty options (and the segment, if none remain)
    5. A single option makes a fixed slot, several make a selectable one

    Parsing is permissive: malformed input yields fewer slots, never an error.

    Args:
        bundle_str: Raw bundle text from the catalog, or None.

    Returns:
        Slots in left-to-right order. The position of a slot in this list is
        the index used in selection paths.

    Examples:
        >>> [s.options for s in parse_bundle_string("red-rose/pink-rose, chocolate")]
        [['red-rose', 'pink-rose'], ['chocolate']]
        >>> parse_bundle_string(None)
        []
    """
    if not bundle_str:
        return []

    slots: list[Slot] = []
    for segment in bundle_str.split(SEGMENT_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue

        options = [opt.strip() for opt in segment.split(OPTION_SEPARATOR)]
        options = [opt for opt in options if opt]
        if not options:
            continue

        is_fixed = len(options) == 1
        slots.append(
            Slot(
                options=options,
                is_fixed=is_fixed,
                label=options[0] if is_fixed else SELECTABLE_LABEL,
            )
        )

    return slots


def child_path(prefix: str, index: int) -> str:
    """Build the selection path of slot ``index`` under ``prefix``.

    Examples:
        >>> child_path("", 0)
        '0'
        >>> child_path("1.0", 2)
        '1.0.2'
    """
    return f"{prefix}.{index}" if prefix else str(index)
