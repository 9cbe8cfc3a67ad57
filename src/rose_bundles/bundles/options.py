"""Option token classification and display labels."""

from collections.abc import Iterable

from rose_bundles.models.pydantic_models import OptionKind, Product, ResolvedOption

_QUOTES = ("'", '"')


def is_literal_option(option: str) -> bool:
    """Whether the option is wrapped in a matching pair of quotes."""
    return len(option) >= 2 and option[0] in _QUOTES and option[-1] == option[0]


def unquote(option: str) -> str:
    """Strip the surrounding quotes of a literal option, if any."""
    return option[1:-1] if is_literal_option(option) else option


def format_option_name(option: str) -> str:
    """Pretty-print an option token that is not backed by a product.

    Literals lose their quotes and are otherwise kept verbatim. Other tokens
    have hyphens turned into spaces and each word capitalized.

    Examples:
        >>> format_option_name("rose-red")
        'Rose Red'
        >>> format_option_name('"Happy Birthday"')
        'Happy Birthday'
    """
    if is_literal_option(option):
        return unquote(option)

    return " ".join(word[:1].upper() + word[1:] for word in option.split("-"))


class CatalogIndex:
    """Case-insensitive id and name lookup over a product snapshot.

    When several products share an id (or name) the first one listed wins.
    Id matches always take precedence over name matches.
    """

    def __init__(self, products: Iterable[Product]) -> None:
        self._by_id: dict[str, Product] = {}
        self._by_name: dict[str, Product] = {}
        for product in products:
            self._by_id.setdefault(product.id.lower(), product)
            self._by_name.setdefault(product.name.lower(), product)

    def __len__(self) -> int:
        return len(self._by_id)

    def find(self, option: str) -> Product | None:
        """Find the product an unquoted option refers to."""
        if not option or is_literal_option(option):
            return None

        key = option.lower()
        return self._by_id.get(key) or self._by_name.get(key)


def find_product_for_option(option: str, products: Iterable[Product]) -> Product | None:
    """Find the catalog product an option refers to, by id then by name."""
    return CatalogIndex(products).find(option)


def resolve_option(option: str, index: CatalogIndex) -> ResolvedOption:
    """Classify an option token once and compute its display label.

    Args:
        option: Option token as written in the bundle string (or selected).
        index: Catalog lookup to match references against.

    Returns:
        ResolvedOption tagged LITERAL, CATALOG_REF or PLAIN_TEXT.
    """
    if is_literal_option(option):
        return ResolvedOption(token=option, kind=OptionKind.LITERAL, label=unquote(option))

    product = index.find(option)
    if product is not None:
        return ResolvedOption(
            token=option, kind=OptionKind.CATALOG_REF, label=product.name, product=product
        )

    return ResolvedOption(
        token=option, kind=OptionKind.PLAIN_TEXT, label=format_option_name(option)
    )


def get_option_label(option: str, products: Iterable[Product]) -> str:
    """Display label for an option: product name if found, else formatted text."""
    return resolve_option(option, CatalogIndex(products)).label
