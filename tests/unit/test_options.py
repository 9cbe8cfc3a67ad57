"""Unit tests for option classification and labels."""

import pytest

from rose_bundles.bundles.options import (
    CatalogIndex,
    find_product_for_option,
    format_option_name,
    get_option_label,
    is_literal_option,
    resolve_option,
)
from rose_bundles.models.pydantic_models import OptionKind, Product


@pytest.fixture
def catalog() -> list[Product]:
    """Small catalog with an id/name collision."""
    return [
        Product(id="rose-red", name="Red Rose"),
        Product(id="choc", name="Chocolate Box", bundleItems='"Dark"/"Milk"'),
        Product(id="red rose", name="Something Else"),
        Product(id="card-2", name="Card"),
        Product(id="card", name="Greeting Card"),
    ]


class TestFormatOptionName:
    """Tests for format_option_name."""

    def test_hyphenated_reference(self) -> None:
        """Hyphens become spaces and words are capitalized."""
        assert format_option_name("rose-red") == "Rose Red"
        assert format_option_name("mystery-item") == "Mystery Item"

    def test_literal_double_quotes(self) -> None:
        """Double-quoted literals are unquoted and kept verbatim."""
        assert format_option_name('"Happy Birthday"') == "Happy Birthday"

    def test_literal_single_quotes(self) -> None:
        """Single-quoted literals keep hyphens and case."""
        assert format_option_name("'get-well soon'") == "get-well soon"

    def test_only_first_letter_changes(self) -> None:
        """The rest of each word is left as written."""
        assert format_option_name("xl-tShirt") == "Xl TShirt"
        assert format_option_name("rose red") == "Rose red"

    def test_mismatched_quotes_are_not_literal(self) -> None:
        """Quotes must match to form a literal."""
        assert is_literal_option("\"oops'") is False
        assert format_option_name("\"oops'") == "\"oops'"

    def test_single_quote_char_is_not_literal(self) -> None:
        assert is_literal_option('"') is False


class TestCatalogLookup:
    """Tests for catalog matching of reference options."""

    def test_match_by_id_case_insensitive(self, catalog: list[Product]) -> None:
        product = find_product_for_option("ROSE-RED", catalog)

        assert product is not None
        assert product.name == "Red Rose"

    def test_match_by_name_case_insensitive(self, catalog: list[Product]) -> None:
        product = find_product_for_option("chocolate box", catalog)

        assert product is not None
        assert product.id == "choc"

    def test_id_takes_precedence_over_name(self, catalog: list[Product]) -> None:
        """'red rose' is one product's id and another product's name."""
        product = find_product_for_option("Red Rose", catalog)

        assert product is not None
        assert product.name == "Something Else"

    def test_id_match_wins_even_when_listed_later(self, catalog: list[Product]) -> None:
        """'card' is the name of card-2 and the id of a later product."""
        product = find_product_for_option("card", catalog)

        assert product is not None
        assert product.id == "card"

    def test_exact_match_only(self, catalog: list[Product]) -> None:
        """Partial ids do not match."""
        assert find_product_for_option("rose", catalog) is None

    def test_literal_never_looked_up(self, catalog: list[Product]) -> None:
        assert find_product_for_option('"choc"', catalog) is None

    def test_empty_catalog(self) -> None:
        assert find_product_for_option("rose-red", []) is None
        assert len(CatalogIndex([])) == 0


class TestResolveOption:
    """Tests for the tagged option resolution."""

    def test_literal(self, catalog: list[Product]) -> None:
        resolved = resolve_option('"choc"', CatalogIndex(catalog))

        assert resolved.kind == OptionKind.LITERAL
        assert resolved.label == "choc"
        assert resolved.product is None

    def test_catalog_reference(self, catalog: list[Product]) -> None:
        resolved = resolve_option("choc", CatalogIndex(catalog))

        assert resolved.kind == OptionKind.CATALOG_REF
        assert resolved.label == "Chocolate Box"
        assert resolved.product is not None
        assert resolved.product.id == "choc"

    def test_plain_text(self, catalog: list[Product]) -> None:
        resolved = resolve_option("rose-pink", CatalogIndex(catalog))

        assert resolved.kind == OptionKind.PLAIN_TEXT
        assert resolved.label == "Rose Pink"
        assert resolved.token == "rose-pink"

    def test_get_option_label(self, catalog: list[Product]) -> None:
        assert get_option_label("rose-red", catalog) == "Red Rose"
        assert get_option_label("teddy-bear", catalog) == "Teddy Bear"
