"""Unit tests for catalog loading and filtering."""

import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from rose_bundles.catalog import (
    CatalogError,
    available_products,
    extract_filters,
    filter_products,
    find_product,
    load_catalog,
)
from rose_bundles.models.pydantic_models import Product, ProductFilters


@pytest.fixture
def raw_products() -> list[dict[str, Any]]:
    """Products as stored in the storefront snapshot (camelCase keys)."""
    return [
        {
            "id": "rose-red",
            "name": "Red Rose",
            "price": 60,
            "category": "Roses",
            "stock": 10,
            "imageUrl": "red.jpg",
            "description": "Long-stem red rose",
            "tags": ["rose", "classic"],
        },
        {
            "id": "choc",
            "name": "Chocolate Box",
            "price": 120,
            "category": "Sweets",
            "stock": 0,
            "imageUrl": "choc.jpg",
            "tags": ["sweets"],
            "bundleItems": '"Dark"/"Milk"',
        },
        {
            "id": "old",
            "name": "Old Bundle",
            "price": 90,
            "category": "Bundle",
            "available": False,
            "bundleItems": "rose-red, choc",
        },
    ]


@pytest.fixture
def products(raw_products: list[dict[str, Any]]) -> list[Product]:
    return [Product.model_validate(p) for p in raw_products]


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_load_json(self, tmp_path: Path, raw_products: list[dict[str, Any]]) -> None:
        path = tmp_path / "products.json"
        path.write_text(json.dumps(raw_products))

        products = load_catalog(path)

        assert [p.id for p in products] == ["rose-red", "choc", "old"]
        assert products[0].image_url == "red.jpg"
        assert products[1].bundle_items == '"Dark"/"Milk"'
        assert products[1].is_bundle is True
        assert products[0].is_bundle is False

    def test_load_yaml_mapping(self, tmp_path: Path, raw_products: list[dict[str, Any]]) -> None:
        import yaml

        path = tmp_path / "products.yaml"
        path.write_text(yaml.dump({"products": raw_products}))

        products = load_catalog(path)

        assert len(products) == 3

    def test_load_yaml_snake_case(self, tmp_path: Path) -> None:
        path = tmp_path / "products.yml"
        path.write_text("- id: choc\n  name: Chocolate Box\n  bundle_items: dark/milk\n")

        products = load_catalog(path)

        assert products[0].bundle_items == "dark/milk"

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "products.yaml"
        path.write_text("")

        assert load_catalog(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "products.json"
        path.write_text('"just a string"')

        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_invalid_product(self, tmp_path: Path) -> None:
        path = tmp_path / "products.json"
        path.write_text('[{"name": "No Id"}]')

        with pytest.raises(ValidationError):
            load_catalog(path)


class TestCatalogQueries:
    """Tests for availability, lookup and filtering."""

    def test_available_products(self, products: list[Product]) -> None:
        assert [p.id for p in available_products(products)] == ["rose-red", "choc"]

    def test_find_product(self, products: list[Product]) -> None:
        product = find_product(products, "choc")

        assert product is not None
        assert product.name == "Chocolate Box"
        assert find_product(products, "CHOC") is None

    def test_filter_by_category(self, products: list[Product]) -> None:
        result = filter_products(products, ProductFilters(category="Roses"))

        assert [p.id for p in result] == ["rose-red"]

    def test_filter_by_price(self, products: list[Product]) -> None:
        result = filter_products(products, ProductFilters(min_price=70, max_price=100))

        assert [p.id for p in result] == ["old"]

    def test_filter_in_stock(self, products: list[Product]) -> None:
        result = filter_products(products, ProductFilters(in_stock=True))

        assert [p.id for p in result] == ["rose-red"]

    def test_filter_by_any_tag(self, products: list[Product]) -> None:
        result = filter_products(products, ProductFilters(tags=["classic", "sweets"]))

        assert [p.id for p in result] == ["rose-red", "choc"]

    def test_search_query(self, products: list[Product]) -> None:
        assert [p.id for p in filter_products(products, ProductFilters(search_query="STEM"))] == [
            "rose-red"
        ]
        assert [p.id for p in filter_products(products, ProductFilters(search_query="bundle"))] == [
            "old"
        ]

    def test_no_filters(self, products: list[Product]) -> None:
        assert filter_products(products, ProductFilters()) == products

    def test_extract_filters(self, products: list[Product]) -> None:
        facets = extract_filters(products)

        assert facets.categories == ["Bundle", "Roses", "Sweets"]
        assert facets.tags == ["classic", "rose", "sweets"]
        assert facets.price_range.min == 60
        assert facets.price_range.max == 120

    def test_extract_filters_empty(self) -> None:
        facets = extract_filters([])

        assert facets.categories == []
        assert facets.price_range.min == 0
