"""Pydantic models for data validation."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Path ("0", "1.0.2") -> chosen option token for that slot
SelectionState = dict[str, str]


class OptionKind(str, Enum):
    """How an option token inside a bundle string is interpreted."""

    LITERAL = "literal"
    CATALOG_REF = "catalog_ref"
    PLAIN_TEXT = "plain_text"


class Product(BaseModel):
    """A catalog product, as served by the storefront's product snapshot."""

    id: str = Field(..., description="Catalog identifier, e.g. 'rose-red'")
    name: str = Field(..., description="Display name")
    image_url: str = Field("", alias="imageUrl")
    description: str = ""
    bundle_items: str | None = Field(
        None, alias="bundleItems", description="Bundle definition string, if this is a bundle"
    )
    price: float = Field(0.0, ge=0)
    category: str = ""
    stock: int = 0
    tags: list[str] = Field(default_factory=list)
    available: bool = True

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_bundle(self) -> bool:
        """Whether this product carries its own bundle definition."""
        return bool(self.bundle_items)


class Slot(BaseModel):
    """One comma-separated unit of a bundle string."""

    options: list[str] = Field(..., min_length=1, description="Slash-separated alternatives")
    is_fixed: bool = Field(..., description="True when there is nothing to choose")
    label: str = Field("Select Option", description="Single option for fixed slots")

    model_config = ConfigDict(frozen=True)


class ResolvedOption(BaseModel):
    """An option token classified against the catalog."""

    token: str
    kind: OptionKind
    label: str
    product: Product | None = None

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    """Outcome of resolving a selection tree against the catalog."""

    is_valid: bool = False
    details_string: str = ""
    preview_product: Product | None = None

    model_config = ConfigDict(frozen=True)


class SlotView(BaseModel):
    """Renderable view of one slot and whatever is nested under its choice."""

    path: str
    index: int
    is_fixed: bool
    options: list[ResolvedOption] = Field(default_factory=list)
    selected: ResolvedOption | None = None
    children: list["SlotView"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ProductFilters(BaseModel):
    """Criteria for narrowing the catalog listing."""

    category: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    in_stock: bool = False
    tags: list[str] = Field(default_factory=list)
    search_query: str | None = None


class PriceRange(BaseModel):
    """Lowest and highest price in a set of products."""

    min: float = 0.0
    max: float = 0.0


class CatalogFilters(BaseModel):
    """Filter facets available for a set of products."""

    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    price_range: PriceRange = Field(default_factory=PriceRange)


class CartItem(BaseModel):
    """A cart line, optionally carrying a flattened bundle configuration."""

    cart_item_id: str
    product: Product
    quantity: int = Field(1, ge=1)
    bundle_details: str | None = Field(
        None, description="Human-readable configuration summary (one-way flatten)"
    )

    model_config = ConfigDict(frozen=True)


class ResolverSettings(BaseModel):
    """Runtime settings loaded from config/settings.yaml."""

    max_depth: int = Field(8, ge=1, description="Deepest nested bundle level that is expanded")
    catalog_path: Path | None = Field(None, description="Default product snapshot")
    seed_fixed_selections: bool = Field(
        False, description="Seed root fixed slots into the selection map (legacy mode)"
    )

    model_config = ConfigDict(frozen=True)
