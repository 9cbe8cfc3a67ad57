"""Cart lines carrying flattened bundle configurations."""

import uuid
from collections.abc import Sequence

from rose_bundles.models.pydantic_models import CartItem, Product


def _new_cart_item_id(product_id: str) -> str:
    return f"{product_id}-{uuid.uuid4().hex[:9]}"


def add_to_cart(
    cart: Sequence[CartItem],
    product: Product,
    bundle_details: str | None = None,
) -> list[CartItem]:
    """Add one unit of a product to the cart.

    A line with the same product id and the same bundle details is bumped by
    one; otherwise a new line is appended. The cart passed in is not modified.

    Args:
        cart: Current cart lines.
        product: Product being added.
        bundle_details: Configuration summary from the resolver, for bundles.

    Returns:
        New list of cart lines.
    """
    details = bundle_details or None

    for position, item in enumerate(cart):
        if item.product.id == product.id and item.bundle_details == details:
            updated = list(cart)
            updated[position] = item.model_copy(update={"quantity": item.quantity + 1})
            return updated

    return [
        *cart,
        CartItem(
            cart_item_id=_new_cart_item_id(product.id),
            product=product,
            quantity=1,
            bundle_details=details,
        ),
    ]


def remove_from_cart(cart: Sequence[CartItem], cart_item_id: str) -> list[CartItem]:
    """Drop a cart line by its id."""
    return [item for item in cart if item.cart_item_id != cart_item_id]


def cart_total(cart: Sequence[CartItem]) -> float:
    """Sum of price times quantity over all lines."""
    return sum(item.product.price * item.quantity for item in cart)


def format_cart_items(cart: Sequence[CartItem]) -> str:
    """Order summary line: "Name (details) xN, ..."."""
    parts = []
    for item in cart:
        details = f" ({item.bundle_details})" if item.bundle_details else ""
        parts.append(f"{item.product.name}{details} x{item.quantity}")
    return ", ".join(parts)


def format_bundle_details(cart: Sequence[CartItem]) -> str:
    """Bundle column of an order: "Name: [details]; ..." for configured lines only."""
    return "; ".join(
        f"{item.product.name}: [{item.bundle_details}]" for item in cart if item.bundle_details
    )
