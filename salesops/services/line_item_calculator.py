"""Line-item total and discount calculation for quotes and orders."""
from typing import Dict, Iterable, List

from salesops.utils.errors import ValidationError
from salesops.utils.validators import parse_float, parse_int


def calculate_line_total(unit_price, quantity) -> Dict:
    """
    Calculate the total of a single line.

    Args:
        unit_price: Non-negative price per unit
        quantity: Positive whole quantity

    Returns:
        Dictionary with the coerced unit_price, quantity and line_total
    """
    unit_price = parse_float(unit_price, "unit_price", min_value=0.0)
    quantity = parse_int(quantity, "quantity", min_value=1)
    return {
        "unit_price": unit_price,
        "quantity": quantity,
        "line_total": unit_price * quantity
    }


def apply_discount(subtotal: float, discount_percent) -> Dict:
    """
    Apply a percentage discount to a subtotal.

    No rounding is applied here; currency rounding belongs to presentation.

    Returns:
        Dictionary with subtotal, discount_percent, discount_amount and total
    """
    discount_percent = parse_float(discount_percent, "discount_percent", min_value=0.0, max_value=100.0)
    discount_amount = subtotal * discount_percent / 100
    return {
        "subtotal": subtotal,
        "discount_percent": discount_percent,
        "discount_amount": discount_amount,
        "total": subtotal - discount_amount
    }


def calculate_totals(items: Iterable[Dict], discount_percent=0.0) -> Dict:
    """
    Calculate line totals, subtotal, discount and grand total.

    Args:
        items: Ordered line items, each with unit_price and quantity
        discount_percent: Discount percentage (0-100) applied to the subtotal

    Returns:
        Dictionary with the items (line_total added, other keys preserved),
        subtotal, discount_percent, discount_amount and total.
        An empty item list yields zero totals.

    Raises:
        ValidationError: If a price, quantity or the discount is invalid
    """
    items_with_totals: List[Dict] = []
    subtotal = 0.0

    for index, item in enumerate(items):
        try:
            line = calculate_line_total(item.get("unit_price"), item.get("quantity"))
        except ValidationError as e:
            raise ValidationError(
                f"Item {index + 1}: {e.message}",
                details={"item_index": index, **(e.details or {})}
            ) from e
        items_with_totals.append({**item, **line})
        subtotal += line["line_total"]

    totals = apply_discount(subtotal, discount_percent)
    totals["items"] = items_with_totals
    totals["item_count"] = len(items_with_totals)
    return totals
