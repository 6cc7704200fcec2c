"""Shared columns for quote and order line items."""
from sqlalchemy import Column, String, Float, Integer, CheckConstraint


class LineItemMixin:
    """
    Denormalized product snapshot taken when the line was added.

    product_id is kept for reference only; name, SKU and price are copied so
    later catalog changes never alter an existing quote or order.
    """
    product_id = Column(Integer, nullable=False)
    product_name = Column(String(255), nullable=False)
    product_sku = Column(String(100), nullable=False)
    unit_price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    line_total = Column(Float, nullable=False)

    @staticmethod
    def line_constraints(prefix: str) -> tuple:
        return (
            CheckConstraint("quantity >= 1", name=f"check_{prefix}_quantity"),
            CheckConstraint("unit_price >= 0", name=f"check_{prefix}_unit_price"),
        )

    def snapshot(self) -> dict:
        """Product snapshot fields, as copied from a quote line onto an order line."""
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "product_sku": self.product_sku,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "line_total": self.line_total,
        }
