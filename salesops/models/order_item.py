"""OrderItem model for database."""
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from salesops.database.base import BaseModel
from salesops.models.line_item import LineItemMixin


class OrderItem(LineItemMixin, BaseModel):
    """A product line on an order, copied verbatim from the source quote line."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    order = relationship("Order", back_populates="items")

    __table_args__ = LineItemMixin.line_constraints("order_item")

    def __repr__(self):
        return f"<OrderItem(id={self.id}, product_sku={self.product_sku}, quantity={self.quantity})>"

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            **self.snapshot()
        }
