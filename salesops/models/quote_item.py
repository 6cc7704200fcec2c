"""QuoteItem model for database."""
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from salesops.database.base import BaseModel
from salesops.models.line_item import LineItemMixin


class QuoteItem(LineItemMixin, BaseModel):
    """A product line on a quote. Owned exclusively by its quote."""
    __tablename__ = "quote_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_id = Column(Integer, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    quote = relationship("Quote", back_populates="items")

    __table_args__ = LineItemMixin.line_constraints("quote_item")

    def __repr__(self):
        return f"<QuoteItem(id={self.id}, product_sku={self.product_sku}, quantity={self.quantity})>"

    def to_dict(self):
        """Convert quote item to dictionary."""
        return {
            "id": self.id,
            "quote_id": self.quote_id,
            **self.snapshot()
        }
