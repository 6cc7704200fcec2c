"""Order model for database."""
from sqlalchemy import Column, String, Integer, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from salesops.database.base import BaseModel
from salesops.models.sales_document import SalesDocumentMixin

ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")


class Order(SalesDocumentMixin, BaseModel):
    """A confirmed sale, created only by converting an approved quote."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(32), nullable=False, index=True)
    # Back-reference to the source quote; survives deletion of the quote as NULL
    quote_id = Column(Integer, ForeignKey("quotes.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.id"
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("owner_id", "order_number", name="uq_orders_owner_number"),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in ORDER_STATUSES)),
            name="check_order_status"
        ),
        *SalesDocumentMixin.document_constraints("order"),
        {"sqlite_autoincrement": True}
    )

    def __repr__(self):
        return f"<Order(id={self.id}, order_number={self.order_number}, status={self.status})>"

    def to_dict(self, include_items: bool = True):
        """Convert order to dictionary."""
        data = {
            "id": self.id,
            "order_number": self.order_number,
            "quote_id": self.quote_id,
            **self.customer_snapshot(),
            **self.financials(),
            "notes": self.notes,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data
