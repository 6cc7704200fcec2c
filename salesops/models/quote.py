"""Quote model for database."""
from sqlalchemy import Column, String, Integer, Date, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from salesops.database.base import BaseModel
from salesops.models.sales_document import SalesDocumentMixin

QUOTE_STATUSES = ("draft", "sent", "approved", "rejected", "expired")

# The only status a quote may be converted to an order from
CONVERTIBLE_STATUS = "approved"


class Quote(SalesDocumentMixin, BaseModel):
    """A proposed sale with line items, discount and total, awaiting a customer decision."""
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_number = Column(String(32), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft", index=True)
    valid_until = Column(Date, nullable=True)

    # Relationships
    items = relationship(
        "QuoteItem",
        back_populates="quote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="QuoteItem.id"
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("owner_id", "quote_number", name="uq_quotes_owner_number"),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in QUOTE_STATUSES)),
            name="check_quote_status"
        ),
        *SalesDocumentMixin.document_constraints("quote"),
        {"sqlite_autoincrement": True}
    )

    def __repr__(self):
        return f"<Quote(id={self.id}, quote_number={self.quote_number}, status={self.status})>"

    def to_dict(self, include_items: bool = True):
        """Convert quote to dictionary."""
        data = {
            "id": self.id,
            "quote_number": self.quote_number,
            **self.customer_snapshot(),
            **self.financials(),
            "notes": self.notes,
            "valid_until": self.valid_until.isoformat() if self.valid_until else None,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data
