"""Columns shared by quotes and orders."""
from sqlalchemy import Column, String, Float, Text, CheckConstraint


class SalesDocumentMixin:
    """Owner scope, customer snapshot and financial totals of a quote or order."""
    owner_id = Column(String(255), nullable=False, index=True)

    # Customer snapshot, copied at creation/edit time
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(50), nullable=True)
    customer_address = Column(Text, nullable=True)

    # Financials: discount_amount and total are always derived from subtotal
    subtotal = Column(Float, nullable=False, default=0.0)
    discount_percent = Column(Float, nullable=False, default=0.0)
    discount_amount = Column(Float, nullable=False, default=0.0)
    total = Column(Float, nullable=False, default=0.0)

    notes = Column(Text, nullable=True)

    @staticmethod
    def document_constraints(prefix: str) -> tuple:
        return (
            CheckConstraint(
                "discount_percent >= 0 AND discount_percent <= 100",
                name=f"check_{prefix}_discount"
            ),
        )

    def apply_totals(self, totals: dict) -> None:
        """Copy subtotal/discount/total from a calculator result."""
        self.subtotal = totals["subtotal"]
        self.discount_percent = totals["discount_percent"]
        self.discount_amount = totals["discount_amount"]
        self.total = totals["total"]

    def customer_snapshot(self) -> dict:
        return {
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "customer_address": self.customer_address,
        }

    def financials(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount_percent": self.discount_percent,
            "discount_amount": self.discount_amount,
            "total": self.total,
        }
