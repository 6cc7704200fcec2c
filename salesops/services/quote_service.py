"""Database-backed quote service."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session

from salesops.database.transaction import atomic
from salesops.models.quote import Quote, QUOTE_STATUSES
from salesops.models.quote_item import QuoteItem
from salesops.services.line_item_calculator import calculate_totals, apply_discount
from salesops.services.numbering_service import NumberingService
from salesops.utils.errors import ValidationError
from salesops.utils.logger import get_logger
from salesops.utils.validators import (
    coerce_id,
    sanitize_string,
    require_string,
    parse_int,
    parse_date,
    validate_status
)

logger = get_logger(__name__)

# Optional customer snapshot fields and their column widths
CUSTOMER_FIELDS = {
    "customer_email": 255,
    "customer_phone": 50,
    "customer_address": 2000,
}
NOTES_MAX_LENGTH = 5000
REQUIRED_ITEM_FIELDS = ("product_id", "product_name", "product_sku", "unit_price", "quantity")


def normalize_items(items: Any) -> List[Dict]:
    """
    Validate the product snapshot of each incoming line item.

    Prices and quantities are left for the calculator to coerce.

    Raises:
        ValidationError: If items is not a list or a line misses a field
    """
    if not isinstance(items, list):
        raise ValidationError("items must be a list", details={"field": "items"})

    normalized = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Item {index + 1} must be an object", details={"item_index": index})

        missing = [field for field in REQUIRED_ITEM_FIELDS if item.get(field) is None or item.get(field) == ""]
        if missing:
            raise ValidationError(
                f"Item {index + 1} is missing: {', '.join(missing)}",
                details={"item_index": index, "missing": missing}
            )

        normalized.append({
            "product_id": parse_int(item["product_id"], "product_id", min_value=1),
            "product_name": require_string(item["product_name"], "product_name"),
            "product_sku": require_string(item["product_sku"], "product_sku", max_length=100),
            "unit_price": item["unit_price"],
            "quantity": item["quantity"],
        })
    return normalized


def _build_items(lines: List[Dict]) -> List[QuoteItem]:
    return [
        QuoteItem(
            product_id=line["product_id"],
            product_name=line["product_name"],
            product_sku=line["product_sku"],
            unit_price=line["unit_price"],
            quantity=line["quantity"],
            line_total=line["line_total"]
        )
        for line in lines
    ]


class QuoteService:
    """Database-backed quote service. Every operation is scoped to one owner."""

    @staticmethod
    def create_quote(db: Session, owner_id: str, data: Dict) -> Quote:
        """
        Create a new draft quote with its items.

        The quote number, the quote row and its items are written in one
        transaction.

        Args:
            db: Database session
            owner_id: Owner of the new quote
            data: customer_name (required), customer_email, customer_phone,
                customer_address, discount_percent (default 0), notes,
                valid_until, items (non-empty list)

        Returns:
            The persisted Quote

        Raises:
            ValidationError: If required data is missing or malformed
            ConflictError: If the drawn quote number is already taken
        """
        if not owner_id:
            raise ValidationError("owner_id is required")

        customer_name = require_string(data.get("customer_name"), "customer_name")

        items = data.get("items")
        if not items:
            raise ValidationError("At least one item is required", details={"field": "items"})

        discount_percent = data.get("discount_percent")
        totals = calculate_totals(normalize_items(items), 0.0 if discount_percent is None else discount_percent)

        customer = {
            field: sanitize_string(data.get(field), max_length=max_length, default=None)
            for field, max_length in CUSTOMER_FIELDS.items()
        }
        notes = sanitize_string(data.get("notes"), max_length=NOTES_MAX_LENGTH, default=None)
        valid_until = parse_date(data.get("valid_until"), "valid_until")

        with atomic(db, "Create quote"):
            quote = Quote(
                owner_id=owner_id,
                quote_number=NumberingService.next_number(db, owner_id, "quote"),
                customer_name=customer_name,
                notes=notes,
                valid_until=valid_until,
                status="draft",
                **customer
            )
            quote.apply_totals(totals)
            quote.items = _build_items(totals["items"])
            db.add(quote)

        logger.info(
            f"Quote {quote.quote_number} created",
            extra={"owner_id": owner_id, "quote_id": quote.id, "total": quote.total}
        )
        return quote

    @staticmethod
    def get_quote(db: Session, owner_id: str, quote_id: Any) -> Optional[Quote]:
        """
        Get quote by ID.

        Returns None both when the quote does not exist and when it belongs
        to another owner.
        """
        quote_id = coerce_id(quote_id)
        if quote_id is None or not owner_id:
            return None

        return db.query(Quote).filter(
            Quote.id == quote_id,
            Quote.owner_id == owner_id
        ).first()

    @staticmethod
    def get_quote_by_number(db: Session, owner_id: str, quote_number: str) -> Optional[Quote]:
        """Get quote by its human-readable number."""
        if not quote_number or not owner_id:
            return None

        return db.query(Quote).filter(
            Quote.quote_number == quote_number,
            Quote.owner_id == owner_id
        ).first()

    @staticmethod
    def update_quote(db: Session, owner_id: str, quote_id: Any, data: Dict) -> Optional[Quote]:
        """
        Partially update a quote.

        Only keys present in data are changed. When "items" is present the
        whole item set is replaced and all financials are recomputed from the
        new items; otherwise discount amount and total are recomputed from the
        stored subtotal and the effective discount.

        Returns:
            Updated Quote, or None if not found for this owner
        """
        quote = QuoteService.get_quote(db, owner_id, quote_id)
        if not quote:
            return None

        # Validate everything before touching the row
        changes = {}
        if "customer_name" in data:
            changes["customer_name"] = require_string(data["customer_name"], "customer_name")
        for field, max_length in CUSTOMER_FIELDS.items():
            if field in data:
                changes[field] = sanitize_string(data[field], max_length=max_length, default=None)
        if "notes" in data:
            changes["notes"] = sanitize_string(data["notes"], max_length=NOTES_MAX_LENGTH, default=None)
        if "valid_until" in data:
            changes["valid_until"] = parse_date(data["valid_until"], "valid_until")
        if "status" in data:
            changes["status"] = validate_status(data["status"], QUOTE_STATUSES, "quote")

        discount_percent = data.get("discount_percent")
        if discount_percent is None:
            discount_percent = quote.discount_percent

        new_items = None
        if data.get("items") is not None:
            totals = calculate_totals(normalize_items(data["items"]), discount_percent)
            new_items = _build_items(totals["items"])
        else:
            totals = apply_discount(quote.subtotal, discount_percent)

        with atomic(db, "Update quote"):
            for field, value in changes.items():
                setattr(quote, field, value)
            quote.apply_totals(totals)
            if new_items is not None:
                # delete-orphan cascade removes the previous lines
                quote.items = new_items
            quote.updated_at = datetime.utcnow()

        return quote

    @staticmethod
    def delete_quote(db: Session, owner_id: str, quote_id: Any) -> bool:
        """
        Delete quote and, by cascade, its items.
        Orders converted from it keep their data; their quote_id becomes NULL.

        Returns:
            True if deleted, False if not found for this owner
        """
        quote = QuoteService.get_quote(db, owner_id, quote_id)
        if not quote:
            return False

        quote_number = quote.quote_number
        with atomic(db, "Delete quote"):
            db.delete(quote)

        logger.info(f"Quote {quote_number} deleted", extra={"owner_id": owner_id})
        return True

    @staticmethod
    def list_quotes(db: Session, owner_id: str, status: Optional[str] = None) -> List[Quote]:
        """
        List the owner's quotes, newest first.
        If status is provided, only quotes in that status are returned.
        """
        if not owner_id:
            return []

        query = db.query(Quote).filter(Quote.owner_id == owner_id)
        if status:
            validate_status(status, QUOTE_STATUSES, "quote")
            query = query.filter(Quote.status == status)

        return query.order_by(Quote.created_at.desc(), Quote.id.desc()).all()

    @staticmethod
    def get_stats(db: Session, owner_id: str) -> Dict[str, int]:
        """Count the owner's quotes per status, plus an overall total."""
        stats = {status: 0 for status in QUOTE_STATUSES}
        rows = db.query(Quote.status, func.count(Quote.id)).filter(
            Quote.owner_id == owner_id
        ).group_by(Quote.status).all()

        for status, count in rows:
            stats[status] = count
        stats["total"] = sum(stats.values())
        return stats
