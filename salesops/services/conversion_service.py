"""Conversion of approved quotes into orders."""
from typing import Any, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from salesops.database.transaction import atomic
from salesops.models.order import Order
from salesops.models.order_item import OrderItem
from salesops.models.quote import Quote, CONVERTIBLE_STATUS
from salesops.services.numbering_service import NumberingService
from salesops.services.order_service import OrderService
from salesops.services.quote_service import QuoteService
from salesops.utils.errors import NotFoundError, PreconditionFailed
from salesops.utils.logger import get_logger

logger = get_logger(__name__)


class ConversionService:
    """Moves an approved quote into a new order as one atomic unit."""

    @staticmethod
    def ensure_convertible(quote: Optional[Quote]) -> Quote:
        """
        Check the conversion preconditions.

        Called by the request boundary before convert_quote_to_order.

        Raises:
            NotFoundError: If the quote does not exist for the caller
            PreconditionFailed: If the quote is not approved
        """
        if quote is None:
            raise NotFoundError("Quote not found")
        if quote.status != CONVERTIBLE_STATUS:
            raise PreconditionFailed(
                f"Can only convert an approved quote to an order (quote is {quote.status})"
            )
        return quote

    @staticmethod
    def convert_quote_to_order(db: Session, owner_id: str, quote_id: Any) -> Optional[Order]:
        """
        Convert a quote into a pending order.

        In a single transaction: draws an ORD number for the owner, inserts
        the order with the quote's customer snapshot and financials copied
        verbatim, copies every quote line onto an order line without
        recalculating, and re-asserts the quote's approved status. Nothing
        is written if any step fails.

        Status preconditions are not checked here; see ensure_convertible.

        Returns:
            The new Order with its items, or None if the quote is not found

        Raises:
            ConflictError: If the drawn order number is already taken
            InternalError: On any other storage failure
        """
        quote = QuoteService.get_quote(db, owner_id, quote_id)
        if quote is None:
            return None

        with atomic(db, "Convert quote to order"):
            order = Order(
                owner_id=quote.owner_id,
                order_number=NumberingService.next_number(db, quote.owner_id, "order"),
                quote_id=quote.id,
                notes=quote.notes,
                status="pending",
                **quote.customer_snapshot(),
                **quote.financials()
            )
            order.items = [OrderItem(**item.snapshot()) for item in quote.items]
            db.add(order)

            quote.status = CONVERTIBLE_STATUS
            quote.updated_at = datetime.utcnow()

        logger.info(
            f"Quote {quote.quote_number} converted to order {order.order_number}",
            extra={"owner_id": owner_id, "quote_id": quote.id, "order_id": order.id}
        )
        return OrderService.get_order(db, owner_id, order.id)
