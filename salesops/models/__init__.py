"""Models package initialization."""
from salesops.models.quote import Quote, QUOTE_STATUSES, CONVERTIBLE_STATUS
from salesops.models.quote_item import QuoteItem
from salesops.models.order import Order, ORDER_STATUSES
from salesops.models.order_item import OrderItem
from salesops.models.number_sequence import NumberSequence

__all__ = [
    "Quote",
    "QuoteItem",
    "Order",
    "OrderItem",
    "NumberSequence",
    "QUOTE_STATUSES",
    "ORDER_STATUSES",
    "CONVERTIBLE_STATUS"
]
