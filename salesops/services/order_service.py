"""Database-backed order service."""
from typing import Any, Dict, List, Optional
from datetime import datetime
from sqlalchemy import func
from sqlalchemy.orm import Session

from salesops.database.transaction import atomic
from salesops.models.order import Order, ORDER_STATUSES
from salesops.services.quote_service import NOTES_MAX_LENGTH
from salesops.utils.logger import get_logger
from salesops.utils.validators import coerce_id, sanitize_string, validate_status

logger = get_logger(__name__)


class OrderService:
    """
    Order reads and post-creation edits.

    Orders are never created here; see ConversionService. Once an order
    exists its items and financials are immutable.
    """

    @staticmethod
    def get_order(db: Session, owner_id: str, order_id: Any) -> Optional[Order]:
        """Get order by ID, or None if absent or owned by someone else."""
        order_id = coerce_id(order_id)
        if order_id is None or not owner_id:
            return None

        return db.query(Order).filter(
            Order.id == order_id,
            Order.owner_id == owner_id
        ).first()

    @staticmethod
    def get_order_by_number(db: Session, owner_id: str, order_number: str) -> Optional[Order]:
        """Get order by its human-readable number."""
        if not order_number or not owner_id:
            return None

        return db.query(Order).filter(
            Order.order_number == order_number,
            Order.owner_id == owner_id
        ).first()

    @staticmethod
    def list_orders(db: Session, owner_id: str, status: Optional[str] = None) -> List[Order]:
        """List the owner's orders, newest first, optionally filtered by status."""
        if not owner_id:
            return []

        query = db.query(Order).filter(Order.owner_id == owner_id)
        if status:
            validate_status(status, ORDER_STATUSES, "order")
            query = query.filter(Order.status == status)

        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    @staticmethod
    def update_order(db: Session, owner_id: str, order_id: Any, data: Dict) -> Optional[Order]:
        """
        Update an order's status and/or notes.

        Any listed status may follow any other; no transition rules apply.
        Keys other than status and notes are ignored.

        Returns:
            Updated Order, or None if not found for this owner
        """
        order = OrderService.get_order(db, owner_id, order_id)
        if not order:
            return None

        status = None
        if data.get("status") is not None:
            status = validate_status(data["status"], ORDER_STATUSES, "order")

        with atomic(db, "Update order"):
            previous_status = order.status
            if status is not None:
                order.status = status
            if "notes" in data:
                order.notes = sanitize_string(data["notes"], max_length=NOTES_MAX_LENGTH, default=None)
            order.updated_at = datetime.utcnow()

        if status is not None and status != previous_status:
            logger.info(
                f"Order {order.order_number} moved from {previous_status} to {status}",
                extra={"owner_id": owner_id, "order_id": order.id}
            )
        return order

    @staticmethod
    def delete_order(db: Session, owner_id: str, order_id: Any) -> bool:
        """
        Delete order and its items.

        Returns:
            True if deleted, False if not found for this owner
        """
        order = OrderService.get_order(db, owner_id, order_id)
        if not order:
            return False

        order_number = order.order_number
        with atomic(db, "Delete order"):
            db.delete(order)

        logger.info(f"Order {order_number} deleted", extra={"owner_id": owner_id})
        return True

    @staticmethod
    def get_stats(db: Session, owner_id: str) -> Dict[str, int]:
        """Count the owner's orders per status, plus an overall total."""
        stats = {status: 0 for status in ORDER_STATUSES}
        rows = db.query(Order.status, func.count(Order.id)).filter(
            Order.owner_id == owner_id
        ).group_by(Order.status).all()

        for status, count in rows:
            stats[status] = count
        stats["total"] = sum(stats.values())
        return stats
