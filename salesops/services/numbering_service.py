"""Sequential document numbering per owner, entity type and year."""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from salesops.config.settings import (
    QUOTE_NUMBER_PREFIX,
    ORDER_NUMBER_PREFIX,
    NUMBER_SEQUENCE_WIDTH
)
from salesops.models.number_sequence import NumberSequence
from salesops.models.order import Order
from salesops.models.quote import Quote
from salesops.utils.errors import ValidationError

# entity type -> (prefix, model, number column)
NUMBERED_ENTITIES = {
    "quote": (QUOTE_NUMBER_PREFIX, Quote, Quote.quote_number),
    "order": (ORDER_NUMBER_PREFIX, Order, Order.order_number),
}


class NumberingService:
    """Generates human-readable numbers such as Q-2026-0001 and ORD-2026-0001."""

    @staticmethod
    def _entity(entity_type: str):
        try:
            return NUMBERED_ENTITIES[entity_type]
        except KeyError:
            raise ValidationError(f"Unknown numbered entity type: {entity_type}")

    @staticmethod
    def format_number(prefix: str, year: int, sequence: int) -> str:
        return f"{prefix}-{year}-{sequence:0{NUMBER_SEQUENCE_WIDTH}d}"

    @staticmethod
    def parse_sequence(number: Optional[str]) -> int:
        """Trailing numeric segment of a document number; 0 if it does not parse."""
        if not number:
            return 0
        try:
            return int(number.rsplit("-", 1)[-1])
        except ValueError:
            return 0

    @staticmethod
    def last_issued_sequence(db: Session, owner_id: str, entity_type: str, year: int) -> int:
        """
        Sequence of the most recently inserted document for this owner and year.

        "Most recent" is the highest insertion id, not the highest suffix, so a
        hand-edited number is continued from rather than skipped over.
        """
        prefix, model, number_column = NumberingService._entity(entity_type)
        row = db.query(number_column).filter(
            model.owner_id == owner_id,
            number_column.like(f"{prefix}-{year}-%")
        ).order_by(model.id.desc()).first()
        return NumberingService.parse_sequence(row[0]) if row else 0

    @staticmethod
    def next_number(db: Session, owner_id: str, entity_type: str, year: Optional[int] = None) -> str:
        """
        Draw the next number for an owner's quote or order.

        Must run inside the caller's transaction: the counter row is locked
        (on stores that support SELECT ... FOR UPDATE) and the increment is
        flushed, so it commits or rolls back together with the document.
        A missing counter row is seeded from existing documents.

        Args:
            db: Database session
            owner_id: Owner the number is scoped to
            entity_type: "quote" or "order"
            year: Calendar year, defaults to the current UTC year

        Returns:
            Formatted number, e.g. "Q-2026-0007"
        """
        prefix, _, _ = NumberingService._entity(entity_type)
        if year is None:
            year = datetime.utcnow().year

        sequence = db.query(NumberSequence).filter(
            NumberSequence.owner_id == owner_id,
            NumberSequence.entity_type == entity_type,
            NumberSequence.year == year
        ).with_for_update().first()

        if sequence is None:
            sequence = NumberSequence(
                owner_id=owner_id,
                entity_type=entity_type,
                year=year,
                last_value=NumberingService.last_issued_sequence(db, owner_id, entity_type, year)
            )
            db.add(sequence)

        sequence.last_value += 1
        db.flush()

        return NumberingService.format_number(prefix, year, sequence.last_value)
