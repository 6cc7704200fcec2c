"""NumberSequence model: per-owner, per-year document counters."""
from sqlalchemy import Column, String, Integer, UniqueConstraint

from salesops.database.base import BaseModel


class NumberSequence(BaseModel):
    """
    Last issued sequence value for one (owner, entity type, year).

    The row is locked and incremented in the same transaction that inserts
    the numbered quote or order, so two writers never draw the same value.
    """
    __tablename__ = "number_sequences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(255), nullable=False, index=True)
    entity_type = Column(String(20), nullable=False)
    year = Column(Integer, nullable=False)
    last_value = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("owner_id", "entity_type", "year", name="uq_number_sequences_scope"),
    )

    def __repr__(self):
        return (
            f"<NumberSequence(owner_id={self.owner_id}, entity_type={self.entity_type}, "
            f"year={self.year}, last_value={self.last_value})>"
        )
