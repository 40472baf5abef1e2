"""
ORM models for the durable relay store.

WHAT: SQLAlchemy model for the single command slot row
WHY: Persist the pending command across process restarts
HOW: One table, one row (id=1), optimistic version column for read-and-clear
"""

from sqlalchemy import Column, Integer, Text, DateTime, CheckConstraint

from .database import Base

SLOT_ROW_ID = 1


class CommandSlotRow(Base):
    """
    Command slot table - at most one row ever exists.

    WHAT: Pending command text with its enqueue time
    WHY: Back the relay with storage shared between processes
    HOW: code is NULL when the slot is empty; version bumps on every change
    """
    __tablename__ = "command_slot"

    id = Column(Integer, primary_key=True, default=SLOT_ROW_ID)
    code = Column(Text, nullable=True)
    enqueued_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(f"id = {SLOT_ROW_ID}", name="check_single_slot"),
    )

    def __repr__(self):
        return f"<CommandSlotRow(pending={self.code is not None}, version={self.version})>"
