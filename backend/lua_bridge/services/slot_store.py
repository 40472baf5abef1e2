"""
Storage backends for the single command slot.

WHAT: In-memory and SQL-backed holders for at most one pending command
WHY: Durability is a deployment choice, not something to guess at
HOW: Both stores expose put/take/has_pending; take() reads and clears in one step
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from ..core.database import (
    create_db_engine,
    create_session_factory,
    session_scope,
    init_db,
    close_db,
    ping_database,
)
from ..core.models import CommandSlotRow, SLOT_ROW_ID
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandSlot:
    """Snapshot of the slot handed to a reader."""
    code: str = ""
    enqueued_at: Optional[datetime] = None
    present: bool = False

    @classmethod
    def empty(cls) -> "CommandSlot":
        return cls()


class SlotStore(Protocol):
    """Interface shared by slot stores. Callers serialize access."""

    name: str
    durable: bool

    def put(self, code: str, enqueued_at: datetime) -> None:
        ...

    def take(self) -> CommandSlot:
        ...

    def has_pending(self) -> bool:
        ...

    def status(self) -> dict:
        ...

    def close(self) -> None:
        ...


class MemorySlotStore:
    """
    Process-memory slot.

    Assumes one hot instance: a write served by one process is invisible to a
    read served by another, and the slot is lost when the process recycles.
    """

    name = "memory"
    durable = False

    def __init__(self):
        self._code: Optional[str] = None
        self._enqueued_at: Optional[datetime] = None

    def put(self, code: str, enqueued_at: datetime) -> None:
        self._code = code
        self._enqueued_at = enqueued_at

    def take(self) -> CommandSlot:
        if self._code is None:
            return CommandSlot.empty()
        slot = CommandSlot(code=self._code, enqueued_at=self._enqueued_at, present=True)
        self._code = None
        self._enqueued_at = None
        return slot

    def has_pending(self) -> bool:
        return self._code is not None

    def status(self) -> dict:
        return {"available": True, "error": None}

    def close(self) -> None:
        pass


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlSlotStore:
    """
    Single-row SQL slot shared by every process pointing at the same database.

    take() clears the row with an UPDATE guarded by the version it read, so
    two readers racing across processes cannot both receive the command.
    """

    name = "sqlite"
    durable = True

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_db_engine(database_url, echo=echo)
        init_db(self.engine)
        self._sessions = create_session_factory(self.engine)
        self._ensure_row()

    def _ensure_row(self) -> None:
        try:
            with session_scope(self._sessions) as db:
                if db.get(CommandSlotRow, SLOT_ROW_ID) is None:
                    db.add(CommandSlotRow(id=SLOT_ROW_ID, code=None, enqueued_at=None, version=0))
        except IntegrityError:
            # Another process created the row first
            logger.debug("Command slot row already present")

    def put(self, code: str, enqueued_at: datetime) -> None:
        with session_scope(self._sessions) as db:
            db.execute(
                update(CommandSlotRow)
                .where(CommandSlotRow.id == SLOT_ROW_ID)
                .values(code=code, enqueued_at=enqueued_at, version=CommandSlotRow.version + 1)
                .execution_options(synchronize_session=False)
            )

    def take(self) -> CommandSlot:
        with session_scope(self._sessions) as db:
            row = db.execute(
                select(CommandSlotRow.code, CommandSlotRow.enqueued_at, CommandSlotRow.version)
                .where(CommandSlotRow.id == SLOT_ROW_ID)
            ).one_or_none()
            if row is None or row.code is None:
                return CommandSlot.empty()

            result = db.execute(
                update(CommandSlotRow)
                .where(CommandSlotRow.id == SLOT_ROW_ID, CommandSlotRow.version == row.version)
                .values(code=None, enqueued_at=None, version=row.version + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                # Another reader cleared it, or a newer write replaced it
                logger.info("Command slot changed during read; reporting empty")
                return CommandSlot.empty()

            return CommandSlot(code=row.code, enqueued_at=_as_utc(row.enqueued_at), present=True)

    def has_pending(self) -> bool:
        with session_scope(self._sessions) as db:
            code = db.execute(
                select(CommandSlotRow.code).where(CommandSlotRow.id == SLOT_ROW_ID)
            ).scalar_one_or_none()
        return code is not None

    def status(self) -> dict:
        db_status = ping_database(self.engine)
        return {"available": db_status["available"], "error": db_status["error"]}

    def close(self) -> None:
        close_db(self.engine)
