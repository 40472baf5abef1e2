"""
Single-slot command relay.

WHAT: Mailbox holding at most one pending command for the game poller
WHY: A command must be handed to at most one reader, and only the newest matters
HOW: write() overwrites the slot, read() returns and clears it under one lock
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .slot_store import CommandSlot, SlotStore, MemorySlotStore
from ..utils.exceptions import ClientError
from ..utils.logger import get_logger, preview

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandAck:
    """Acknowledgement for a successful write."""
    message: str
    enqueued_at: datetime


class CommandRelay:
    """
    State machine: Empty -(write)-> Pending -(read)-> Empty.

    A write while Pending replaces the previous command (last write wins).
    """

    def __init__(self, store: Optional[SlotStore] = None, min_code_length: int = 5):
        self.store = store if store is not None else MemorySlotStore()
        self.min_code_length = min_code_length
        # Sync endpoints run on a thread pool; check-and-clear must not interleave
        self._lock = threading.Lock()

    def write(self, code: Optional[str]) -> CommandAck:
        """
        Store a command, replacing any pending one.

        Raises:
            ClientError: code is empty or shorter than min_code_length
        """
        if code is None or not code.strip():
            logger.warning("Rejected empty command")
            raise ClientError('Missing "code" in request body.')
        if len(code.strip()) < self.min_code_length:
            logger.warning(f"Rejected short command ({len(code.strip())} chars)")
            raise ClientError(
                f"Command too short: at least {self.min_code_length} characters required.",
                details={"min_length": self.min_code_length, "length": len(code.strip())},
            )

        enqueued_at = datetime.now(timezone.utc)
        with self._lock:
            replaced = self.store.has_pending()
            self.store.put(code, enqueued_at)

        logger.info(
            f"Queued command in {self.store.name} slot{' (replaced pending command)' if replaced else ''}: "
            f"{preview(code)}"
        )
        return CommandAck(message=f"Command queued successfully ({self.store.name}).", enqueued_at=enqueued_at)

    def read(self) -> CommandSlot:
        """
        Hand the pending command to this caller and clear the slot.

        Returns an empty CommandSlot when nothing is pending; that case never
        changes state.
        """
        with self._lock:
            slot = self.store.take()

        if slot.present:
            logger.info(f"Served and cleared command from {self.store.name} slot: {preview(slot.code)}")
        return slot

    def peek(self) -> bool:
        """Whether a command is pending, without consuming it."""
        with self._lock:
            return self.store.has_pending()

    def describe(self) -> dict:
        status = self.store.status()
        return {
            "store": self.store.name,
            "durable": self.store.durable,
            "available": status["available"],
            "error": status["error"],
            "pending": self.peek() if status["available"] else None,
            "min_code_length": self.min_code_length,
        }

    def close(self) -> None:
        self.store.close()


_relay_instance: Optional[CommandRelay] = None


def get_relay() -> CommandRelay:
    """
    Get the process-wide relay singleton.

    The store is chosen once from settings.RELAY_STORE.
    """
    global _relay_instance

    if _relay_instance is None:
        from ..core.config import settings

        if settings.RELAY_STORE == "sqlite":
            from .slot_store import SqlSlotStore
            store = SqlSlotStore(settings.DATABASE_URL, echo=settings.DEBUG)
        elif settings.RELAY_STORE == "memory":
            store = MemorySlotStore()
        else:
            raise ValueError(f"Unknown relay store: {settings.RELAY_STORE}")

        _relay_instance = CommandRelay(store, min_code_length=settings.RELAY_MIN_CODE_LENGTH)
        logger.info(f"Command relay initialized (store: {store.name}, durable: {store.durable})")

    return _relay_instance


def reset_relay() -> None:
    """Close and drop the relay singleton (useful for testing)."""
    global _relay_instance
    if _relay_instance is not None:
        _relay_instance.close()
    _relay_instance = None
