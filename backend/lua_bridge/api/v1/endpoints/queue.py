"""
Command relay endpoints.

WHAT: POST /queue stores a command, GET /queue hands it to the game poller once
WHY: The web client and the game server never talk to each other directly
HOW: Thin wrappers over the process-wide CommandRelay
"""

from fastapi import APIRouter

from ....services.command_relay import get_relay
from ....models.api_schemas import QueueWriteRequest, QueueWriteResponse, QueueReadResponse

router = APIRouter()


@router.post("/queue", response_model=QueueWriteResponse)
def queue_command(body: QueueWriteRequest):
    """
    Queue a command, replacing any pending one.

    Raises:
        ClientError: Empty or too-short code (400, slot unchanged)
    """
    ack = get_relay().write(body.code)
    return QueueWriteResponse(message=ack.message, enqueued_at=ack.enqueued_at)


@router.get("/queue", response_model=QueueReadResponse)
def dequeue_command():
    """
    Read and clear the pending command.

    An empty slot answers pending=false with code "" rather than a blank body,
    so the poller can tell "nothing pending" from a transport glitch.
    """
    slot = get_relay().read()
    return QueueReadResponse(
        code=slot.code,
        enqueued_at=slot.enqueued_at,
        message="Command found." if slot.present else "No new command.",
        pending=slot.present,
    )
