import logging
from contextlib import asynccontextmanager
from typing import Optional, Set

from app.core.exceptions import RequestInProgressError

logger = logging.getLogger(__name__)


class RequestGuard:
    """
    Refuses a second concurrent request for the same key.

    Keys look like ``generate:<client_id>`` or ``export:<client_id>``. Everything
    runs on one event loop and the check-and-add has no await in between, so a
    plain set is enough.
    """

    def __init__(self):
        self._in_flight: Set[str] = set()

    def is_busy(self, key: str) -> bool:
        return key in self._in_flight

    @asynccontextmanager
    async def hold(self, action: str, client_id: Optional[str]):
        """Mark ``action`` in flight for ``client_id`` for the duration of the block."""
        if not client_id:
            yield
            return

        key = f"{action}:{client_id}"
        if key in self._in_flight:
            logger.warning(f"Refusing duplicate '{action}' request for client {client_id}")
            raise RequestInProgressError(
                f"A {action} request is already in progress. Please wait for it to finish."
            )
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)
