"""One-shot shutdown notification shared by the API and signal handlers."""

import asyncio


class ShutdownSignal:
    """Single notification that the server should stop.

    Several sources may race to trigger it (the shutdown API, SIGINT,
    SIGTERM); only the first reason is kept.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def reason(self) -> str | None:
        """Reason given by the first trigger, None while not triggered."""
        return self._reason

    def is_set(self) -> bool:
        return self._event.is_set()

    def trigger(self, reason: str) -> None:
        """Request shutdown. Later calls are ignored."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    async def wait(self) -> str:
        """Wait until triggered and return the reason."""
        await self._event.wait()
        return self._reason or ""
