"""
Password-reset token storage.

The service only talks to the `ResetTokenStore` protocol; the app installs an
implementation on `app.state.reset_token_store` at startup.

`InMemoryResetTokenStore` is process-local: pending resets do not survive a
restart and are not visible to other instances. Multi-instance deployments
need a shared implementation of the same protocol.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResetRecord:
    user_id: UUID
    expires_at: float  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ResetTokenStore(Protocol):
    ttl_seconds: int

    async def put(self, token: str, record: ResetRecord) -> None:
        ...

    async def get(self, token: str) -> ResetRecord | None:
        ...

    async def take(self, token: str) -> ResetRecord | None:
        ...

    async def delete(self, token: str) -> None:
        ...

    async def close(self) -> None:
        ...


class InMemoryResetTokenStore:
    def __init__(self, *, ttl_seconds: int = 3600, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._records: dict[str, ResetRecord] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}

    def now(self) -> float:
        return self._clock()

    def __len__(self) -> int:
        return len(self._records)

    async def put(self, token: str, record: ResetRecord) -> None:
        self._cancel_timer(token)
        self._records[token] = record
        delay = max(0.0, record.expires_at - self.now())
        loop = asyncio.get_running_loop()
        self._timers[token] = loop.call_later(delay, self._evict, token)

    async def get(self, token: str) -> ResetRecord | None:
        record = self._records.get(token)
        if record is None:
            return None
        if record.is_expired(self.now()):
            self._drop(token)
            return None
        return record

    async def take(self, token: str) -> ResetRecord | None:
        # Removes before returning, with no await in between: a token can be
        # claimed by one caller only.
        record = self._records.get(token)
        self._drop(token)
        if record is None or record.is_expired(self.now()):
            return None
        return record

    async def delete(self, token: str) -> None:
        self._drop(token)

    async def close(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._records.clear()

    def _evict(self, token: str) -> None:
        self._timers.pop(token, None)
        if self._records.pop(token, None) is not None:
            logger.debug("password_reset_token_expired")

    def _drop(self, token: str) -> None:
        self._cancel_timer(token)
        self._records.pop(token, None)

    def _cancel_timer(self, token: str) -> None:
        handle = self._timers.pop(token, None)
        if handle is not None:
            handle.cancel()
