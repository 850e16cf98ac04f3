"""One-time login challenges keyed by account address."""

from __future__ import annotations

import logging
import secrets
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Final

logger = logging.getLogger(__name__)

NONCE_BYTES: Final[int] = 32
DEFAULT_NONCE_TTL_SECONDS: Final[int] = 300


@dataclass(frozen=True)
class NonceRecord:
    """A challenge issued to ``address`` and valid until ``expires_at``."""

    address: str
    value: str
    issued_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        return self.issued_at <= now < self.expires_at


class NonceStore:
    """In-memory nonce store with per-address overwrite semantics.

    At most one nonce is live per address. Expired entries read as absent
    whether or not a sweep has reclaimed them yet.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_NONCE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("Nonce TTL must be positive")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._records: OrderedDict[str, NonceRecord] = OrderedDict()
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, address: str) -> str:
        """Generate a fresh nonce for ``address``, replacing any prior one."""
        return self.issue_record(address).value

    def issue_record(self, address: str) -> NonceRecord:
        now = self._clock()
        record = NonceRecord(
            address=address,
            value=secrets.token_hex(NONCE_BYTES),
            issued_at=now,
            expires_at=now + self._ttl_seconds,
        )
        with self._lock:
            self._purge_locked(now)
            self._records[address] = record
            # Overwrites move to the end so entries stay ordered by expiry.
            self._records.move_to_end(address)
        logger.debug("Issued nonce for %s", address)
        return record

    def peek(self, address: str) -> str | None:
        """Return the live nonce for ``address`` without consuming it."""
        record = self.get_record(address)
        return record.value if record else None

    def get_record(self, address: str) -> NonceRecord | None:
        now = self._clock()
        with self._lock:
            record = self._records.get(address)
        if record is None or not record.is_live(now):
            return None
        return record

    def consume(self, address: str) -> None:
        """Delete the nonce for ``address``; a no-op if none is stored."""
        with self._lock:
            self._records.pop(address, None)

    def consume_matching(self, address: str, value: str) -> bool:
        """Atomically delete the nonce for ``address`` if it is live and equals ``value``.

        Returns:
            True if this call removed the nonce; False if it was absent,
            expired, replaced, or already consumed by another request
        """
        now = self._clock()
        with self._lock:
            record = self._records.get(address)
            if record is None or not record.is_live(now) or record.value != value:
                return False
            del self._records[address]
            return True

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            return self._purge_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _purge_locked(self, now: float) -> int:
        # Entries are kept in issue order and share one TTL, so the sweep
        # stops at the first live entry.
        removed = 0
        while self._records:
            oldest = next(iter(self._records))
            if self._records[oldest].expires_at > now:
                break
            del self._records[oldest]
            removed += 1
        return removed
