"""Per-request cancellation handle passed into repository lookups."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from codeguide.core.errors import RequestCancelledError


@dataclass
class RequestContext:
    """Cancellation signal and optional deadline for a single request.

    Lookups call ``raise_if_cancelled()`` once on entry; scans themselves are
    short and are not interrupted midway.
    """

    deadline: float | None = None  # time.monotonic() value
    _event: threading.Event = field(default_factory=threading.Event, repr=False)

    @classmethod
    def with_timeout(cls, seconds: float) -> RequestContext:
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError("request cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise RequestCancelledError("request deadline exceeded")


def ensure_context(ctx: RequestContext | None) -> RequestContext:
    return ctx if ctx is not None else RequestContext()
