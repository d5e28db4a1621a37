"""Progress reporting for uploads.

Observers receive percent values that never decrease until a terminal report:
100 on success or a 0 reset on failure. Status lines are display-only and
carry no control information.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Literal, Protocol

from gemini_media.constants import PROGRESS_DONE, PROGRESS_RESET

log = logging.getLogger(__name__)


class ProgressObserver(Protocol):
    """Receives upload progress and status notifications."""

    def on_progress(self, percent: int) -> None: ...

    def on_status(self, status: str) -> None: ...


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """One notification in the order it was emitted."""

    kind: Literal["progress", "status"]
    percent: int | None = None
    status: str | None = None


class CallbackObserver:
    """Adapts a pair of plain callbacks to ``ProgressObserver``."""

    def __init__(
        self,
        on_progress: Callable[[int], None] | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> None:
        self._on_progress = on_progress
        self._on_status = on_status

    def on_progress(self, percent: int) -> None:
        if self._on_progress is not None:
            self._on_progress(percent)

    def on_status(self, status: str) -> None:
        if self._on_status is not None:
            self._on_status(status)


class ProgressTracker:
    """Forwards progress to an observer while enforcing monotonicity."""

    def __init__(self, observer: ProgressObserver | None = None) -> None:
        self._observer = observer
        self.events: list[ProgressEvent] = []
        self.percent = PROGRESS_RESET
        self.finished = False

    def advance(self, percent: int) -> int:
        """Report ``percent`` unless it would move progress backwards."""
        if self.finished:
            log.debug("Ignoring progress %d after terminal report", percent)
            return self.percent
        percent = max(0, min(int(percent), PROGRESS_DONE - 1))
        if percent < self.percent:
            log.debug("Ignoring regressive progress %d < %d", percent, self.percent)
            return self.percent
        self._emit(percent)
        return percent

    def complete(self) -> None:
        """Terminal success report."""
        self._terminal(PROGRESS_DONE)

    def reset(self) -> None:
        """Terminal failure report."""
        self._terminal(PROGRESS_RESET)

    def status(self, text: str) -> None:
        self.events.append(ProgressEvent(kind="status", status=text))
        if self._observer is not None:
            self._observer.on_status(text)

    def _terminal(self, percent: int) -> None:
        if self.finished:
            return
        self._emit(percent)
        self.finished = True

    def _emit(self, percent: int) -> None:
        self.percent = percent
        self.events.append(ProgressEvent(kind="progress", percent=percent))
        if self._observer is not None:
            self._observer.on_progress(percent)
