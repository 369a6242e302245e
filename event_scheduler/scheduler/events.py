"""Notice system for the scheduler.

Emits human-readable notices for add/remove/process/save/load outcomes.
"""
import time
from typing import Callable

from loguru import logger

from .types import NoticeType, SchedulerNotice

logger = logger.bind(module="scheduler.events")


# Type alias for notice handlers
NoticeHandler = Callable[[SchedulerNotice], None]


class NoticeEmitter:
    """Emitter for scheduler notices."""

    def __init__(self):
        self._handlers: list[NoticeHandler] = []

    def add_handler(self, handler: NoticeHandler) -> None:
        """Add a notice handler."""
        self._handlers.append(handler)

    def remove_handler(self, handler: NoticeHandler) -> None:
        """Remove a notice handler."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, notice: SchedulerNotice) -> None:
        """Emit a notice to all handlers."""
        for handler in self._handlers:
            try:
                handler(notice)
            except Exception as e:
                logger.error(f"Notice handler error: {e}")


def emit_notice(
    emitter: NoticeEmitter,
    notice_type: NoticeType,
    message: str,
    name: str | None = None,
) -> SchedulerNotice:
    """Build and emit a notice.

    Args:
        emitter: Notice emitter instance
        notice_type: Kind of notice (e.g. NoticeType.EVENT_ADDED)
        message: Text shown to the user
        name: Event name the notice refers to, if any

    Returns:
        The emitted notice
    """
    notice = SchedulerNotice(
        type=notice_type,
        message=message,
        name=name,
        timestamp_ms=int(time.time() * 1000),
    )
    emitter.emit(notice)
    return notice
