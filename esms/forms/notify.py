"""Transient user notifications (toasts)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class Level(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str


class Notifier:
    """Collects notifications in the order they were raised.

    A view layer drains ``messages``; tests read them directly.
    """

    def __init__(self) -> None:
        self.messages: List[Notification] = []

    def _push(self, level: Level, message: str) -> None:
        self.messages.append(Notification(level, message))
        logger.debug("toast[%s] %s", level.value, message)

    def success(self, message: str) -> None:
        self._push(Level.SUCCESS, message)

    def info(self, message: str) -> None:
        self._push(Level.INFO, message)

    def error(self, message: str) -> None:
        self._push(Level.ERROR, message)

    @property
    def last(self) -> Optional[Notification]:
        return self.messages[-1] if self.messages else None

    def texts(self, level: Optional[Level] = None) -> List[str]:
        return [n.message for n in self.messages if level is None or n.level is level]
