"""Transient toast notifications."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Toast:
    message: str
    kind: ToastKind
    expires_at: float


class ToastCenter:
    """Holds at most one toast; a new toast replaces the previous one."""

    def __init__(self, duration: float = 3.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration = duration
        self._clock = clock
        self._toast: Optional[Toast] = None

    def show(self, message: str, kind: ToastKind = ToastKind.SUCCESS) -> Toast:
        self._toast = Toast(message, kind, self._clock() + self.duration)
        return self._toast

    @property
    def current(self) -> Optional[Toast]:
        if self._toast and self._clock() >= self._toast.expires_at:
            self._toast = None
        return self._toast

    def dismiss(self) -> None:
        self._toast = None
