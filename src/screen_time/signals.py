"""Screen signals delivered by the native platform bridge."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Protocol


class ScreenSignal(str, Enum):
    SCREEN_OFF = "SCREEN_OFF"
    SCREEN_ON = "SCREEN_ON"
    USER_PRESENT = "USER_PRESENT"

    @property
    def screen_on(self) -> bool:
        return self is not ScreenSignal.SCREEN_OFF


class ScreenStateProbe(Protocol):
    """Answers whether the screen is currently interactive.

    Returning None means the probe could not tell; the tracker keeps its
    last known value in that case.
    """

    def is_screen_on(self) -> Optional[bool]:
        ...


_ANDROID_ACTION_PREFIX = "android.intent.action."
_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_screen_signal(value: object) -> Optional[ScreenSignal]:
    """Map a raw bridge tag such as ``"screen-off"`` onto a :class:`ScreenSignal`.

    Accepts enum members, the canonical tags, Android intent action names
    and case/separator variants. Unrecognised input yields None.
    """
    if isinstance(value, ScreenSignal):
        return value
    if not isinstance(value, str):
        return None
    normalized = value.strip()
    if normalized.startswith(_ANDROID_ACTION_PREFIX):
        normalized = normalized[len(_ANDROID_ACTION_PREFIX):]
    normalized = _SEPARATORS.sub("_", normalized).upper()
    try:
        return ScreenSignal(normalized)
    except ValueError:
        return None
