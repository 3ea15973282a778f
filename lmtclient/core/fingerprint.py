"""
Request fingerprint
===================

The server validates every request by its ``id`` and, for ``LMT_handle_jobs``,
by a ``timestamp`` aligned to the number of lowercase ``i`` characters in the
submitted text. Both are reproduced here as plain functions so the clock and
the random source can be swapped out in tests.
"""

import random
import time
from typing import Callable, Optional

ID_MIN = 8300000
ID_MAX = 8399998
ID_FACTOR = 1000


def generate_request_id(rng=None) -> int:
    """Random id in the shape the browser extension uses (multiple of 1000)."""
    rng = rng or random
    return rng.randint(ID_MIN, ID_MAX) * ID_FACTOR


def count_i(text: Optional[str]) -> int:
    return (text or "").count("i")


def get_timestamp(now_ms: int, i_count: int) -> int:
    """Align ``now_ms`` to the next multiple of ``i_count + 1``.

    With no ``i`` in the text the time is returned unchanged. Otherwise the
    result always moves forward, even when ``now_ms`` is already aligned.
    """
    if i_count == 0:
        return now_ms
    step = i_count + 1
    return now_ms - (now_ms % step) + step


def current_millis() -> int:
    return int(time.time() * 1000)


class FingerprintGenerator:
    def __init__(self, rng=None, clock: Optional[Callable[[], int]] = None):
        self.rng = rng
        self.clock = clock or current_millis

    def request_id(self) -> int:
        return generate_request_id(self.rng)

    def timestamp(self, text: str) -> int:
        return get_timestamp(self.clock(), count_i(text))
