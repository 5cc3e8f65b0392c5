# app/core/ids.py
from __future__ import annotations

import itertools
import os
import re
import threading
import time
from typing import Any

# 24 caractere hex: 4 octeți timestamp + 5 octeți random per proces + 3 octeți contor
_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

_PROCESS_RANDOM = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_lock = threading.Lock()


def new_id() -> str:
    """Generează un identificator nou, crescător în timp în cadrul aceluiași proces."""
    with _lock:
        seq = next(_counter) & 0xFFFFFF
    ts = int(time.time()) & 0xFFFFFFFF
    return (ts.to_bytes(4, "big") + _PROCESS_RANDOM + seq.to_bytes(3, "big")).hex()


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_ID_RE.fullmatch(value))


def normalize_id(value: str) -> str:
    return value.lower()
