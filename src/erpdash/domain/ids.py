from __future__ import annotations

import secrets
import time

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_DIGITS[r])
    return "".join(reversed(out))


def new_id() -> str:
    """Opaque record id: millisecond timestamp in base36 plus random hex."""
    return _base36(int(time.time() * 1000)) + secrets.token_hex(5)
