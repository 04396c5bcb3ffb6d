'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import itertools
import secrets
import time
import uuid

__all__ = ["new_block_id", "new_document_id", "to_base36"]

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Per-process sequence for the last-resort tier.
_fallback_seq = itertools.count()


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 value must be non-negative")
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def _uuid_tier() -> str:
    return str(uuid.uuid4())


def _random_tier() -> str:
    return to_base36(secrets.randbits(32))


def _fallback_tier() -> str:
    """
    Millisecond clock plus a process-local counter, both base 36.

    Not random and not collision resistant across processes or machines. It
    only guarantees distinct ids within one running instance.
    """
    return f"{to_base36(time.time_ns() // 1_000_000)}-{to_base36(next(_fallback_seq))}"


_TIERS = (_uuid_tier, _random_tier, _fallback_tier)


def new_block_id() -> str:
    """
    Return a fresh block id, trying entropy sources in priority order:
    uuid4, then a 32-bit value from the secrets module, then the low-entropy
    clock/counter fallback.
    """
    for tier in _TIERS[:-1]:
        try:
            return tier()
        except (OSError, NotImplementedError):
            # No usable entropy source on this platform; try the next tier.
            continue
    return _TIERS[-1]()


def new_document_id() -> str:
    return str(uuid.uuid4())
