"""Room Codes — alphabet, drawing and normalization of human-typeable codes.

Invariants:
    - Codes are exactly CODE_LENGTH characters from CODE_ALPHABET
    - CODE_ALPHABET has 32 symbols and omits 0/O and 1/I
    - normalize_code is idempotent

Design Decisions:
    - Randomness injected as a `choice` callable so drawing stays pure and testable;
      the default is secrets.choice (uniform, independent draws)
"""

import secrets
from typing import Callable, Sequence

from roomlink.core.domain_types import RoomCode

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6


def draw_code(
    choice: Callable[[Sequence[str]], str] = secrets.choice,
    length: int = CODE_LENGTH,
) -> RoomCode:
    """Draw one candidate code; uniqueness is the caller's concern."""
    return RoomCode("".join(choice(CODE_ALPHABET) for _ in range(length)))


def normalize_code(raw: str | None) -> RoomCode:
    """Strip whitespace and uppercase. Blank input yields an empty code."""
    return RoomCode((raw or "").strip().upper())


def is_well_formed_code(code: str) -> bool:
    return len(code) == CODE_LENGTH and all(c in CODE_ALPHABET for c in code)
