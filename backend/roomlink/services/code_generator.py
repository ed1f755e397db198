"""Code Generator — draws room codes until one is free among existing rooms.

Invariants:
    - Returned codes are well-formed (CODE_LENGTH symbols from CODE_ALPHABET)
    - A returned code was not in use at the time of the check; the unique
      constraint on rooms.code settles any later race
    - Retries are unbounded; every `warn_every` attempts a warning is logged
"""

import logging
from typing import Awaitable, Callable

from roomlink.core.domain_types import RoomCode
from roomlink.core.room_codes import draw_code

logger = logging.getLogger(__name__)


async def generate_unique_code(
    exists: Callable[[str], Awaitable[bool]],
    draw: Callable[[], RoomCode] = draw_code,
    warn_every: int = 10,
) -> RoomCode:
    """Draw codes until `exists(code)` is false."""
    attempt = 0
    while True:
        attempt += 1
        code = draw()
        if not await exists(code):
            if attempt > 1:
                logger.info(
                    f"Room code found after {attempt} attempts",
                    extra={"attempt": attempt},
                )
            return code
        if warn_every and attempt % warn_every == 0:
            logger.warning(
                f"Room code space congested: {attempt} collisions in a row",
                extra={"attempt": attempt},
            )
