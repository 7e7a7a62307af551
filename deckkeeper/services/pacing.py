"""
Pacing for external card lookups.

Lookups during import run one at a time with a fixed pause after each,
keeping well inside Scryfall's per-client rate limit. The delay is a floor:
a policy may wait longer, never shorter.
"""

import asyncio
from dataclasses import dataclass

from deckkeeper.config import MIN_LOOKUP_DELAY_SECONDS, settings


@dataclass(frozen=True)
class PacingPolicy:
    """
    How external lookups are spaced out.

    Attributes:
        delay_seconds: Pause after each lookup
        sequential: Lookups never overlap. Only sequential pacing is
            supported; the flag exists so a different strategy has to
            be chosen explicitly.
    """

    delay_seconds: float = MIN_LOOKUP_DELAY_SECONDS
    sequential: bool = True

    def __post_init__(self) -> None:
        if self.delay_seconds < MIN_LOOKUP_DELAY_SECONDS:
            raise ValueError(
                f"Lookup delay must be at least {MIN_LOOKUP_DELAY_SECONDS}s, "
                f"got {self.delay_seconds}s"
            )
        if not self.sequential:
            raise ValueError("Only sequential lookups are supported")

    async def wait(self) -> None:
        """Pause before the next lookup."""
        await asyncio.sleep(self.delay_seconds)


def default_pacing() -> PacingPolicy:
    """Pacing policy built from settings."""
    return PacingPolicy(delay_seconds=settings.lookup_delay_seconds)
