"""Clock — монотонные timepoints для чекпоинтов (номер блока)."""

import logging

logger = logging.getLogger(__name__)


class BlockClock:
    """Монотонно растущий номер блока; продвигается только явно."""

    def __init__(self, start: int = 1):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._current = start

    def now(self) -> int:
        return self._current

    def advance(self, blocks: int = 1) -> int:
        if blocks < 1:
            raise ValueError(f"blocks must be positive, got {blocks}")
        self._current += blocks
        logger.debug("clock advanced to %s", self._current)
        return self._current
