"""
Checkpoints — история значений во времени

Упорядоченная по timepoint история (timepoint, value). Запись в тот же
timepoint перезаписывает последний чекпоинт, запись в прошлое запрещена.
Lookup — binary search (bisect), последний чекпоинт с timepoint <= запрошенного.
"""

import bisect
from dataclasses import dataclass
from typing import List, Optional, Tuple

from src.core.math.numerical_safeguards import MAX_UINT208, validate_uint


@dataclass(frozen=True)
class Checkpoint:
    """Значение, действующее начиная с timepoint."""

    timepoint: int
    value: int


class CheckpointHistory:
    """Append-only (с перезаписью в текущем timepoint) история чекпоинтов."""

    def __init__(self, bound: int = MAX_UINT208):
        self._bound = bound
        self._timepoints: List[int] = []
        self._values: List[int] = []

    def __len__(self) -> int:
        return len(self._timepoints)

    def latest(self) -> int:
        """Текущее значение (0 если история пуста)."""
        return self._values[-1] if self._values else 0

    def latest_checkpoint(self) -> Optional[Checkpoint]:
        if not self._timepoints:
            return None
        return Checkpoint(self._timepoints[-1], self._values[-1])

    def push(self, timepoint: int, value: int) -> Tuple[int, int]:
        """
        Запись нового значения.

        Returns:
            (old_value, new_value)

        Raises:
            ArithmeticOverflow: value вне [0, bound]
            ValueError: timepoint меньше последнего записанного
        """
        validate_uint(value, "checkpoint value", self._bound)
        old_value = self.latest()

        if self._timepoints:
            last = self._timepoints[-1]
            if timepoint < last:
                raise ValueError(f"Checkpoint timepoint {timepoint} is before last {last}")
            if timepoint == last:
                self._values[-1] = value
                return old_value, value

        self._timepoints.append(timepoint)
        self._values.append(value)
        return old_value, value

    def upper_lookup(self, timepoint: int) -> int:
        """Значение в последнем чекпоинте с timepoint <= запрошенного (0 если нет)."""
        position = bisect.bisect_right(self._timepoints, timepoint)
        if position == 0:
            return 0
        return self._values[position - 1]

    def at(self, position: int) -> Checkpoint:
        return Checkpoint(self._timepoints[position], self._values[position])

    def as_tuple(self) -> Tuple[Checkpoint, ...]:
        return tuple(Checkpoint(t, v) for t, v in zip(self._timepoints, self._values))
