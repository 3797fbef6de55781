import logging
from dataclasses import dataclass
from typing import Sequence

from utils.constants import MIN_WINDOW_SIZE, ZOOM_STEP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Window:
    """
    Half-open row range [start, end) used as a chart viewport.

    Zoom and pan keep the window inside [0, total] and never shrink it below
    `min_size` rows (or the whole data when there are fewer rows).
    """
    start: int
    end: int

    def __post_init__(self):
        if not (0 <= self.start < self.end):
            raise ValueError(f"Invalid window [{self.start}, {self.end})")

    @property
    def size(self) -> int:
        return self.end - self.start

    @classmethod
    def initial(cls, total: int, size: int) -> "Window":
        """Window over the first `size` rows (all rows if fewer)."""
        if total < 1:
            raise ValueError("Cannot open a window over empty data")
        return cls(0, max(1, min(size, total)))

    def validate(self, total: int, min_size: int = MIN_WINDOW_SIZE) -> None:
        if self.end > total:
            raise ValueError(f"Window end {self.end} exceeds data length {total}")
        if self.size < min(min_size, total):
            raise ValueError(f"Window must span at least {min(min_size, total)} rows")

    def zoom(self, direction: int, total: int, step: int = ZOOM_STEP,
             min_size: int = MIN_WINDOW_SIZE) -> "Window":
        """Grow (direction > 0) or shrink (direction < 0) around the midpoint."""
        if direction == 0:
            return self
        new_size = self.size + step if direction > 0 else self.size - step
        new_size = max(min(min_size, total), min(total, new_size))

        mid = (self.start + self.end) // 2
        new_start = max(0, mid - new_size // 2)
        new_end = min(total, new_start + new_size)
        if new_end - new_start < new_size:
            new_start = max(0, new_end - new_size)
        return Window(new_start, new_end)

    def pan(self, offset: int, total: int) -> "Window":
        """Shift left by `offset` rows (negative moves right); no-op at the edges."""
        new_start = max(0, self.start - offset)
        new_end = min(total, self.end - offset)
        if new_end - new_start != self.size or new_start >= new_end:
            return self
        return Window(new_start, new_end)

    def slice(self, rows: Sequence) -> list:
        return list(rows[self.start:self.end])

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}
