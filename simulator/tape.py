from enum import Enum


class Direction(Enum):
    LEFT = -1
    HOLD = 0
    RIGHT = 1

    @classmethod
    def parse(cls, text):
        """Parse a direction name, case-insensitively. Returns None if unknown."""
        return {
            "left": cls.LEFT,
            "hold": cls.HOLD,
            "right": cls.RIGHT
        }.get(text.strip().lower())

    def __str__(self):
        return self.name.capitalize()


class Tape:
    """
    Unbounded bidirectional tape with its head folded in.

    Positions 0, 1, 2, ... live in `_positive`; positions -1, -2, ... live in
    `_negative` at index -position - 1. Cells hold a symbol or None (blank).
    Storage only grows, and only as far as a write reaches.
    """

    def __init__(self):
        self._positive = []
        self._negative = []
        self.head = 0

    @classmethod
    def from_values(cls, values):
        """Tape filled from position 0 upward, head at 0."""
        tape = cls()
        tape._positive = list(values)
        return tape

    # === Positional access ===
    def _slot(self, position):
        if position >= 0:
            return self._positive, position
        return self._negative, -position - 1

    def read(self, position):
        cells, index = self._slot(position)
        if index < len(cells):
            return cells[index]
        return None

    def write(self, position, value):
        cells, index = self._slot(position)
        if index >= len(cells):
            cells.extend([None] * (index + 1 - len(cells)))
        cells[index] = value

    # === Head access ===
    def read_head(self):
        return self.read(self.head)

    def write_head(self, value):
        self.write(self.head, value)

    def move(self, direction):
        """Move the head and return the symbol now under it."""
        self.head += direction.value
        return self.read_head()

    def move_left(self):
        return self.move(Direction.LEFT)

    def move_right(self):
        return self.move(Direction.RIGHT)

    # === Introspection ===
    def contents(self):
        """Materialized cells in ascending position order."""
        return self._negative[::-1] + self._positive

    def contents_trim_blanks(self):
        """Contents without leading and trailing blank runs."""
        cells = self.contents()
        start = 0
        while start < len(cells) and cells[start] is None:
            start += 1
        end = len(cells)
        while end > start and cells[end - 1] is None:
            end -= 1
        return cells[start:end]

    def contents_around_head(self, radius):
        """The 2 * radius + 1 cells from head - radius to head + radius."""
        return [self.read(position) for position in range(self.head - radius, self.head + radius + 1)]

    def __repr__(self):
        return f"Tape(head={self.head}, contents={self.contents()!r})"
