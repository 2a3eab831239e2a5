class BoardError(Exception):
    """Base class for board contract violations."""


class OutOfBounds(BoardError, IndexError):
    """A coordinate lies outside the board extents."""


class InvalidCell(BoardError, ValueError):
    """An operation targeted a disabled cell or an illegal cell pair."""
