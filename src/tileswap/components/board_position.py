from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    col: int
    row: int
