from dataclasses import dataclass

@dataclass(slots=True)
class MoveBudget:
    """Remaining successful swaps before the game ends."""
    starting: int
    remaining: int
