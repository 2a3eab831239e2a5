from dataclasses import dataclass

@dataclass(slots=True)
class DisabledCell:
    """Tag for a permanently unplayable cell. Such cells never hold a tile."""
    pass
