"""Helper types shared by test modules."""


class Tagged:
    """An instance tagged with the order in which it was produced."""

    def __init__(self, sequence: int) -> None:
        self.sequence = sequence

    def __repr__(self) -> str:
        return f"Tagged({self.sequence})"
