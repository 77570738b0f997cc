from dataclasses import dataclass

from tilelink.constants import SHUFFLE_ALLOWANCE


@dataclass(slots=True)
class ShuffleAllowance:
    """Reshuffles left for the current board; restored on every reset."""
    remaining: int = SHUFFLE_ALLOWANCE
    per_board: int = SHUFFLE_ALLOWANCE

    def restore(self) -> None:
        self.remaining = self.per_board
