"""Type hints used in Dune Tournament."""

from typing import List, Literal, Protocol, Tuple

# Tournament phase literals
Phase = Literal["registration", "qualifying", "top-cut", "finished"]

# Round type literals
RoundType = Literal[
    "qualifying",
    "semifinal",
    "winners-final",
    "losers-final",
    "grand-final",
]

# Supported top cut sizes
TopCut = Literal[8, 16]

# Player ids seated at one table, in seat order
Seating = Tuple[str, ...]
# All seatings for one round
RoundSeatings = List[Seating]


class Shuffler(Protocol):
    """Anything that can shuffle a list in place.

    ``random.Random`` satisfies this, so tests inject ``random.Random(seed)``.
    """

    def shuffle(self, x: list) -> None: ...


#  LocalWords:  Shuffler
