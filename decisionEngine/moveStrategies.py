"""
Local move detectors. Each one scans the legal points in x-then-y order
and keeps the ones matching its pattern. None of them touch the engine
except through the liberty lookup they are handed.
"""

from typing import Callable, List, NamedTuple, Optional

from gameExtractor.boardStateParser import (
    OPPONENT,
    OURS,
    BoardState,
    LegalityGrid,
)


class Move(NamedTuple):
    x: Optional[int]
    y: Optional[int]

    @property
    def isPass(self) -> bool:
        return self.x is None and self.y is None

    @property
    def isComplete(self) -> bool:
        return self.x is not None and self.y is not None

    def __str__(self):
        return "pass" if self.isPass else f"({self.x}, {self.y})"


PASS_MOVE = Move(None, None)

LibertyLookup = Callable[[int, int], int]


def _touches(board: BoardState, x, y, kind, predicate=None) -> bool:
    for nx, ny, cell in board.neighbors(x, y):
        if cell == kind and (predicate is None or predicate(nx, ny)):
            return True
    return False


def detectCaptureMoves(
    board: BoardState, legal: LegalityGrid, liberties: LibertyLookup
) -> List[Move]:
    """Points next to an opponent group in atari."""
    return [
        Move(x, y)
        for x, y in legal.legalCoordinates()
        if _touches(board, x, y, OPPONENT, lambda nx, ny: liberties(nx, ny) == 1)
    ]


def detectExpansionMoves(board: BoardState, legal: LegalityGrid) -> List[Move]:
    """Points on odd lines that extend one of our groups."""
    return [
        Move(x, y)
        for x, y in legal.legalCoordinates()
        if (x % 2 == 1 or y % 2 == 1) and _touches(board, x, y, OURS)
    ]


def detectDefensiveMoves(
    board: BoardState,
    legal: LegalityGrid,
    liberties: LibertyLookup,
    threshold: int = 1,
) -> List[Move]:
    """
    Points next to one of our groups that is down to `threshold` liberties
    or fewer. Playing there adds a liberty or connects out.
    """
    return [
        Move(x, y)
        for x, y in legal.legalCoordinates()
        if _touches(board, x, y, OURS, lambda nx, ny: liberties(nx, ny) <= threshold)
    ]


def detectRandomMoves(board: BoardState, legal: LegalityGrid) -> List[Move]:
    return [Move(x, y) for x, y in legal.legalCoordinates()]
