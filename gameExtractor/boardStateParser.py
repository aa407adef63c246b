# gameExtractor/boardStateParser.py
"""
Parse raw engine output into a structured board snapshot.
Boards are indexed grid[x][y]; the engine hands us one sequence per column.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np


EMPTY = "."
OURS = "X"
OPPONENT = "O"
OFFLINE = "#"
CELL_KINDS = (EMPTY, OURS, OPPONENT, OFFLINE)

ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MalformedBoard(Exception):
    pass


class MalformedLegality(Exception):
    pass


# ---------------- datatypes ----------------

@dataclass(frozen=True, eq=False)
class BoardState:
    grid: np.ndarray

    @property
    def size(self) -> int:
        return int(self.grid.shape[0])

    def inBounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Optional[str]:
        # numpy would wrap negative indices, so bounds are checked first
        if not self.inBounds(x, y):
            return None
        return str(self.grid[x, y])

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, str]]:
        for dx, dy in ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if self.inBounds(nx, ny):
                yield nx, ny, str(self.grid[nx, ny])

    def count(self, kind: str) -> int:
        return int(np.count_nonzero(self.grid == kind))

    def render(self) -> str:
        """Rows from the top (highest y) down, like a printed Go board."""
        return "\n".join(
            "".join(self.grid[:, y]) for y in range(self.size - 1, -1, -1)
        )


@dataclass(frozen=True, eq=False)
class LegalityGrid:
    mask: np.ndarray

    @property
    def size(self) -> int:
        return int(self.mask.shape[0])

    def isLegal(self, x: int, y: int) -> bool:
        if not (0 <= x < self.size and 0 <= y < self.size):
            return False
        return bool(self.mask[x, y])

    def legalCoordinates(self) -> List[Tuple[int, int]]:
        # argwhere walks x then y
        return [(int(x), int(y)) for x, y in np.argwhere(self.mask)]


class LibertyProbe:
    """Per-turn memo around the engine's liberty query."""

    def __init__(self, lookup: Callable[[int, int], int]):
        self._lookup = lookup
        self._cache: Dict[Tuple[int, int], int] = {}

    def __call__(self, x: int, y: int) -> int:
        key = (x, y)
        if key not in self._cache:
            self._cache[key] = int(self._lookup(x, y))
        return self._cache[key]


@dataclass(frozen=True, eq=False)
class TurnSnapshot:
    board: BoardState
    legal: LegalityGrid
    liberties: Callable[[int, int], int] = field(default=lambda x, y: 0)


# ---------------- validation ----------------

def _isRow(row) -> bool:
    return isinstance(row, (list, tuple, str, np.ndarray))


def isWellFormedGrid(raw) -> bool:
    """
    Structural check shared by initialization and per-turn fetches:
    non-empty, first row an ordered sequence, and square.
    """
    if not isinstance(raw, (list, tuple, np.ndarray)):
        return False
    n = len(raw)
    if n == 0 or not _isRow(raw[0]):
        return False
    return all(_isRow(row) and len(row) == n for row in raw)


def hasBothSides(board: BoardState) -> bool:
    """
    Placeholder liveness check: a usable fresh board shows at least one of
    our stones and one of theirs. This is a weak heuristic, not a rules
    proof; swap it out through BoardInitializer(validator=...).
    """
    return board.count(OURS) > 0 and board.count(OPPONENT) > 0


# ---------------- parser ----------------

class BoardStateParser:

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parseBoard(self, raw) -> BoardState:
        if not isWellFormedGrid(raw):
            raise MalformedBoard(f"board is not a square grid: {raw!r}")
        columns = [list(column) for column in raw]
        unknown = {
            repr(cell)
            for column in columns
            for cell in column
            if not (isinstance(cell, str) and cell in CELL_KINDS)
        }
        if unknown:
            raise MalformedBoard(f"unknown cell markers: {sorted(unknown)}")
        grid = np.array(columns, dtype="<U1")
        return BoardState(grid=grid)

    def parseLegality(self, raw, size: int) -> LegalityGrid:
        if not isWellFormedGrid(raw):
            raise MalformedLegality("legal move grid is empty or not a grid")
        if len(raw) != size:
            raise MalformedLegality(
                f"legal move grid is {len(raw)}x{len(raw)}, board is {size}x{size}"
            )
        mask = np.array([[bool(v) for v in column] for column in raw], dtype=bool)
        return LegalityGrid(mask=mask)

    # ---------- main entry ----------

    def captureSnapshot(self, engine) -> TurnSnapshot:
        """Fetch and validate one turn's board + legality from the engine."""
        board = self.parseBoard(engine.getBoardState())
        legal = self.parseLegality(engine.getLegalMoves(), board.size)
        if self.debug:
            print(f"[TURN] Board:\n{board.render()}")
        return TurnSnapshot(
            board=board,
            legal=legal,
            liberties=LibertyProbe(engine.getGroupLiberties),
        )
