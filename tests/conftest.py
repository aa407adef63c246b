"""
Shared pytest fixtures: a scripted engine and board builders.

The scripted engine hands out queued boards and legality grids, repeating
the last one once the queue runs dry, and records every call it receives.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from gameEngine.goEngine import GoEngine, TurnResult
from stateManager.stateManager import StateManager


Point = Tuple[int, int]


def makeBoard(
    size: int,
    ours: Sequence[Point] = (),
    theirs: Sequence[Point] = (),
    offline: Sequence[Point] = (),
) -> List[str]:
    """Raw board as the engine returns it: one string per column."""
    columns = [["."] * size for _ in range(size)]
    for marker, points in (("X", ours), ("O", theirs), ("#", offline)):
        for x, y in points:
            columns[x][y] = marker
    return ["".join(column) for column in columns]


def makeLegal(size: int, points: Optional[Sequence[Point]] = None) -> List[List[bool]]:
    """Raw legality grid. points=None means every point is legal."""
    if points is None:
        return [[True] * size for _ in range(size)]
    grid = [[False] * size for _ in range(size)]
    for x, y in points:
        grid[x][y] = True
    return grid


class FakeEngine(GoEngine):

    def __init__(
        self,
        boards=None,
        legal=None,
        liberties: Optional[Dict[Point, int]] = None,
        results: Optional[List[TurnResult]] = None,
        defaultResult: TurnResult = TurnResult.GAME_OVER,
    ):
        self.boards = list(boards if boards is not None else [makeBoard(5, [(1, 1)], [(3, 3)])])
        self.legal = list(legal if legal is not None else [makeLegal(5)])
        self.liberties = dict(liberties or {})
        self.results = list(results or [])
        self.defaultResult = defaultResult
        self.calls: List[Tuple] = []
        self.resetError = None
        self.playError = None
        # method name -> queued outcomes, one per call; None lets the call through
        self.failures: Dict[str, List[Optional[Exception]]] = {}

    @staticmethod
    def _next(queue):
        if not queue:
            return []
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def _maybeFail(self, name):
        queued = self.failures.get(name)
        if queued:
            error = queued.pop(0)
            if error is not None:
                raise error

    def callNames(self):
        return [call[0] for call in self.calls]

    def resetBoard(self, opponentProfile, size):
        self.calls.append(("resetBoard", opponentProfile, size))
        self._maybeFail("resetBoard")
        if self.resetError is not None:
            raise self.resetError

    def getBoardState(self):
        self.calls.append(("getBoardState",))
        self._maybeFail("getBoardState")
        return self._next(self.boards)

    def getLegalMoves(self):
        self.calls.append(("getLegalMoves",))
        return self._next(self.legal)

    def getGroupLiberties(self, x, y):
        self.calls.append(("getGroupLiberties", x, y))
        self._maybeFail("getGroupLiberties")
        return self.liberties.get((x, y), 2)

    def _result(self):
        return self.results.pop(0) if self.results else self.defaultResult

    def playMove(self, x, y):
        self.calls.append(("playMove", x, y))
        if self.playError is not None:
            error, self.playError = self.playError, None
            raise error
        return self._result()

    def passTurn(self):
        self.calls.append(("passTurn",))
        return self._result()

    def advanceOpponentTurn(self):
        self.calls.append(("advanceOpponentTurn",))
        self._maybeFail("advanceOpponentTurn")


class SleepRecorder:
    """Stand-in for time.sleep that only remembers the requested delays."""

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def freshStateManager():
    StateManager().reset()
    yield StateManager()
    StateManager().reset()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def engine():
    return FakeEngine()
