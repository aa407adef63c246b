"""
Capability interface for the external Go engine.
Everything the bot knows about the board comes through these calls.
"""

from abc import ABC, abstractmethod
from enum import Enum


class EngineError(Exception):
    """Raised when the engine rejects or fails a command."""


class TurnResult(Enum):
    CONTINUING = "continuing"
    GAME_OVER = "gameOver"


class GoEngine(ABC):
    """
    Abstract engine. Coordinates are (x, y) with x the column and y the row,
    both zero-based. We always play the "X" side.
    """

    @abstractmethod
    def resetBoard(self, opponentProfile, size):
        """Start a fresh game. State may not be queryable right away."""

    @abstractmethod
    def getBoardState(self):
        """Return the raw board: a sequence of N columns of N cells."""

    @abstractmethod
    def getLegalMoves(self):
        """Return the raw N x N legality grid for our side."""

    @abstractmethod
    def getGroupLiberties(self, x, y) -> int:
        pass

    @abstractmethod
    def playMove(self, x, y) -> TurnResult:
        pass

    @abstractmethod
    def passTurn(self) -> TurnResult:
        pass

    @abstractmethod
    def advanceOpponentTurn(self):
        """Let the opponent reply before the next fetch."""
