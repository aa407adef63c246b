"""
Strategy pattern interface for selecting the next move.
The default strategy is a strict priority cascade over the local detectors.
"""

import random

from decisionEngine.moveStrategies import (
    PASS_MOVE,
    detectCaptureMoves,
    detectDefensiveMoves,
    detectExpansionMoves,
    detectRandomMoves,
)


class PriorityStrategy:
    """
    Capture, then expansion, then defence, then any legal point.
    The first detector with candidates wins outright; one of its moves is
    picked uniformly at random. No candidates anywhere means pass.
    """

    def __init__(self, rng=None, defensiveLibertyThreshold=1):
        self.rng = rng or random.Random()
        self.defensiveLibertyThreshold = defensiveLibertyThreshold
        self.lastDetector = None

    def detectors(self, snapshot):
        board, legal, liberties = snapshot.board, snapshot.legal, snapshot.liberties
        yield "capture", lambda: detectCaptureMoves(board, legal, liberties)
        yield "expansion", lambda: detectExpansionMoves(board, legal)
        yield "defensive", lambda: detectDefensiveMoves(
            board, legal, liberties, self.defensiveLibertyThreshold
        )
        yield "random", lambda: detectRandomMoves(board, legal)

    def chooseAction(self, snapshot):
        self.lastDetector = None
        for name, detect in self.detectors(snapshot):
            candidates = detect()
            if candidates:
                self.lastDetector = name
                return self.rng.choice(candidates)
        return PASS_MOVE


class DecisionEngine:
    def __init__(self, strategy):
        self.strategy = strategy

    def chooseAction(self, state):
        return self.strategy.chooseAction(state)
