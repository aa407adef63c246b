"""
Resets the engine into a fresh game and checks the board is usable.
Failure is expected here (the engine may still be settling), so
initialize() reports it as False instead of raising.
"""

import time

from gameEngine.goEngine import EngineError
from gameExtractor.boardStateParser import (
    BoardStateParser,
    MalformedBoard,
    hasBothSides,
)


class InitializationFailure(Exception):
    """Every initialization attempt in the retry budget failed."""


class BoardInitializer:

    def __init__(
        self,
        engine,
        opponentProfile="Illuminati",
        boardSize=13,
        settleDelay=1.0,
        parser=None,
        validator=hasBothSides,
        sleep=time.sleep,
        debug=False,
    ):
        self.engine = engine
        self.opponentProfile = opponentProfile
        self.boardSize = boardSize
        self.settleDelay = settleDelay
        self.parser = parser or BoardStateParser()
        self.validator = validator
        self.sleep = sleep
        self.debug = debug

    def initialize(self) -> bool:
        """
        Reset the engine, wait for it to settle, then fetch the board and
        validate its shape and contents.
        """
        print("[INIT] Attempting to initialize the board...")
        try:
            self.engine.resetBoard(self.opponentProfile, self.boardSize)
            self.sleep(self.settleDelay)
            raw = self.engine.getBoardState()
        except EngineError as e:
            print(f"[INIT] Engine refused the reset: {e}")
            return False

        if self.debug:
            print(f"[INIT] Board state after reset: {raw!r}")

        try:
            board = self.parser.parseBoard(raw)
        except MalformedBoard as e:
            print(f"[INIT] Board is still not properly initialized: {e}")
            return False

        if not self.validator(board):
            print("[INIT] Board does not meet the expected conditions.")
            return False

        print(f"[INIT] Board initialized ({board.size}x{board.size}).")
        return True
