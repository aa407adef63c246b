"""
Outer driver: initialize a board, play it out, reset, and repeat for a
fixed number of sessions before relaunching the process from scratch.
"""

import time

from boardInitializer.boardInitializer import InitializationFailure
from gameEngine.goEngine import EngineError, TurnResult
from stateManager.stateManager import StateManager


class SessionLoop:

    def __init__(
        self,
        engine,
        initializer,
        turnController,
        settings,
        restart=None,
        sleep=time.sleep,
        stateManager=None,
    ):
        self.engine = engine
        self.initializer = initializer
        self.turnController = turnController
        self.settings = settings
        self.restart = restart
        self.sleep = sleep
        self.stateManager = stateManager or StateManager()

    def initializeBoard(self):
        budget = self.settings.initRetryBudget
        for attempt in range(1, budget + 1):
            print(f"[SESSION] Initializing board. Attempt {attempt} of {budget}")
            if self.initializer.initialize():
                print("[SESSION] Board successfully initialized.")
                return
            if attempt < budget:
                print("[SESSION] Board initialization failed. Retrying...")
                self.sleep(self.settings.initRetryDelay)
        raise InitializationFailure(
            f"Unable to initialize board after {budget} attempts"
        )

    def playSession(self):
        self.initializeBoard()
        while self.turnController.playGame() is not TurnResult.GAME_OVER:
            print("[SESSION] Restarting turn controller...")

        finished = self.stateManager.state.get("gamesFinished", 0) + 1
        self.stateManager.updateState(gamesFinished=finished, turn=0)

        try:
            self.engine.resetBoard(self.settings.opponentProfile, self.settings.boardSize)
        except EngineError as e:
            # the next session's initializer resets again under its retry budget
            print(f"[SESSION] Post-game reset failed: {e}")
        else:
            print("[SESSION] Board has been reset. Starting a new game...")
        self.sleep(self.settings.resetDelay)

    def run(self) -> bool:
        """
        Play up to maxSessions games. Returns False if a board could never
        be initialized; otherwise hands over to restart() at the ceiling.
        """
        maxSessions = self.settings.maxSessions
        for session in range(1, maxSessions + 1):
            print(f"[SESSION] Starting session {session} of {maxSessions}")
            self.stateManager.updateState(session=session)
            try:
                self.playSession()
            except InitializationFailure as e:
                print(f"[SESSION] Critical error: {e}.")
                return False

        print(f"[SESSION] Completed {maxSessions} sessions. Restarting...")
        if self.restart is not None:
            self.restart()
        return True
