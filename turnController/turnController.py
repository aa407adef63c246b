"""
Drives one game: fetch the board, pick a move, play it, let the opponent
answer, repeat until the engine reports the game is over.
"""

import time
from enum import Enum

from gameEngine.goEngine import EngineError, TurnResult
from gameExtractor.boardStateParser import (
    BoardStateParser,
    MalformedBoard,
    MalformedLegality,
)
from stateManager.stateManager import StateManager


class TurnState(Enum):
    AWAITING_STATE = "awaitingState"
    SELECTING_MOVE = "selectingMove"
    EXECUTING = "executing"
    OBSERVING_OPPONENT = "observingOpponent"
    TERMINAL = "terminal"


class TurnController:

    def __init__(
        self,
        engine,
        decisionEngine,
        parser=None,
        fetchRetryDelay=1.0,
        opponentSettleDelay=0.2,
        maxFetchAttempts=0,
        sleep=time.sleep,
        stateManager=None,
        debug=False,
    ):
        self.engine = engine
        self.decisionEngine = decisionEngine
        self.parser = parser or BoardStateParser(debug=debug)
        self.fetchRetryDelay = fetchRetryDelay
        self.opponentSettleDelay = opponentSettleDelay
        self.maxFetchAttempts = maxFetchAttempts
        self.sleep = sleep
        self.stateManager = stateManager or StateManager()
        self.debug = debug

        self._snapshot = None
        self._move = None
        self._failedFetches = 0

    def playGame(self) -> TurnResult:
        """
        Run turns until the game ends. Returns CONTINUING only when the
        board stayed malformed for maxFetchAttempts fetches in a row, so
        the caller can start the controller over.
        """
        state = TurnState.AWAITING_STATE
        self._failedFetches = 0
        while state is not TurnState.TERMINAL:
            state = self.step(state)
            if state is None:
                print("[TURN] Board never became readable. Aborting this attempt.")
                return TurnResult.CONTINUING
        return TurnResult.GAME_OVER

    def step(self, state):
        handler = {
            TurnState.AWAITING_STATE: self._awaitState,
            TurnState.SELECTING_MOVE: self._selectMove,
            TurnState.EXECUTING: self._execute,
            TurnState.OBSERVING_OPPONENT: self._observeOpponent,
        }[state]
        return handler()

    # ---------- states ----------

    def _awaitState(self):
        try:
            self._snapshot = self.parser.captureSnapshot(self.engine)
        except (MalformedBoard, MalformedLegality, EngineError) as e:
            self._failedFetches += 1
            if self.maxFetchAttempts and self._failedFetches >= self.maxFetchAttempts:
                print(f"[TURN] Board or legal moves not ready ({e}).")
                return None
            print(f"[TURN] Board or legal moves not ready ({e}). Retrying...")
            self.sleep(self.fetchRetryDelay)
            return TurnState.AWAITING_STATE
        self._failedFetches = 0
        return TurnState.SELECTING_MOVE

    def _selectMove(self):
        snapshot, self._snapshot = self._snapshot, None
        try:
            move = self.decisionEngine.chooseAction(snapshot)
        except EngineError as e:
            print(f"[TURN] Engine failed during move selection: {e}. Retrying...")
            self.sleep(self.fetchRetryDelay)
            return TurnState.AWAITING_STATE
        if move is None or (not move.isPass and not move.isComplete):
            print("[TURN] Could not determine a valid move. Retrying...")
            self.sleep(self.fetchRetryDelay)
            return TurnState.AWAITING_STATE
        self._move = move
        return TurnState.EXECUTING

    def _execute(self):
        move, self._move = self._move, None
        try:
            if move.isPass:
                result = self.engine.passTurn()
            else:
                result = self.engine.playMove(move.x, move.y)
        except EngineError as e:
            print(f"[TURN] Engine rejected {move}: {e}. Retrying...")
            self.sleep(self.fetchRetryDelay)
            return TurnState.AWAITING_STATE

        turn = self.stateManager.state.get("turn", 0) + 1
        self.stateManager.updateState(turn=turn, lastMove=str(move))
        if self.debug:
            print(f"[TURN] Turn {turn}: played {move}")

        if result is TurnResult.GAME_OVER:
            return TurnState.TERMINAL
        return TurnState.OBSERVING_OPPONENT

    def _observeOpponent(self):
        try:
            self.engine.advanceOpponentTurn()
        except EngineError as e:
            print(f"[TURN] Opponent turn failed: {e}. Retrying...")
            self.sleep(self.fetchRetryDelay)
            return TurnState.AWAITING_STATE
        self.sleep(self.opponentSettleDelay)
        return TurnState.AWAITING_STATE
