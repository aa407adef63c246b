"""
Main controller for running the Go capture bot.
Coordinates engine launch, board initialization, move selection and
session restarts.
"""

import argparse
import dataclasses
import random
import sys
import time

from boardInitializer.boardInitializer import BoardInitializer
from decisionEngine.decisionEngine import DecisionEngine, PriorityStrategy
from gameEngine.gtpEngine import GtpEngine
from gameExtractor.boardStateParser import BoardStateParser
from gameLauncher.gameLauncher import GameLauncher, restartScript
from sessionLoop.sessionLoop import SessionLoop
from sessionLoop.sessionSettings import loadSettings
from stateManager.stateManager import StateManager
from turnController.turnController import TurnController


def buildSession(engine, settings, restart=None, sleep=time.sleep, debug=False):
    """Wire the decision core around an engine."""
    parser = BoardStateParser(debug=debug)
    stateManager = StateManager()
    strategy = PriorityStrategy(
        rng=random.Random(settings.rngSeed),
        defensiveLibertyThreshold=settings.defensiveLibertyThreshold,
    )
    initializer = BoardInitializer(
        engine,
        opponentProfile=settings.opponentProfile,
        boardSize=settings.boardSize,
        settleDelay=settings.postResetDelay,
        parser=parser,
        sleep=sleep,
        debug=debug,
    )
    turnController = TurnController(
        engine,
        DecisionEngine(strategy),
        parser=parser,
        fetchRetryDelay=settings.fetchRetryDelay,
        opponentSettleDelay=settings.opponentSettleDelay,
        maxFetchAttempts=settings.maxFetchAttempts,
        sleep=sleep,
        stateManager=stateManager,
        debug=debug,
    )
    return SessionLoop(
        engine,
        initializer,
        turnController,
        settings,
        restart=restart,
        sleep=sleep,
        stateManager=stateManager,
    )


def main(argv=None):
    ap = argparse.ArgumentParser(description="Play repeated Go games against a GTP engine.")
    ap.add_argument("--settings", default="defaultSettings.json", help="Path to settings JSON")
    ap.add_argument("--sessions", type=int, default=None, help="Override maxSessions")
    ap.add_argument("--debug", action="store_true", help="Print boards and engine traffic")
    args = ap.parse_args(argv)

    settings = loadSettings(args.settings)
    if args.sessions is not None:
        try:
            settings = dataclasses.replace(settings, maxSessions=args.sessions)
        except ValueError as e:
            ap.error(str(e))

    launcher = GameLauncher(command=settings.engine.command, delay=settings.engine.launchDelay)
    process = launcher.launchEngine()
    engine = GtpEngine(
        process,
        opponentLevels=settings.engine.opponentLevels,
        komi=settings.engine.komi,
        openingMoves=settings.engine.openingMoves,
        debug=args.debug,
    )

    def shutdown():
        engine.close()
        launcher.closeEngine(process)

    def restart():
        shutdown()
        restartScript()

    loop = buildSession(engine, settings, restart=restart, debug=args.debug)
    try:
        completed = loop.run()
    finally:
        if process.poll() is None:
            shutdown()
    return 0 if completed else 1


if __name__ == "__main__":
    sys.exit(main())
