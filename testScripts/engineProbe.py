# -*- coding: utf-8 -*-
# flake8: noqa
"""
Live engine smoke test: launch the engine, reset a board, dump what the
bot would see and which move it would pick.
"""
import os, sys, random, argparse
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from decisionEngine.decisionEngine import PriorityStrategy
from gameEngine.gtpEngine import GtpEngine
from gameExtractor.boardStateParser import BoardStateParser, hasBothSides
from gameLauncher.gameLauncher import GameLauncher
from sessionLoop.sessionSettings import loadSettings


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--settings", default="defaultSettings.json")
    ap.add_argument("--turns", type=int, default=3, help="Moves to play before stopping")
    args = ap.parse_args()

    cfg = loadSettings(args.settings)
    launcher = GameLauncher(command=cfg.engine.command, delay=cfg.engine.launchDelay)
    proc = launcher.launchEngine()
    engine = GtpEngine(proc, cfg.engine.opponentLevels, cfg.engine.komi, cfg.engine.openingMoves, debug=True)
    parser = BoardStateParser()
    strategy = PriorityStrategy(rng=random.Random(cfg.rngSeed), defensiveLibertyThreshold=cfg.defensiveLibertyThreshold)

    try:
        engine.resetBoard(cfg.opponentProfile, cfg.boardSize)
        for turn in range(args.turns):
            snap = parser.captureSnapshot(engine)
            print(snap.board.render())
            print(f"legal={len(snap.legal.legalCoordinates())}  bothSides={hasBothSides(snap.board)}")

            move = strategy.chooseAction(snap)
            print(f"turn {turn + 1}: {strategy.lastDetector or 'none'} -> {move}")
            result = engine.passTurn() if move.isPass else engine.playMove(move.x, move.y)
            print(f"result={result.value}")
            engine.advanceOpponentTurn()
    finally:
        engine.close()
        launcher.closeEngine(proc)


if __name__ == "__main__":
    main()
