"""End-to-end wiring of the decision core against the scripted engine."""

from pathlib import Path
from unittest.mock import Mock

import pytest

import main as controller

from conftest import FakeEngine, makeBoard, makeLegal
from gameEngine.goEngine import TurnResult
from main import buildSession
from sessionLoop.sessionSettings import SessionSettings

DEFAULT_SETTINGS = Path(__file__).resolve().parents[1] / "defaultSettings.json"


def test_full_run_against_scripted_engine(sleeper, freshStateManager) -> None:
    engine = FakeEngine(
        boards=[makeBoard(7, [(3, 3)], [(3, 4)])],
        legal=[makeLegal(7, [(2, 4), (0, 0)])],
        liberties={(3, 4): 1},
        results=[TurnResult.CONTINUING, TurnResult.GAME_OVER],
        defaultResult=TurnResult.GAME_OVER,
    )
    restart = Mock()
    settings = SessionSettings(boardSize=7, maxSessions=2, rngSeed=3)

    assert buildSession(engine, settings, restart=restart, sleep=sleeper).run() is True

    plays = [call for call in engine.calls if call[0] == "playMove"]
    # (2, 4) touches the opponent stone in atari, so it is always chosen
    assert plays == [("playMove", 2, 4)] * 3
    assert freshStateManager.state["gamesFinished"] == 2
    restart.assert_called_once()


def test_stalemate_passes_until_game_over(sleeper) -> None:
    engine = FakeEngine(
        boards=[makeBoard(5, [(0, 0)], [(4, 4)])],
        legal=[makeLegal(5, [])],
        results=[TurnResult.CONTINUING, TurnResult.GAME_OVER],
    )
    settings = SessionSettings(boardSize=5, maxSessions=1)

    assert buildSession(engine, settings, sleep=sleeper).run() is True
    assert engine.callNames().count("passTurn") == 2
    assert "playMove" not in engine.callNames()


@pytest.mark.parametrize("sessions", ["0", "-3"])
def test_session_override_is_validated(sessions, monkeypatch) -> None:
    launcher = Mock()
    monkeypatch.setattr(controller, "GameLauncher", launcher)
    with pytest.raises(SystemExit) as excinfo:
        controller.main(["--settings", str(DEFAULT_SETTINGS), "--sessions", sessions])
    assert excinfo.value.code == 2
    launcher.assert_not_called()
