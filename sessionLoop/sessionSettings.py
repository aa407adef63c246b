"""
Session configuration, loaded from defaultSettings.json.
Missing keys fall back to the dataclass defaults.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class EngineSettings:
    command: List[str] = field(default_factory=lambda: ["gnugo", "--mode", "gtp"])
    launchDelay: float = 0.5
    komi: float = 5.5
    openingMoves: int = 1
    opponentLevels: Dict[str, int] = field(default_factory=dict)


@dataclass
class SessionSettings:
    opponentProfile: str = "Illuminati"
    boardSize: int = 13
    initRetryBudget: int = 3
    initRetryDelay: float = 1.0
    postResetDelay: float = 1.0
    resetDelay: float = 1.0
    fetchRetryDelay: float = 1.0
    opponentSettleDelay: float = 0.2
    maxFetchAttempts: int = 0
    maxSessions: int = 500
    defensiveLibertyThreshold: int = 1
    rngSeed: Optional[int] = None
    engine: EngineSettings = field(default_factory=EngineSettings)

    def __post_init__(self):
        if self.boardSize < 1:
            raise ValueError(f"boardSize must be positive, got {self.boardSize}")
        if self.initRetryBudget < 1:
            raise ValueError("initRetryBudget must allow at least one attempt")
        if self.maxSessions < 1:
            raise ValueError("maxSessions must be at least 1")

    @classmethod
    def fromDict(cls, raw: Dict) -> "SessionSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown settings: {sorted(unknown)}")
        values = dict(raw)
        values["engine"] = EngineSettings(**values.get("engine", {}))
        return cls(**values)


def loadSettings(settingsPath: str = "defaultSettings.json") -> SessionSettings:
    raw = json.loads(Path(settingsPath).read_text(encoding="utf-8"))
    return SessionSettings.fromDict(raw)
