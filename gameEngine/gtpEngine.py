"""
GoEngine over the Go Text Protocol.
Talks to a GNU Go process started by GameLauncher. We play black ("X"),
the engine plays white ("O").
"""

from typing import Dict, List, Optional, Tuple

from gameEngine.goEngine import EngineError, GoEngine, TurnResult
from gameExtractor.boardStateParser import EMPTY, OPPONENT, OURS

# GTP column letters skip "I"
COLUMNS = "ABCDEFGHJKLMNOPQRSTUVWXYZ"


def toVertex(x: int, y: int) -> str:
    return f"{COLUMNS[x]}{y + 1}"


def fromVertex(vertex: str) -> Tuple[int, int]:
    vertex = vertex.strip().upper()
    if len(vertex) < 2 or vertex[0] not in COLUMNS or not vertex[1:].isdigit():
        raise EngineError(f"bad vertex from engine: {vertex!r}")
    return COLUMNS.index(vertex[0]), int(vertex[1:]) - 1


class GtpEngine(GoEngine):

    def __init__(
        self,
        process,
        opponentLevels: Optional[Dict[str, int]] = None,
        komi: float = 5.5,
        openingMoves: int = 1,
        debug: bool = False,
    ):
        self.process = process
        self.opponentLevels = opponentLevels or {}
        self.komi = komi
        self.openingMoves = openingMoves
        self.debug = debug

        self.size = None
        self._finished = False
        self._ourPass = False
        self._theirPass = False

    # ---------- protocol ----------

    def send(self, command: str) -> str:
        if self.debug:
            print(f"[ENGINE] >> {command}")
        try:
            self.process.stdin.write(command + "\n")
            self.process.stdin.flush()
        except (BrokenPipeError, ValueError) as e:
            raise EngineError(f"engine pipe closed: {e}") from e

        lines: List[str] = []
        while True:
            line = self.process.stdout.readline()
            if line == "":
                raise EngineError(f"engine closed the connection during {command!r}")
            line = line.rstrip("\r\n")
            if not line:
                if lines:
                    break
                continue
            lines.append(line)

        status, first = lines[0][0], lines[0][1:].strip()
        body = "\n".join([first] + lines[1:]).strip()
        if self.debug:
            print(f"[ENGINE] << {status} {body}")
        if status == "?":
            raise EngineError(f"{command}: {body}")
        if status != "=":
            raise EngineError(f"unexpected reply to {command!r}: {lines[0]!r}")
        return body

    def close(self):
        try:
            self.send("quit")
        except EngineError as e:
            print(f"[ENGINE] Engine did not acknowledge quit: {e}")

    # ---------- GoEngine ----------

    def resetBoard(self, opponentProfile, size):
        self.size = None
        self.send(f"boardsize {size}")
        self.send("clear_board")
        self.send(f"komi {self.komi}")
        level = self.opponentLevels.get(opponentProfile)
        if level is None:
            print(f"[ENGINE] No level configured for '{opponentProfile}', using engine default.")
        else:
            self.send(f"level {level}")

        self._finished = False
        self._ourPass = False
        self._theirPass = False
        self.size = size

        # seed one stone per side so a fresh board is recognisably live
        for _ in range(self.openingMoves):
            self.send("genmove black")
            self.send("genmove white")

    def getBoardState(self):
        if self.size is None:
            return []
        columns = [[EMPTY] * self.size for _ in range(self.size)]
        for color, marker in (("black", OURS), ("white", OPPONENT)):
            for vertex in self.send(f"list_stones {color}").split():
                x, y = fromVertex(vertex)
                columns[x][y] = marker
        return ["".join(column) for column in columns]

    def getLegalMoves(self):
        if self.size is None:
            return []
        grid = [[False] * self.size for _ in range(self.size)]
        for vertex in self.send("all_legal black").split():
            x, y = fromVertex(vertex)
            grid[x][y] = True
        return grid

    def getGroupLiberties(self, x, y) -> int:
        reply = self.send(f"countlib {toVertex(x, y)}")
        try:
            return int(reply)
        except ValueError as e:
            raise EngineError(f"countlib returned {reply!r}") from e

    def playMove(self, x, y) -> TurnResult:
        if self._finished:
            return TurnResult.GAME_OVER
        self.send(f"play black {toVertex(x, y)}")
        self._ourPass = False
        return TurnResult.CONTINUING

    def passTurn(self) -> TurnResult:
        if self._finished:
            return TurnResult.GAME_OVER
        self.send("play black pass")
        self._ourPass = True
        if self._theirPass:
            self._finished = True
            return TurnResult.GAME_OVER
        return TurnResult.CONTINUING

    def advanceOpponentTurn(self):
        if self._finished:
            return
        reply = self.send("genmove white").lower()
        if reply == "resign":
            print("[ENGINE] Opponent resigned.")
            self._finished = True
        elif reply == "pass":
            self._theirPass = True
            if self._ourPass:
                self._finished = True
        else:
            self._theirPass = False
