"""Type hints used in Pong Core."""

from datetime import datetime
from random import Random
from typing import Callable, Literal, Optional

# Match and tournament status literals (for type hints)
MatchStatus = Literal["pending", "in-progress", "completed"]
TournamentStatus = Literal["active", "completed"]
TournamentView = Literal["next-match", "pending-matches"]

# Outcome of a single game from one player's point of view
MatchOutcome = Literal[0, 1]

# Injected time source, returns an aware datetime
Clock = Callable[[], datetime]
MaybeClock = Optional[Clock]
MaybeRandom = Optional[Random]

#  LocalWords:  MatchStatus MaybeClock
