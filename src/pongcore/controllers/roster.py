"""Roster controller for creating, loading and removing players."""

from typing import Any, Dict, List, Optional, Sequence

from pongcore.constants import DEFAULT_MMR
from pongcore.exceptions import PlayerNotFoundException
from pongcore.models.player import Player
from pongcore.type_hints import MaybeClock
from pongcore.utils import generate_id, setup_logger
from pongcore.utils.validation import validate_player_name_strict

logger = setup_logger(__name__)


def create_player(
    name: str,
    roster: Sequence[Player] = (),
    player_id: Optional[str] = None,
    clock: MaybeClock = None,
) -> Player:
    """Create a fresh player for a roster.

    Parameters
    ----------
    name : str
        Display name; trimmed and checked for case-insensitive uniqueness.
    roster : sequence of Player
        Players already in the group.
    player_id : str, optional
        Id from the identity provider; defaults to an epoch-millis id.
    clock : callable, optional
        Time source for the default id.

    Raises
    ------
    InvalidPlayerDataException
        If the name is blank.
    DuplicatePlayerException
        If the name is already on the roster.
    """
    clean_name = validate_player_name_strict(name, (p.name for p in roster))
    player = Player(
        id=player_id or generate_id(clock=clock),
        name=clean_name,
        mmr=DEFAULT_MMR,
        peak_mmr=DEFAULT_MMR,
    )
    logger.debug(f"Created player {player.name} ({player.id})")
    return player


def normalize_player(data: Dict[str, Any]) -> Player:
    """Load a stored player, filling ratings missing from legacy documents.

    Older documents may lack ``mmr`` and ``peakMmr`` or store them as null;
    these become the default rating and the current rating respectively. A
    stored rating of 0 is a floored rating and is kept.
    """
    data = dict(data)
    if data.get("mmr") is None:
        data["mmr"] = DEFAULT_MMR
    if data.get("peakMmr") is None:
        data["peakMmr"] = data["mmr"]
    for counter in ("wins", "losses"):
        if data.get(counter) is None:
            data[counter] = 0
    return Player.from_dict(data)


def remove_player(roster: Sequence[Player], player_id: str) -> List[Player]:
    """Return the roster without ``player_id``.

    Raises
    ------
    PlayerNotFoundException
        If no player has that id.
    """
    remaining = [p for p in roster if p.id != player_id]
    if len(remaining) == len(roster):
        raise PlayerNotFoundException(f"Player {player_id} is not on the roster")
    logger.debug(f"Removed player {player_id}")
    return remaining


def replace_players(roster: Sequence[Player], *updated: Player) -> List[Player]:
    """Swap in updated copies of players, matched by id, keeping roster order."""
    by_id = {p.id: p for p in updated}
    return [by_id.get(p.id, p) for p in roster]
