"""Elo-style MMR calculations for ladder matches.

All functions are pure: they take players and match records and return new
ones. Persisting the results is the caller's job.
"""

# Pong Core
# Copyright (C) 2025  Pong Core developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from dataclasses import replace
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Union

from pongcore.constants import (
    DEFAULT_K_FACTOR,
    ELO_SCALE,
    LOSS_RESULT,
    MMR_FLOOR,
    MMR_MATCH_ID_PREFIX,
    WIN_RESULT,
)
from pongcore.exceptions import (
    InvalidScoreException,
    PlayerNotFoundException,
    SamePlayerException,
)
from pongcore.models.ladder import MMRChange, MMRMatch
from pongcore.models.player import Player
from pongcore.models.tournament import MatchScore
from pongcore.type_hints import MatchOutcome, MaybeClock
from pongcore.utils import generate_id, resolve_now
from pongcore.utils.validation import validate_match_scores_strict

PlayerLookup = Union[Dict[str, Player], Iterable[Player]]


class RecordedMatch(NamedTuple):
    """Everything produced by recording one ladder match."""

    match: MMRMatch
    updated_player1: Player
    updated_player2: Player


def expected_score(rating_a: int, rating_b: int) -> float:
    """Probability that A beats B under the Elo model."""
    return 1 / (1 + math.pow(10, (rating_b - rating_a) / ELO_SCALE))


def _round_half_up(value: float) -> int:
    # Ratings already in storage were rounded half up; keep doing the same
    return math.floor(value + 0.5)


def compute_rating_change(
    rating_a: int,
    rating_b: int,
    result_a: MatchOutcome,
    k_factor: int = DEFAULT_K_FACTOR,
) -> int:
    """Rating change for player A after a game against B.

    ``round(k * (result - expected))`` with halves rounded up. Calling it
    again with the arguments mirrored gives B's change, equal in magnitude
    to within one point.

    Args:
        rating_a: A's rating before the game
        rating_b: B's rating before the game
        result_a: 1 if A won, 0 if A lost
        k_factor: Maximum swing per game

    Raises:
        InvalidScoreException: If ``result_a`` is not 0 or 1

    Example:
        >>> compute_rating_change(1000, 1000, 1)
        16
    """
    if isinstance(result_a, bool) or result_a not in (WIN_RESULT, LOSS_RESULT):
        raise InvalidScoreException(f"Result must be 1 (win) or 0 (loss), got {result_a!r}")
    return _round_half_up(k_factor * (result_a - expected_score(rating_a, rating_b)))


def _floored(rating: int) -> int:
    return max(MMR_FLOOR, rating)


def _check_pair(player1: Player, player2: Player) -> None:
    if player1.id == player2.id:
        raise SamePlayerException(f"{player1.name} cannot play against themselves")


def record_match(
    player1: Player,
    player2: Player,
    score1: int,
    score2: int,
    k_factor: int = DEFAULT_K_FACTOR,
    clock: MaybeClock = None,
    match_id: Optional[str] = None,
    room_id: Optional[str] = None,
) -> RecordedMatch:
    """Record a ladder match and rate both players.

    The higher score wins. Each player's change is computed from their own
    point of view, the new ratings are floored at zero and peaks are
    tracked. The winner gains a win and the loser a loss.

    Args:
        player1: First player, as currently stored
        player2: Second player, as currently stored
        score1: Points scored by ``player1``
        score2: Points scored by ``player2``
        k_factor: Elo K-factor
        clock: Time source for ``completed_at`` and the default id
        match_id: Explicit id; defaults to ``mmr-<epoch millis>``
        room_id: Room the match was played in

    Raises:
        SamePlayerException: If both players have the same id
        InvalidScoreException: If scores are not non-negative integers or are tied
    """
    _check_pair(player1, player2)
    validate_match_scores_strict(score1, score2)

    now = resolve_now(clock)
    player1_won = score1 > score2
    result1 = WIN_RESULT if player1_won else LOSS_RESULT
    result2 = WIN_RESULT - result1

    change1 = compute_rating_change(player1.mmr, player2.mmr, result1, k_factor)
    change2 = compute_rating_change(player2.mmr, player1.mmr, result2, k_factor)
    new_mmr1 = _floored(player1.mmr + change1)
    new_mmr2 = _floored(player2.mmr + change2)

    match = MMRMatch(
        id=match_id or generate_id(MMR_MATCH_ID_PREFIX, clock=lambda: now),
        player1=player1,
        player2=player2,
        winner=player1 if player1_won else player2,
        score=MatchScore(player1_score=score1, player2_score=score2),
        mmr_change=MMRChange(
            player1_change=change1,
            player2_change=change2,
            player1_new_mmr=new_mmr1,
            player2_new_mmr=new_mmr2,
        ),
        completed_at=now,
        room_id=room_id,
    )

    updated1 = player1.with_rating(new_mmr1)
    updated2 = player2.with_rating(new_mmr2)
    if player1_won:
        updated1, updated2 = updated1.with_win(), updated2.with_loss()
    else:
        updated1, updated2 = updated1.with_loss(), updated2.with_win()

    return RecordedMatch(match=match, updated_player1=updated1, updated_player2=updated2)


def _as_lookup(players: PlayerLookup) -> Dict[str, Player]:
    if isinstance(players, dict):
        return players
    return {p.id: p for p in players}


def _current(lookup: Dict[str, Player], player_id: str) -> Player:
    try:
        return lookup[player_id]
    except KeyError:
        raise PlayerNotFoundException(f"Player {player_id} is not on the roster") from None


def recalculate_match(
    existing_match: MMRMatch,
    players: PlayerLookup,
    new_winner_id: str,
    new_score1: int,
    new_score2: int,
    k_factor: int = DEFAULT_K_FACTOR,
) -> MMRMatch:
    """Recompute a ladder match after a user correction.

    Each player's pre-match rating is recovered as their current rating minus
    the change that actually reached them (see
    :meth:`MMRMatch.applied_change_for`), and the corrected result is
    rated against those base ratings. Only this match is recomputed:
    matches recorded after it keep their stored deltas, so editing an old
    match is order-sensitive.

    Args:
        existing_match: The match as stored
        players: Current roster, as a list or an id mapping
        new_winner_id: Id of the corrected winner
        new_score1: Corrected score for ``player1``
        new_score2: Corrected score for ``player2``
        k_factor: Elo K-factor

    Returns:
        The corrected match; id, time, room and player snapshots are kept

    Raises:
        PlayerNotFoundException: If a participant is missing from ``players``
            or ``new_winner_id`` did not play in the match
        InvalidScoreException: If the scores are invalid or contradict the winner
    """
    lookup = _as_lookup(players)
    first, second = existing_match.player1, existing_match.player2
    if new_winner_id not in (first.id, second.id):
        raise PlayerNotFoundException(
            f"Player {new_winner_id} did not play in match {existing_match.id}"
        )
    validate_match_scores_strict(new_score1, new_score2)
    player1_won = new_winner_id == first.id
    if player1_won != (new_score1 > new_score2):
        raise InvalidScoreException(
            f"Score {new_score1}-{new_score2} contradicts winner {new_winner_id}"
        )

    base1 = _current(lookup, first.id).mmr - existing_match.applied_change_for(first.id)
    base2 = _current(lookup, second.id).mmr - existing_match.applied_change_for(second.id)

    result1 = WIN_RESULT if player1_won else LOSS_RESULT
    change1 = compute_rating_change(base1, base2, result1, k_factor)
    change2 = compute_rating_change(base2, base1, WIN_RESULT - result1, k_factor)

    return replace(
        existing_match,
        winner=first if player1_won else second,
        score=MatchScore(player1_score=new_score1, player2_score=new_score2),
        mmr_change=MMRChange(
            player1_change=change1,
            player2_change=change2,
            player1_new_mmr=_floored(base1 + change1),
            player2_new_mmr=_floored(base2 + change2),
        ),
    )


def _decrement(value: int) -> int:
    return max(0, value - 1)


def apply_match_edit(
    players: Sequence[Player], original: MMRMatch, updated: MMRMatch
) -> List[Player]:
    """Move the roster from an original ladder result to its corrected version.

    The deltas the original applied are reverted and the corrected ones
    applied, floored at zero. If the
    winner changed, one win and one loss move between the two players.
    """
    winner_flipped = original.winner.id != updated.winner.id
    result = []
    for player in players:
        if player.id not in (original.player1.id, original.player2.id):
            result.append(player)
            continue

        base = player.mmr - original.applied_change_for(player.id)
        edited = player.with_rating(base + updated.change_for(player.id))
        if winner_flipped:
            if player.id == updated.winner.id:
                edited = replace(edited, wins=edited.wins + 1, losses=_decrement(edited.losses))
            else:
                edited = replace(edited, wins=_decrement(edited.wins), losses=edited.losses + 1)
        result.append(edited)
    return result


def revert_match(players: Sequence[Player], match: MMRMatch) -> List[Player]:
    """Undo a ladder match on the roster, as when it is deleted.

    Ratings lose the delta the match applied (floored at zero), the winner loses a win
    and the loser a loss. Peaks are never lowered.
    """
    result = []
    for player in players:
        if player.id not in (match.player1.id, match.player2.id):
            result.append(player)
            continue

        reverted = player.with_rating(player.mmr - match.applied_change_for(player.id))
        if player.id == match.winner.id:
            reverted = replace(reverted, wins=_decrement(reverted.wins))
        else:
            reverted = replace(reverted, losses=_decrement(reverted.losses))
        result.append(reverted)
    return result
