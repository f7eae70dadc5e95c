"""Single-elimination bracket generation and advancement.

Brackets are flat, round-ordered lists of :class:`Match`. Every function here
is pure: inputs are never modified and new lists are returned.

Byes
----
An odd roster is padded with the BYE sentinel. A round fed by an odd number
of matches gets the BYE as ``player2`` of its last match. Any match whose
only opponent is the BYE completes as a walkover as soon as its real player
is seated, and that player moves on like any other winner. Walkovers carry
no score and never change win/loss counts.
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
import random
from dataclasses import replace
from datetime import datetime
from itertools import groupby
from typing import Dict, List, Optional, Sequence

from pongcore.constants import (
    MATCH_COMPLETED,
    MIN_TOURNAMENT_PLAYERS,
    TOURNAMENT_COMPLETED,
)
from pongcore.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    InvalidMatchStateException,
    InvalidScoreException,
    TournamentStateException,
    UnknownMatchException,
)
from pongcore.models.player import BYE_PLAYER, Player, is_real_player
from pongcore.models.tournament import (
    Match,
    MatchScore,
    Tournament,
    parse_match_id,
)
from pongcore.models.tournament import match_id as make_match_id
from pongcore.type_hints import MaybeClock, MaybeRandom
from pongcore.utils import resolve_now
from pongcore.utils.validation import validate_match_scores_strict


# ========== Generation ==========


def generate_bracket(
    players: Sequence[Player],
    rng: MaybeRandom = None,
    clock: MaybeClock = None,
) -> List[Match]:
    """Build a randomly seeded single-elimination bracket.

    Round 1 pairs the shuffled roster ``(0, 1), (2, 3), ...`` after padding an
    odd roster with one BYE. Each later round has ``ceil(previous / 2)``
    matches with empty slots, down to a single final. BYE matches are
    resolved before returning.

    Args:
        players: Roster to seed, at least two players with distinct ids
        rng: Random source for the shuffle; a fresh unseeded one by default
        clock: Time source used to stamp walkovers

    Returns:
        All matches, round by round, in slot order

    Raises:
        InsufficientPlayersException: If fewer than two players are given
        DuplicatePlayerException: If two entries share an id
    """
    if len(players) < MIN_TOURNAMENT_PLAYERS:
        raise InsufficientPlayersException(
            f"A bracket needs at least {MIN_TOURNAMENT_PLAYERS} players, got {len(players)}"
        )

    seen = set()
    for player in players:
        if player.is_bye:
            raise DuplicatePlayerException("The BYE sentinel cannot be entered as a player")
        if player.id in seen:
            raise DuplicatePlayerException(f"Player {player.id} is entered twice")
        seen.add(player.id)

    shuffled = list(players)
    (rng or random.Random()).shuffle(shuffled)
    if len(shuffled) % 2 == 1:
        shuffled.append(BYE_PLAYER)

    matches = [
        Match(
            id=make_match_id(1, slot),
            round=1,
            player1=shuffled[i],
            player2=shuffled[i + 1],
        )
        for slot, i in enumerate(range(0, len(shuffled), 2))
    ]

    round_number = 1
    slot_count = len(matches)
    while slot_count > 1:
        feeders = slot_count
        slot_count = math.ceil(feeders / 2)
        round_number += 1
        for slot in range(slot_count):
            # The last slot of a round fed by an odd count has a single feeder
            lone_feeder = feeders % 2 == 1 and slot == slot_count - 1
            matches.append(
                Match(
                    id=make_match_id(round_number, slot),
                    round=round_number,
                    player2=BYE_PLAYER if lone_feeder else None,
                )
            )

    return _resolve_walkovers(matches, resolve_now(clock))


# ========== Advancement ==========


def _index_of(matches: Sequence[Match], target_id: str) -> int:
    for index, match in enumerate(matches):
        if match.id == target_id:
            return index
    raise UnknownMatchException(f"Match {target_id!r} is not in this bracket")


def _seat_winner(matches: List[Match], source: Match, winner: Player) -> None:
    """Place ``winner`` into the next-round slot fed by ``source`` (in place)."""
    round_number, slot = parse_match_id(source.id)
    next_id = make_match_id(round_number + 1, slot // 2)
    for index, match in enumerate(matches):
        if match.id == next_id:
            if slot % 2 == 0:
                matches[index] = replace(match, player1=winner)
            else:
                matches[index] = replace(match, player2=winner)
            return


def _resolve_walkovers(matches: List[Match], now: datetime) -> List[Match]:
    """Complete every pending match whose only opponent is the BYE."""
    changed = True
    while changed:
        changed = False
        for index, match in enumerate(matches):
            if not match.is_pending or not match.has_bye:
                continue
            real = match.participants()
            if len(real) != 1:
                continue
            walked = replace(
                match, status=MATCH_COMPLETED, winner=real[0], completed_at=now
            )
            matches[index] = walked
            _seat_winner(matches, walked, real[0])
            changed = True
    return matches


def _check_score(match: Match, winner: Player, score: MatchScore) -> None:
    validate_match_scores_strict(score.player1_score, score.player2_score)
    slot1_won = winner.id == match.player1.id
    if slot1_won != score.player1_won:
        raise InvalidScoreException(
            f"Score {score.player1_score}-{score.player2_score} does not match "
            f"winner {winner.name} in {match.id}"
        )


def advance(
    matches: Sequence[Match],
    match_id: str,
    winner: Player,
    score: MatchScore,
    clock: MaybeClock = None,
) -> List[Match]:
    """Record a result and move the winner into the next round.

    The winner of slot ``I`` in round ``R`` is seated in
    ``round-<R+1>-match-<I // 2>``: as player1 when ``I`` is even, as
    player2 when odd. A follow-on walkover is resolved immediately.

    Args:
        matches: Current bracket, reflecting every earlier advance
        match_id: Match being recorded
        winner: One of the match's two players
        score: Final score, consistent with ``winner``
        clock: Time source for ``completed_at``

    Returns:
        A new list of matches

    Raises:
        UnknownMatchException: If ``match_id`` is not in ``matches``
        InvalidMatchStateException: If the match is completed, has an empty
            or BYE slot, or ``winner`` is not one of its players
        InvalidScoreException: If the score is malformed, tied, or names
            the other player as winner
    """
    updated = list(matches)
    index = _index_of(updated, match_id)
    match = updated[index]

    if not match.is_pending:
        raise InvalidMatchStateException(f"Match {match_id} is already {match.status}")
    if not match.is_playable:
        raise InvalidMatchStateException(f"Match {match_id} does not have two players yet")
    if winner.id not in (match.player1.id, match.player2.id):
        raise InvalidMatchStateException(f"{winner.name} is not playing in match {match_id}")
    _check_score(match, winner, score)

    # Use the seated copy so the stored winner matches the bracket snapshot
    seated_winner = match.player1 if winner.id == match.player1.id else match.player2
    now = resolve_now(clock)
    completed = replace(
        match,
        status=MATCH_COMPLETED,
        winner=seated_winner,
        score=score,
        completed_at=now,
    )
    updated[index] = completed
    _seat_winner(updated, completed, seated_winner)
    return _resolve_walkovers(updated, now)


def apply_result_to_roster(players: Sequence[Player], match: Match) -> List[Player]:
    """Credit a completed match to the roster.

    The winner gains a win and the other participant a loss. The BYE never
    accrues stats, so walkovers leave the roster unchanged.
    """
    if not match.is_completed or match.winner is None or match.is_walkover:
        return list(players)

    participant_ids = {p.id for p in match.participants()}
    updated = []
    for player in players:
        if player.is_bye or player.id not in participant_ids:
            updated.append(player)
        elif player.id == match.winner.id:
            updated.append(player.with_win())
        else:
            updated.append(player.with_loss())
    return updated


def overall_winner(players: Sequence[Player]) -> Player:
    """Pick the champion: most wins, then fewest losses, then roster order.

    Raises:
        InsufficientPlayersException: If there are no real players
    """
    champion: Optional[Player] = None
    for player in players:
        if not is_real_player(player):
            continue
        if champion is None:
            champion = player
        elif player.wins > champion.wins:
            champion = player
        elif player.wins == champion.wins and player.losses < champion.losses:
            champion = player
    if champion is None:
        raise InsufficientPlayersException("Cannot pick a winner from an empty roster")
    return champion


def is_complete(matches: Sequence[Match]) -> bool:
    """True when every match is completed (vacuously false for no matches)."""
    return bool(matches) and all(m.is_completed for m in matches)


def record_tournament_result(
    tournament: Tournament,
    match_id: str,
    score: MatchScore,
    clock: MaybeClock = None,
) -> Tournament:
    """Record a match result against a whole tournament.

    The winner is the player with the higher score. Player stats are
    credited on the tournament's roster snapshot, and the tournament is
    completed with :func:`overall_winner` once every match is done.

    Raises:
        TournamentStateException: If the tournament is already completed
        plus everything :func:`advance` raises
    """
    if not tournament.is_active:
        raise TournamentStateException(f"Tournament {tournament.id} is already completed")

    index = _index_of(tournament.matches, match_id)
    match = tournament.matches[index]
    if not match.is_playable:
        raise InvalidMatchStateException(f"Match {match_id} cannot be recorded now")
    validate_match_scores_strict(score.player1_score, score.player2_score)
    winner = match.player1 if score.player1_won else match.player2

    now = resolve_now(clock)
    matches = advance(tournament.matches, match_id, winner, score, clock=lambda: now)
    players = apply_result_to_roster(tournament.players, matches[index])

    if is_complete(matches):
        return replace(
            tournament,
            matches=tuple(matches),
            players=tuple(players),
            status=TOURNAMENT_COMPLETED,
            winner=overall_winner(players),
            completed_at=now,
        )
    return replace(tournament, matches=tuple(matches), players=tuple(players))


# ========== Queries ==========


def next_playable_match(matches: Sequence[Match]) -> Optional[Match]:
    """First match, in generation order, that is ready to be played."""
    for match in matches:
        if match.is_playable:
            return match
    return None


def playable_matches(matches: Sequence[Match]) -> List[Match]:
    return [m for m in matches if m.is_playable]


def rounds(matches: Sequence[Match]) -> Dict[int, List[Match]]:
    """Group matches by round number, keeping slot order."""
    ordered = sorted(matches, key=lambda m: (m.round, m.slot))
    return {number: list(group) for number, group in groupby(ordered, key=lambda m: m.round)}


def final_match(matches: Sequence[Match]) -> Optional[Match]:
    """The single match of the last round."""
    if not matches:
        return None
    return max(matches, key=lambda m: m.round)
