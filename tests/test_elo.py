import random
from datetime import datetime

import pytest
from dateutil import tz

from pongcore.exceptions import (
    InvalidScoreException,
    PlayerNotFoundException,
    SamePlayerException,
)
from pongcore.models.player import Player
from pongcore.rating import (
    apply_match_edit,
    compute_rating_change,
    expected_score,
    recalculate_match,
    record_match,
    revert_match,
)
from pongcore.utils import epoch_millis

NOW = datetime(2025, 5, 4, 9, 15, tzinfo=tz.UTC)


def _clock():
    return NOW


def _player(player_id, mmr=1000, **kwargs):
    return Player(id=player_id, name=player_id.title(), mmr=mmr, **kwargs)


def test_expected_score_is_symmetric():
    assert expected_score(1000, 1000) == pytest.approx(0.5)
    assert expected_score(1200, 1000) + expected_score(1000, 1200) == pytest.approx(1)
    assert expected_score(1400, 1000) == pytest.approx(1 / 1.1, rel=1e-3)


def test_equal_ratings_swing_half_k():
    assert compute_rating_change(1000, 1000, 1) == 16
    assert compute_rating_change(1000, 1000, 0) == -16


def test_favourite_gains_less_than_underdog():
    assert compute_rating_change(1200, 1000, 1) == 8
    assert compute_rating_change(1000, 1200, 0) == -8
    assert compute_rating_change(1000, 1200, 1) == 24
    assert compute_rating_change(1200, 1000, 0) == -24


@pytest.mark.parametrize(
    "rating_a,rating_b",
    [(1000, 1000), (1234, 987), (600, 1650), (0, 2400), (1500, 1499)],
)
def test_mirrored_changes_cancel_within_one_point(rating_a, rating_b):
    for result in (0, 1):
        change_a = compute_rating_change(rating_a, rating_b, result)
        change_b = compute_rating_change(rating_b, rating_a, 1 - result)
        assert abs(change_a + change_b) <= 1
        if result == 1:
            assert 0 <= change_a <= 32
        else:
            assert -32 <= change_a <= 0


def test_custom_k_factor():
    assert compute_rating_change(1000, 1000, 1, k_factor=40) == 20


@pytest.mark.parametrize("result", [2, -1, 0.5, True, "1"])
def test_invalid_result_rejected(result):
    with pytest.raises(InvalidScoreException):
        compute_rating_change(1000, 1000, result)


def test_record_match_updates_both_players():
    alice, bob = _player("alice"), _player("bob")
    recorded = record_match(alice, bob, 11, 7, clock=_clock, room_id="room-1")

    match = recorded.match
    assert match.id == f"mmr-{epoch_millis(NOW)}"
    assert match.completed_at == NOW
    assert match.room_id == "room-1"
    assert match.winner == alice
    assert match.loser == bob
    assert match.score.player1_score == 11
    assert match.mmr_change.player1_change == 16
    assert match.mmr_change.player2_change == -16
    assert match.mmr_change.player1_new_mmr == 1016
    assert match.mmr_change.player2_new_mmr == 984

    # Stored snapshots are taken before the match
    assert match.player1.mmr == 1000 and match.player1.wins == 0

    assert recorded.updated_player1.mmr == 1016
    assert recorded.updated_player1.peak_mmr == 1016
    assert recorded.updated_player1.wins == 1
    assert recorded.updated_player2.mmr == 984
    assert recorded.updated_player2.peak_mmr == 1000
    assert recorded.updated_player2.losses == 1


def test_record_match_player2_wins():
    alice, bob = _player("alice", mmr=1200), _player("bob")
    recorded = record_match(alice, bob, 3, 11, clock=_clock, match_id="mmr-custom")
    assert recorded.match.id == "mmr-custom"
    assert recorded.match.winner == bob
    assert recorded.updated_player2.mmr == 1024
    assert recorded.updated_player1.mmr == 1176
    assert recorded.updated_player1.peak_mmr == 1200


def test_record_match_floors_at_zero():
    low, high = _player("low", mmr=5), _player("high", mmr=5)
    recorded = record_match(low, high, 2, 11, clock=_clock)
    assert recorded.match.mmr_change.player1_change == -16
    assert recorded.match.mmr_change.player1_new_mmr == 0
    assert recorded.updated_player1.mmr == 0
    assert recorded.updated_player1.peak_mmr == 5


def test_record_match_rejects_self_play():
    alice = _player("alice")
    with pytest.raises(SamePlayerException):
        record_match(alice, alice, 11, 3)


@pytest.mark.parametrize("scores", [(11, 11), (-1, 11), (11, 2.5), (None, 3)])
def test_record_match_rejects_bad_scores(scores):
    with pytest.raises(InvalidScoreException):
        record_match(_player("alice"), _player("bob"), *scores)


def test_record_match_does_not_modify_inputs():
    alice, bob = _player("alice"), _player("bob")
    record_match(alice, bob, 11, 4, clock=_clock)
    assert alice.mmr == 1000 and alice.wins == 0
    assert bob.mmr == 1000 and bob.losses == 0


def _recorded_pair():
    alice, bob = _player("alice"), _player("bob")
    recorded = record_match(alice, bob, 11, 7, clock=_clock)
    return recorded.match, [recorded.updated_player1, recorded.updated_player2]


def test_recalculate_flips_winner():
    match, roster = _recorded_pair()
    updated = recalculate_match(match, roster, "bob", 7, 11)

    assert updated.id == match.id
    assert updated.completed_at == match.completed_at
    assert updated.winner.id == "bob"
    assert updated.score.player2_score == 11
    assert updated.mmr_change.player1_change == -16
    assert updated.mmr_change.player2_change == 16
    assert updated.mmr_change.player1_new_mmr == 984
    assert updated.mmr_change.player2_new_mmr == 1016


def test_recalculate_accepts_mapping():
    match, roster = _recorded_pair()
    by_id = {p.id: p for p in roster}
    updated = recalculate_match(match, by_id, "alice", 11, 9)
    assert updated.mmr_change == match.mmr_change
    assert updated.score.player2_score == 9


def test_recalculate_rejects_outsider_winner():
    match, roster = _recorded_pair()
    with pytest.raises(PlayerNotFoundException):
        recalculate_match(match, roster, "carol", 11, 7)


def test_recalculate_rejects_contradicting_score():
    match, roster = _recorded_pair()
    with pytest.raises(InvalidScoreException):
        recalculate_match(match, roster, "alice", 7, 11)


def test_recalculate_requires_participants_on_roster():
    match, roster = _recorded_pair()
    with pytest.raises(PlayerNotFoundException):
        recalculate_match(match, roster[:1], "alice", 11, 7)


def test_apply_match_edit_moves_rating_and_record():
    match, roster = _recorded_pair()
    carol = _player("carol", mmr=1300)
    roster.append(carol)

    updated = recalculate_match(match, roster, "bob", 7, 11)
    edited = {p.id: p for p in apply_match_edit(roster, match, updated)}

    assert edited["alice"].mmr == 984
    assert (edited["alice"].wins, edited["alice"].losses) == (0, 1)
    # Peak is never lowered by a correction
    assert edited["alice"].peak_mmr == 1016
    assert edited["bob"].mmr == 1016
    assert edited["bob"].peak_mmr == 1016
    assert (edited["bob"].wins, edited["bob"].losses) == (1, 0)
    assert edited["carol"] == carol


def test_apply_match_edit_same_winner_keeps_record():
    match, roster = _recorded_pair()
    updated = recalculate_match(match, roster, "alice", 11, 2)
    edited = {p.id: p for p in apply_match_edit(roster, match, updated)}
    assert (edited["alice"].wins, edited["alice"].losses) == (1, 0)
    assert (edited["bob"].wins, edited["bob"].losses) == (0, 1)


def test_revert_match_restores_ratings():
    match, roster = _recorded_pair()
    reverted = {p.id: p for p in revert_match(roster, match)}

    assert reverted["alice"].mmr == 1000
    assert reverted["alice"].wins == 0
    assert reverted["alice"].peak_mmr == 1016
    assert reverted["bob"].mmr == 1000
    assert reverted["bob"].losses == 0


def test_revert_match_floors_rating_and_counts():
    match, _ = _recorded_pair()
    drifted = [_player("alice", mmr=10, peak_mmr=1016), _player("bob", mmr=900)]
    reverted = {p.id: p for p in revert_match(drifted, match)}
    assert reverted["alice"].mmr == 0
    assert reverted["alice"].wins == 0
    assert reverted["bob"].mmr == 916
    assert reverted["bob"].losses == 0


def test_peak_never_decreases_over_a_season():
    rng = random.Random(17)
    alice, bob = _player("alice", mmr=40), _player("bob", mmr=1500)
    peaks = [alice.peak_mmr]
    for _ in range(60):
        if rng.random() < 0.5:
            recorded = record_match(alice, bob, 11, rng.randint(0, 9), clock=_clock)
        else:
            recorded = record_match(alice, bob, rng.randint(0, 9), 11, clock=_clock)
        alice, bob = recorded.updated_player1, recorded.updated_player2
        assert alice.mmr >= 0 and bob.mmr >= 0
        assert alice.peak_mmr >= alice.mmr
        peaks.append(alice.peak_mmr)
    assert peaks == sorted(peaks)


def test_higher_rated_player_loses_without_explicit_peak():
    favourite = Player(id="a", name="A", mmr=1200)
    underdog = Player(id="b", name="B")
    recorded = record_match(favourite, underdog, 5, 11, clock=_clock)

    assert favourite.peak_mmr == 1200
    assert recorded.updated_player1.mmr == 1176
    assert recorded.updated_player1.losses == 1
    assert recorded.updated_player2.mmr == 1024
    assert recorded.updated_player2.wins == 1


def _floored_pair():
    low, high = _player("low", mmr=5), _player("high", mmr=5)
    recorded = record_match(low, high, 2, 11, clock=_clock)
    return recorded.match, [recorded.updated_player1, recorded.updated_player2]


def test_applied_change_accounts_for_floor():
    match, _ = _floored_pair()
    assert match.change_for("low") == -16
    assert match.applied_change_for("low") == -5
    assert match.applied_change_for("high") == 16


def test_revert_floored_match_restores_prior_rating():
    match, roster = _floored_pair()
    reverted = {p.id: p for p in revert_match(roster, match)}

    assert (reverted["low"].mmr, reverted["low"].peak_mmr) == (5, 5)
    assert reverted["low"].losses == 0
    assert (reverted["high"].mmr, reverted["high"].peak_mmr) == (5, 21)


def test_edit_floored_match_rates_from_prior_rating():
    match, roster = _floored_pair()

    updated = recalculate_match(match, roster, "low", 11, 2)
    # Both players are rated from 5 again, not from 16 and 5
    assert updated.mmr_change.player1_change == 16
    assert updated.mmr_change.player1_new_mmr == 21
    assert updated.mmr_change.player2_change == -16
    assert updated.mmr_change.player2_new_mmr == 0

    edited = {p.id: p for p in apply_match_edit(roster, match, updated)}
    assert (edited["low"].mmr, edited["low"].peak_mmr) == (21, 21)
    assert (edited["low"].wins, edited["low"].losses) == (1, 0)
    assert (edited["high"].mmr, edited["high"].peak_mmr) == (0, 21)
    assert (edited["high"].wins, edited["high"].losses) == (0, 1)
