"""
Tests for Swiss pairing.
"""
import random
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pairings.errors import InvalidPlayerCountError, InvalidRosterError, PairingInfeasibleError
from pairings.models import Player, SWISS
from pairings.swiss import check_feasible, group_by_score, pair_score_groups, swiss


def played(pairings):
    return [m for m in pairings.matches if not m.bye]


def byes(pairings):
    return [m for m in pairings.matches if m.bye]


def assert_valid_round(pairings, players):
    seen = [p.id for m in pairings.matches for p in m.players]
    assert sorted(seen) == sorted(p.id for p in players)
    for match in played(pairings):
        assert not match.player_one.has_played(match.player_two)
        assert match.active
    assert len(byes(pairings)) <= 1
    assert [m.match_number for m in pairings.matches] == list(range(1, len(pairings.matches) + 1))


class TestGroupByScore:
    """Tests for group_by_score."""

    def test_highest_first(self, swiss_field):
        groups = group_by_score(swiss_field)
        assert [[p.id for p in g] for g in groups] == [["A", "B"], ["C", "D", "E", "F"], ["G", "H"]]

    def test_fractional_scores(self):
        players = [Player("A", match_points=1.5), Player("B", match_points=2), Player("C", match_points=1.5)]
        groups = group_by_score(players)
        assert [[p.id for p in g] for g in groups] == [["B"], ["A", "C"]]


class TestOpeningRound:
    """Everyone on zero with no history."""

    def test_four_players_two_matches(self, make_players, rng):
        players = make_players(4)
        pairings = swiss(players, 1, rng=rng)
        assert pairings.round == 1
        assert pairings.format == SWISS
        assert len(played(pairings)) == 2
        assert byes(pairings) == []
        assert_valid_round(pairings, players)

    def test_three_players_one_bye(self, make_players, rng):
        players = make_players(3)
        pairings = swiss(players, 1, rng=rng)
        assert len(played(pairings)) == 1
        assert len(byes(pairings)) == 1
        bye = byes(pairings)[0]
        assert bye.player_two is None
        assert not bye.active
        assert bye.match_number == 2
        paired = {p.id for p in played(pairings)[0].players}
        assert bye.player_one.id not in paired

    @pytest.mark.parametrize("count", range(2, 21))
    def test_any_size(self, make_players, count):
        players = make_players(count)
        pairings = swiss(players, 1, rng=random.Random(count))
        assert len(played(pairings)) == count // 2
        assert len(byes(pairings)) == count % 2
        assert_valid_round(pairings, players)


class TestLaterRounds:
    """Rounds with score groups and history."""

    def test_no_rematches(self, swiss_field, rng):
        pairings = swiss(swiss_field, 3, rng=rng)
        assert_valid_round(pairings, swiss_field)
        assert byes(pairings) == []

    def test_leaders_meet(self, swiss_field, rng):
        pairings = swiss(swiss_field, 3, rng=rng)
        pairs = [{p.id for p in m.players} for m in played(pairings)]
        assert {"A", "B"} in pairs

    def test_pair_down_when_group_exhausted(self, rng):
        """A and B already met, so each pairs down into the next group."""
        players = [
            Player("A", match_points=3, opponents=["B"]),
            Player("B", match_points=3, opponents=["A"]),
            Player("C", match_points=0, opponents=["D"]),
            Player("D", match_points=0, opponents=["C"]),
        ]
        pairings = swiss(players, 2, rng=rng)
        assert_valid_round(pairings, players)
        for match in played(pairings):
            scores = sorted(p.match_points for p in match.players)
            assert scores == [0, 3]

    def test_odd_group_floats_down(self, rng):
        players = [
            Player("A", match_points=3),
            Player("B", match_points=3),
            Player("C", match_points=3),
            Player("D", match_points=0),
        ]
        pairings = swiss(players, 2, rng=rng)
        assert_valid_round(pairings, players)
        opponents_of_d = [m for m in played(pairings) if any(p.id == "D" for p in m.players)]
        assert len(opponents_of_d) == 1

    def test_bye_goes_to_bottom_group(self, rng):
        players = [
            Player("A", match_points=6),
            Player("B", match_points=6),
            Player("C", match_points=3),
            Player("D", match_points=3),
            Player("E", match_points=0),
        ]
        for _ in range(20):
            pairings = swiss(players, 3, rng=rng)
            assert byes(pairings)[0].player_one.id == "E"

    def test_history_forces_the_only_legal_round(self, rng):
        """Dense history makes some shuffles dead-end; retries must find a legal round."""
        players = [
            Player("A", opponents=["B", "C"]),
            Player("B", opponents=["A", "D"]),
            Player("C", opponents=["A", "E"]),
            Player("D", opponents=["B", "F"]),
            Player("E", opponents=["C", "F"]),
            Player("F", opponents=["D", "E"]),
        ]
        pairings = swiss(players, 3, rng=rng)
        assert_valid_round(pairings, players)

    def test_reproducible_with_seed(self, make_players):
        players = make_players(10)
        first = swiss(players, 1, rng=random.Random(7))
        second = swiss(players, 1, rng=random.Random(7))
        assert [m.to_dict() for m in first.matches] == [m.to_dict() for m in second.matches]

    def test_input_not_modified(self, swiss_field, rng):
        before = [(p.id, p.match_points, list(p.opponents)) for p in swiss_field]
        swiss(swiss_field, 3, rng=rng)
        assert [(p.id, p.match_points, list(p.opponents)) for p in swiss_field] == before


class TestPairScoreGroups:
    """Tests for a single pairing attempt."""

    def test_dead_end_returns_none(self):
        """Three players who have all met: at least two stay unpaired."""
        players = [
            Player("A", opponents=["B", "C"]),
            Player("B", opponents=["A", "C"]),
            Player("C", opponents=["A", "B"]),
        ]
        assert pair_score_groups([players], 1, random.Random(0)) is None

    def test_success_numbers_matches(self, make_players):
        matches = pair_score_groups([make_players(5)], 4, random.Random(0))
        assert [m.match_number for m in matches] == [1, 2, 3]
        assert all(m.round == 4 for m in matches)
        assert matches[-1].bye


class TestInfeasible:
    """Impossible pairings raise instead of looping forever."""

    def test_everyone_has_met(self):
        players = [
            Player("A", opponents=["B", "C", "D"]),
            Player("B", opponents=["A", "C", "D"]),
            Player("C", opponents=["A", "B", "D"]),
            Player("D", opponents=["A", "B", "C"]),
        ]
        with pytest.raises(PairingInfeasibleError):
            swiss(players, 4, rng=random.Random(0))

    def test_single_exhausted_player_with_odd_count_allowed(self):
        players = [
            Player("A", opponents=["B", "C"]),
            Player("B", opponents=["A"]),
            Player("C", opponents=["A"]),
        ]
        check_feasible(players)
        pairings = swiss(players, 3, rng=random.Random(0))
        assert byes(pairings)[0].player_one.id == "A"

    def test_attempt_bound(self):
        """Feasible-looking but impossible: B and C can only play A."""
        players = [
            Player("A"),
            Player("B", opponents=["C", "D"]),
            Player("C", opponents=["B", "D"]),
            Player("D", opponents=["B", "C"]),
        ]
        with pytest.raises(PairingInfeasibleError, match="after 25 attempts"):
            swiss(players, 3, rng=random.Random(0), max_attempts=25)


class TestInvalidInput:

    def test_too_few_players(self):
        with pytest.raises(InvalidPlayerCountError):
            swiss([Player("A")], 1)

    def test_points_above_maximum(self):
        players = [Player("A", match_points=9), Player("B", match_points=3)]
        with pytest.raises(InvalidRosterError):
            swiss(players, 2, max_points=6)

    def test_maximum_respected(self):
        players = [Player("A", match_points=6), Player("B", match_points=3)]
        pairings = swiss(players, 3, max_points=6, rng=random.Random(0))
        assert len(played(pairings)) == 1
