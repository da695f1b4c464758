"""
Tests for single elimination brackets and the winners side they share with double elimination.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.dirname(__file__))

from bracket_helpers import chalk, coin_flips, losses, play_out, upsets
from brackets.context import BuildContext
from brackets.event import Bracket
from brackets.models import BracketSet, Layout
from brackets.winners import build_winners_bracket


def seats(bracket, round_number):
    return [bracket_set.entrants for bracket_set in bracket.sets_by_round(round_number)]


class TestWinnersBuilder:
    """Tests for build_winners_bracket."""

    def test_placeholder_below_two_entrants(self, make_entrants):
        """Test that one entrant gives a placeholder outside the arena."""
        ctx = BuildContext(make_entrants(1), Layout.SINGLE_ELIMINATION)
        root = build_winners_bracket(ctx)
        assert isinstance(root, BracketSet)
        assert root.set_id == 0
        assert root.round == 0
        assert ctx.sets == {}

    def test_final_is_last_set(self, make_entrants):
        """Test that the final is the only set without a parent."""
        ctx = BuildContext(make_entrants(8), Layout.SINGLE_ELIMINATION)
        final = build_winners_bracket(ctx)
        assert final.set_id == 7
        assert final.round == 3
        assert [s.set_id for s in ctx.sets.values() if s.parent is None] == [7]

    def test_ghost_sets_not_built(self, make_entrants):
        """Test that only real round 1 sets link into round 2."""
        ctx = BuildContext(make_entrants(5), Layout.SINGLE_ELIMINATION)
        build_winners_bracket(ctx)
        round_two = ctx.sets_by_round(2)
        assert [s.children for s in round_two] == [[None, 1], [None, None]]


class TestFourEntrants:
    """Tests for a 4 entrant single elimination bracket."""

    def test_round_one_pairings(self, make_entrants):
        """Test 1 vs 4 and 2 vs 3 in round 1."""
        bracket = Bracket(make_entrants(4))
        assert seats(bracket, 1) == [['1', '4'], ['2', '3']]
        assert len(bracket.sets_by_round(2)) == 1
        assert len(bracket.sets) == 3

    def test_placements(self, make_entrants):
        """Test final is 2nd place and both semifinals tie for 3rd."""
        bracket = Bracket(make_entrants(4))
        assert bracket.root.placement == 2
        assert [s.placement for s in bracket.sets_by_round(1)] == [3, 3]

    def test_links(self, make_entrants):
        """Test both semifinals feed the final."""
        bracket = Bracket(make_entrants(4))
        assert bracket.root.children == [1, 2]
        assert all(s.parent == 3 for s in bracket.sets_by_round(1))


class TestFiveEntrants:
    """Tests for a 5 entrant bracket with 3 byes."""

    def test_counts(self, make_entrants):
        """Test 1 round 1 set, 2 round 2 sets, 4 sets total."""
        bracket = Bracket(make_entrants(5))
        assert len(bracket.sets_by_round(1)) == 1
        assert len(bracket.sets_by_round(2)) == 2
        assert len(bracket.sets) == 4

    def test_byes_seated_in_round_two(self, make_entrants):
        """Test that the bye entrants wait in round 2."""
        bracket = Bracket(make_entrants(5))
        assert seats(bracket, 1) == [['4', '5']]
        assert seats(bracket, 2) == [['1', None], ['2', '3']]
        assert bracket.sets_by_round(2)[0].children == [None, 1]

    def test_placements(self, make_entrants):
        """Test placements by depth: 2, then 3 for two sets, then 5."""
        bracket = Bracket(make_entrants(5))
        assert bracket.root.placement == 2
        assert [s.placement for s in bracket.sets_by_round(2)] == [3, 3]
        assert [s.placement for s in bracket.sets_by_round(1)] == [5]


class TestTwoEntrants:
    """Tests for the smallest bracket."""

    def test_single_final(self, make_entrants):
        """Test that 2 entrants play one final."""
        bracket = Bracket(make_entrants(2))
        assert len(bracket.sets) == 1
        assert bracket.root.entrants == ['1', '2']
        assert bracket.root.placement == 2


class TestSingleEliminationSweep:
    """Size sweep over single elimination brackets."""

    @pytest.mark.slow
    def test_structure(self, make_entrants):
        """Test n - 1 sets and each entrant seated exactly once for n = 2..64."""
        for n in range(2, 65):
            bracket = Bracket(make_entrants(n))
            assert len(bracket.sets) == n - 1, n
            seated = [e for s in bracket.sets for e in s.entrants if e is not None]
            assert sorted(seated) == sorted(str(i) for i in range(1, n + 1)), n
            assert bracket.root is bracket.winners_final
            assert bracket.root.parent is None

    @pytest.mark.slow
    def test_top_seeds_meet_in_final(self, make_entrants):
        """Test that seeds 1 and 2 only meet in the final when the favourites win."""
        for n in range(2, 65):
            bracket = Bracket(make_entrants(n))
            played, history = play_out(bracket, chalk)
            meetings = [set_id for set_id, opponent in history['1'] if opponent == '2']
            assert meetings == [bracket.root.set_id], n
            assert played[bracket.root.set_id].winner == '1'

    @pytest.mark.slow
    def test_one_loss_each(self, make_entrants):
        """Test that every entrant but the champion loses exactly once."""
        for n in range(2, 65):
            for picker in (chalk, upsets, coin_flips(n)):
                bracket = Bracket(make_entrants(n))
                played, _ = play_out(bracket, picker)
                counts = losses(played)
                champion = played[bracket.root.set_id].winner
                assert champion not in counts
                assert len(counts) == n - 1
                assert set(counts.values()) == {1}

    @pytest.mark.slow
    def test_placements_cover_field(self, make_entrants):
        """Test that set placements account for places 2..n."""
        for n in range(2, 65):
            bracket = Bracket(make_entrants(n))
            placements = sorted(s.placement for s in bracket.sets)
            assert placements[0] == 2
            # Each depth starts one past everyone who finished above it.
            for placement in set(placements):
                assert placements.index(placement) + 2 == placement, n
