"""
Explicit state threaded through every bracket construction step.
"""
from typing import Dict, List, Optional

from .models import BracketSet, Entrant, Layout, Side
from .seeding import rank_entrants


class BuildContext:
    """
    Entrants, layout, the running set id counter and the set arena for one
    bracket under construction. Nothing here is shared between brackets.
    """

    def __init__(self, entrants: List[Entrant], layout: Layout, number_to_win: int = 3,
                 grand_finals_reset: bool = True):
        self.entrants = list(entrants)
        self.ranked = rank_entrants(self.entrants)
        self.layout = layout
        self.number_to_win = number_to_win
        self.grand_finals_reset = grand_finals_reset
        self.sets: Dict[int, BracketSet] = {}
        self._last_id = 0

    @property
    def entrant_count(self) -> int:
        return len(self.entrants)

    def new_set(self, round_number: int, side: Side = Side.WINNERS) -> BracketSet:
        self._last_id += 1
        bracket_set = BracketSet(self._last_id, round_number, side, self.number_to_win)
        self.sets[bracket_set.set_id] = bracket_set
        return bracket_set

    def get(self, set_id: Optional[int]) -> Optional[BracketSet]:
        if set_id is None:
            return None
        return self.sets.get(set_id)

    def sets_by_round(self, round_number: int, side: Side = Side.WINNERS) -> List[BracketSet]:
        return [s for s in self.sets.values() if s.round == round_number and s.side == side]

    def sets_on_side(self, side: Side) -> List[BracketSet]:
        return [s for s in self.sets.values() if s.side == side]

    def children_of(self, bracket_set: BracketSet) -> List[BracketSet]:
        return [self.sets[child] for child in bracket_set.children if child is not None]

    def check_structure(self, root: BracketSet):
        """Assert the linking invariants of a finished elimination bracket."""
        for bracket_set in self.sets.values():
            for slot in (0, 1):
                fed_by = [bracket_set.children[slot], bracket_set.sources[slot], bracket_set.entrants[slot]]
                assert sum(1 for feed in fed_by if feed is not None) == 1, (
                    f"slot {slot} of set {bracket_set.set_id} is fed by {fed_by}")
            if bracket_set.parent is not None:
                assert bracket_set.set_id in self.get(bracket_set.parent).children
            else:
                assert bracket_set is root, f"set {bracket_set.set_id} does not advance anywhere"

        seated = [e for s in self.sets.values() for e in s.entrants if e is not None]
        assert sorted(seated) == sorted(e.entrant_id for e in self.entrants), "entrants not seated exactly once"

        losers = self.sets_on_side(Side.LOSERS)
        if not losers:
            return
        assert len(losers) == self.entrant_count - 2
        last_winners_round = root.round - (2 if self.grand_finals_reset else 1)
        for bracket_set in self.sets_on_side(Side.WINNERS):
            if bracket_set.round <= last_winners_round:
                drop = self.get(bracket_set.drop)
                assert drop is not None and drop.side == Side.LOSERS, (
                    f"loser of winners set {bracket_set.set_id} has nowhere to go")
