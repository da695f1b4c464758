"""
Data models for bracket entrants and sets.
"""
from enum import Enum
from typing import List, Optional


class Layout(Enum):
    SINGLE_ELIMINATION = 'single-elim'
    DOUBLE_ELIMINATION = 'double-elim'
    ROUND_ROBIN = 'round-robin'

    @property
    def is_elimination(self) -> bool:
        return self in (Layout.SINGLE_ELIMINATION, Layout.DOUBLE_ELIMINATION)

    @classmethod
    def parse(cls, value) -> 'Layout':
        """Resolve a layout from an enum member or any accepted spelling."""
        if isinstance(value, Layout):
            return value
        key = str(value or '').strip().lower().replace('_', ' ').replace('-', ' ')
        if key in LAYOUT_ALIASES:
            return LAYOUT_ALIASES[key]
        raise ValueError(f"Unknown bracket layout: {value!r}")


LAYOUT_ALIASES = {
    'single elim': Layout.SINGLE_ELIMINATION,
    'single elimination': Layout.SINGLE_ELIMINATION,
    'single': Layout.SINGLE_ELIMINATION,
    'double elim': Layout.DOUBLE_ELIMINATION,
    'double elimination': Layout.DOUBLE_ELIMINATION,
    'double': Layout.DOUBLE_ELIMINATION,
    'round robin': Layout.ROUND_ROBIN,
}


class Side(Enum):
    WINNERS = 'winners'
    LOSERS = 'losers'


class SetStatus(Enum):
    PENDING = 'pending'
    STARTED = 'started'
    COMPLETED = 'completed'


class SetResult(Enum):
    WIN = 'win'
    LOSE = 'lose'
    DRAW = 'draw'
    DISQUALIFIED = 'disqualified'


class Entrant:
    def __init__(self, entrant_id, tag='', seed=0, final_placement=None,
                 personal_information=None, other=None):
        self._entrant_id = str(entrant_id)
        self.tag = tag or ''
        self.seed = seed or 0
        self.final_placement = final_placement
        self.personal_information = list(personal_information) if personal_information else []
        self.other = dict(other) if other else {}

    @property
    def entrant_id(self) -> str:
        return self._entrant_id

    def assign_seed(self, seed: int):
        self.seed = seed

    def assign_tag(self, tag: str):
        self.tag = tag

    def __repr__(self):
        return f"Entrant(entrant_id={self.entrant_id}, tag={self.tag}, seed={self.seed})"


class BracketSet:
    """
    One pairing in the bracket.

    Links are stored as set ids and resolved through the owning arena:
    - children: per slot, the set whose winner fills that slot
    - sources: per slot, the winners-side set whose loser fills that slot
    - parent: the set this set's winner advances to
    - drop: the set this set's loser falls to (double elimination only)
    """

    def __init__(self, set_id: int, round_number: int, side: Side = Side.WINNERS,
                 number_to_win: int = 3):
        self.set_id = set_id
        self.round = round_number
        self.side = side
        self.entrants: List[Optional[str]] = [None, None]
        self.scores = [0, 0]
        self.results: List[Optional[SetResult]] = [None, None]
        self.status = SetStatus.PENDING
        self.number_to_win = number_to_win or 3
        self.placement = 0
        self.children: List[Optional[int]] = [None, None]
        self.sources: List[Optional[int]] = [None, None]
        self.parent: Optional[int] = None
        self.drop: Optional[int] = None
        self.games = []

    def slot_is_open(self, slot: int) -> bool:
        """True if nothing structural feeds the slot yet."""
        return (self.children[slot] is None and self.sources[slot] is None
                and self.entrants[slot] is None)

    def add_child(self, child: 'BracketSet', slot: int):
        assert child.parent is None, f"set {child.set_id} already advances to {child.parent}"
        assert self.slot_is_open(slot), f"slot {slot} of set {self.set_id} is already fed"
        self.children[slot] = child.set_id
        child.parent = self.set_id

    def link_drop(self, target: 'BracketSet', slot: int):
        """Send this set's loser into a slot of ``target``."""
        assert self.drop is None, f"loser of set {self.set_id} already drops to {self.drop}"
        assert target.slot_is_open(slot), f"slot {slot} of set {target.set_id} is already fed"
        target.sources[slot] = self.set_id
        self.drop = target.set_id

    def seat_entrant(self, slot: int, entrant_id: str):
        """Seat an entrant directly; the slot must have no other feed."""
        assert self.slot_is_open(slot), f"slot {slot} of set {self.set_id} is already fed"
        self.entrants[slot] = entrant_id

    def update_score(self, slot: int, score):
        self.scores[slot] = score

    def is_left_child(self, parent: Optional['BracketSet']) -> bool:
        return parent is not None and parent.children[0] == self.set_id

    def is_right_child(self, parent: Optional['BracketSet']) -> bool:
        return parent is not None and parent.children[1] == self.set_id

    def is_only_child(self, parent: Optional['BracketSet']) -> bool:
        if parent is None:
            return False
        return sum(1 for child in parent.children if child is not None) == 1

    def sibling_id(self, parent: Optional['BracketSet']) -> Optional[int]:
        if self.is_left_child(parent):
            return parent.children[1]
        if self.is_right_child(parent):
            return parent.children[0]
        return None

    def feed_count(self) -> int:
        return sum(1 for slot in (0, 1) if not self.slot_is_open(slot))

    def winner_slot(self) -> Optional[int]:
        """Slot of the winner from recorded results, falling back to scores once completed."""
        for slot in (0, 1):
            if self.results[slot] == SetResult.WIN:
                return slot
            if self.results[slot] in (SetResult.LOSE, SetResult.DISQUALIFIED):
                return 1 - slot
        if self.status == SetStatus.COMPLETED and self.scores[0] != self.scores[1]:
            return 0 if self.scores[0] > self.scores[1] else 1
        return None

    def __repr__(self):
        return (f"BracketSet(set_id={self.set_id}, side={self.side.value}, round={self.round}, "
                f"entrants={self.entrants}, children={self.children}, sources={self.sources})")
