"""
Tournament bracket orchestration.

A Bracket registers entrants, builds and links the sets for its layout,
seats the entrants, assigns placements, and optionally rehydrates recorded
set data. It also exports itself back into interchange records.
"""
import logging
from typing import Dict, List, Optional

from .context import BuildContext
from .interchange import (
    INTERCHANGE_VERSION,
    apply_set_record,
    entrant_to_record,
    entrants_from_records,
    event_to_record,
    round_name,
    set_to_record,
)
from .losers import attach_grand_finals, build_losers_bracket
from .models import BracketSet, Entrant, Layout, Side
from .placement import assign_entrants
from .ranking import assign_placements, compute_standings
from .round_robin import build_round_robin
from .settings import validate_number_to_win
from .winners import build_winners_bracket

logger = logging.getLogger(__name__)


class Bracket:
    def __init__(self, entrants, layout=Layout.SINGLE_ELIMINATION, sets=None,
                 number_to_win=3, grand_finals_reset=True, name='Tournament', state='pending'):
        self.layout = Layout.parse(layout)
        self.name = name
        self.state = state
        self.context = BuildContext(
            entrants_from_records(entrants),
            self.layout,
            number_to_win=validate_number_to_win(number_to_win),
            grand_finals_reset=bool(grand_finals_reset),
        )
        self.root: Optional[BracketSet] = None
        self.winners_final: Optional[BracketSet] = None
        self.losers_final: Optional[BracketSet] = None
        self.grand_finals: Optional[BracketSet] = None
        self.bracket_reset: Optional[BracketSet] = None

        self._build()
        logger.info(f"Built {self.layout.value} bracket: {len(self.entrants)} entrants, {len(self.sets)} sets")

        if sets:
            self.import_sets(sets)

    @classmethod
    def from_tournament(cls, record: Dict, **kwargs) -> 'Bracket':
        """Rebuild a bracket from an exported tournament record."""
        event = record.get('event') or {}
        kwargs.setdefault('layout', event.get('tournamentStructure') or Layout.SINGLE_ELIMINATION)
        kwargs.setdefault('name', event.get('name') or 'Tournament')
        kwargs.setdefault('state', event.get('state') or 'pending')
        return cls(record.get('entrants') or [], sets=record.get('sets'), **kwargs)

    def _build(self):
        ctx = self.context
        if ctx.entrant_count < 2:
            self.root = build_winners_bracket(ctx)
            return

        if self.layout == Layout.ROUND_ROBIN:
            build_round_robin(ctx)
            assign_entrants(ctx)
            return

        self.winners_final = build_winners_bracket(ctx)
        self.root = self.winners_final
        if self.layout == Layout.DOUBLE_ELIMINATION and ctx.entrant_count > 2:
            self.losers_final = build_losers_bracket(ctx, self.winners_final)
            self.root = attach_grand_finals(ctx, self.winners_final, self.losers_final,
                                            reset=ctx.grand_finals_reset)
            self.grand_finals = ctx.get(self.losers_final.parent)
            if ctx.grand_finals_reset:
                self.bracket_reset = self.root

        assign_entrants(ctx)
        ctx.check_structure(self.root)
        assign_placements(ctx, self.root, self.losers_final)

    @property
    def entrants(self) -> List[Entrant]:
        return self.context.entrants

    @property
    def sets(self) -> List[BracketSet]:
        return list(self.context.sets.values())

    def get_set(self, set_id) -> Optional[BracketSet]:
        try:
            return self.context.get(int(set_id))
        except (TypeError, ValueError):
            return None

    def get_entrant(self, entrant_id) -> Optional[Entrant]:
        return self._entrants_by_id().get(str(entrant_id))

    def sets_by_round(self, round_number: int, side: Side = Side.WINNERS) -> List[BracketSet]:
        return self.context.sets_by_round(round_number, side)

    def total_rounds(self, side: Side = Side.WINNERS) -> int:
        return max((s.round for s in self.context.sets_on_side(side)), default=0)

    def _entrants_by_id(self) -> Dict[str, Entrant]:
        return {entrant.entrant_id: entrant for entrant in self.entrants}

    def import_sets(self, records):
        """
        Rehydrate sets from recorded set data, matched by set id. Records for
        unknown sets and references to unknown entrants are skipped.
        """
        entrants_by_id = self._entrants_by_id()
        sets_by_id = {str(s.set_id): s for s in self.sets}
        for record in records or []:
            if not isinstance(record, dict):
                continue
            bracket_set = sets_by_id.get(str(record.get('setID')))
            if bracket_set is None:
                logger.debug(f"No set matches recorded set {record.get('setID')!r}, skipped")
                continue
            apply_set_record(bracket_set, record, entrants_by_id)

    def standings(self) -> Dict[str, int]:
        """Assign and return final placements earned from recorded results."""
        return compute_standings(self.context)

    def export_sets(self) -> List[Dict]:
        winners_round_sizes = {}
        if self.winners_final is not None:
            winners_round_sizes = {r: len(self.sets_by_round(r)) for r in range(1, self.winners_final.round + 1)}
        total_losers_rounds = self.total_rounds(Side.LOSERS)
        return [
            set_to_record(s, self.layout, round_name(s, winners_round_sizes, total_losers_rounds, self.layout))
            for s in self.sets
        ]

    def export_entrants(self) -> List[Dict]:
        return [entrant_to_record(entrant) for entrant in self.entrants]

    def export(self) -> Dict:
        """Export the whole bracket as a tournament record."""
        return {
            'event': event_to_record(self.name, self.state, self.layout, len(self.entrants)),
            'sets': self.export_sets(),
            'entrants': self.export_entrants(),
            'version': INTERCHANGE_VERSION,
        }

    def __repr__(self):
        return f"Bracket(layout={self.layout.value}, entrants={len(self.entrants)}, sets={len(self.sets)})"
