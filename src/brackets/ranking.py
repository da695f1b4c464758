"""
Final placements for sets and entrants.
"""
from typing import Dict, List, Optional

from .context import BuildContext
from .models import BracketSet, Layout


def assign_placements(ctx: BuildContext, root: Optional[BracketSet],
                      losers_final: Optional[BracketSet] = None):
    """
    Give every set the placement its loser finishes at.

    The root's loser is second. Below that the tree is walked level by
    level: every set at the same depth shares one placement, which is one
    past the number of entrants that finish ahead of that level. In double
    elimination the depth is measured in the losers bracket, and winners
    sets (whose losers drop rather than leave) keep placement 0.
    """
    if root is None or not ctx.sets or ctx.layout == Layout.ROUND_ROBIN:
        return

    if losers_final is None:
        _assign_by_depth(ctx, [root], first_placement=2)
        return

    # Grand finals and the reset both decide second place.
    grand_finals = ctx.get(losers_final.parent)
    grand_finals.placement = 2
    root.placement = 2
    _assign_by_depth(ctx, [losers_final], first_placement=3)


def _assign_by_depth(ctx: BuildContext, level: List[BracketSet], first_placement: int):
    placement = first_placement
    while level:
        for bracket_set in level:
            bracket_set.placement = placement
        placement += len(level)
        level = [child for bracket_set in level for child in ctx.children_of(bracket_set)]


def compute_standings(ctx: BuildContext) -> Dict[str, int]:
    """
    Final placements earned so far, keyed by entrant id.

    The loser of a completed set whose loser is out of the event takes the
    set's placement; the winner of the deciding set is first. A grand final
    won from the winners side needs no reset and decides the event.
    """
    standings = {}
    for bracket_set in ctx.sets.values():
        if bracket_set.placement == 0:
            continue
        winner = bracket_set.winner_slot()
        if winner is None:
            continue
        if bracket_set.drop is not None and winner != 0:
            # Challenger took grand finals, the reset decides.
            continue
        loser_id = bracket_set.entrants[1 - winner]
        winner_id = bracket_set.entrants[winner]
        if loser_id is not None:
            standings[loser_id] = bracket_set.placement
        if winner_id is not None and (bracket_set.parent is None or bracket_set.drop is not None):
            standings[winner_id] = 1

    for entrant in ctx.entrants:
        if entrant.entrant_id in standings:
            entrant.final_placement = standings[entrant.entrant_id]
    return standings
