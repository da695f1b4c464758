"""
Double elimination losers bracket construction.

In double elimination:
- Entrants must lose twice to be eliminated
- Winners Bracket: entrants that haven't lost yet
- Losers Bracket: entrants that have lost once
- Grand Final: winners bracket champion vs losers bracket champion
- Bracket Reset: if the losers bracket champion wins the Grand Final, a
  second set decides the champion

The losers bracket is laid out as if the entrant count were a power of two
and then collapsed. For a virtual size P with R winners rounds:
- L Round 1: losers of neighbouring winners round 1 sets pair off
- Major round for winners round k >= 2: each winners round k loser meets a
  losers bracket survivor
- Minor round after every major round but the last: survivors pair off

Winners round 1 pairings that are byes have no set and no loser. Whenever
a pairing ends up with only one real feed, that feed is carried forward
unplayed into the next round (the running surplus); a pairing with no
feed at all disappears. Rounds in which nothing is played get no number.
"""
import logging
from typing import List, Optional

from .context import BuildContext
from .models import BracketSet, Side
from .seeding import seed_pairs

logger = logging.getLogger(__name__)


def build_losers_bracket(ctx: BuildContext, winners_final: BracketSet) -> BracketSet:
    """
    Create the losers bracket, link every winners-side set's loser into it,
    and return the losers final.
    """
    assert ctx.entrant_count > 2, "a losers bracket needs at least 3 entrants"
    total_winners_rounds = winners_final.round

    round_one = iter(ctx.sets_by_round(1))
    wave = [next(round_one) if low is not None else None for _, low in seed_pairs(ctx.entrant_count)]

    builder = _LosersRoundBuilder(ctx)
    feeds = builder.merge(list(zip(wave[0::2], wave[1::2])))

    for winners_round in range(2, total_winners_rounds + 1):
        drops = drop_order(ctx.sets_by_round(winners_round), winners_round)
        assert len(drops) == len(feeds), (
            f"{len(drops)} drops from winners round {winners_round} for {len(feeds)} losers slots")
        feeds = builder.merge(list(zip(drops, feeds)))

        if winners_round < total_winners_rounds:
            feeds = builder.merge(list(zip(feeds[0::2], feeds[1::2])))

    assert len(feeds) == 1 and feeds[0] is not None
    losers_final = feeds[0]
    assert losers_final.side == Side.LOSERS, "losers bracket collapsed to an unplayed drop"
    return losers_final


def drop_order(winners_round_sets: List[BracketSet], winners_round: int) -> List[BracketSet]:
    """
    Order in which a winners round's losers enter the losers bracket.

    Even rounds drop in reverse; odd rounds swap halves. Either way a loser
    never lands next to the entrants coming out of its own subtree.
    """
    if winners_round % 2 == 0:
        return list(reversed(winners_round_sets))
    half = len(winners_round_sets) // 2
    return winners_round_sets[half:] + winners_round_sets[:half]


class _LosersRoundBuilder:
    """Plays pairings of feeds into numbered losers rounds."""

    def __init__(self, ctx: BuildContext):
        self.ctx = ctx
        self.round_number = 0

    def merge(self, pairings) -> List[Optional[BracketSet]]:
        """
        Turn each ``(feed, feed)`` pairing into a losers set, or carry the
        lone feed forward. A feed is a winners-side set (its loser drops in)
        or a losers set (its winner advances).
        """
        next_round = self.round_number + 1
        feeds = []
        created = 0
        for first, second in pairings:
            if first is None or second is None:
                feeds.append(first if first is not None else second)
                continue
            bracket_set = self.ctx.new_set(next_round, Side.LOSERS)
            _attach(bracket_set, 0, first)
            _attach(bracket_set, 1, second)
            feeds.append(bracket_set)
            created += 1
        if created:
            self.round_number = next_round
        else:
            logger.debug(f"Losers round {next_round} collapsed, every feed carried forward")
        return feeds


def _attach(target: BracketSet, slot: int, feed: BracketSet):
    if feed.side == Side.WINNERS:
        feed.link_drop(target, slot)
    else:
        target.add_child(feed, slot)


def attach_grand_finals(ctx: BuildContext, winners_final: BracketSet, losers_final: BracketSet,
                        reset: bool = True) -> BracketSet:
    """
    Join both finalists in a grand final. With ``reset`` the grand final's
    loser gets a second set against its winner. Returns the new root.
    """
    grand_finals = ctx.new_set(winners_final.round + 1)
    grand_finals.add_child(winners_final, 0)
    grand_finals.add_child(losers_final, 1)
    if not reset:
        return grand_finals

    bracket_reset = ctx.new_set(winners_final.round + 2)
    bracket_reset.add_child(grand_finals, 0)
    grand_finals.link_drop(bracket_reset, 1)
    return bracket_reset
