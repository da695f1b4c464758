"""
Seating entrants into the first sets they play.
"""
from .context import BuildContext
from .round_robin import seat_round_robin
from .seeding import seed_pairs


def assign_entrants(ctx: BuildContext):
    if ctx.entrant_count < 2:
        return
    if ctx.layout.is_elimination:
        seat_elimination(ctx)
    else:
        seat_round_robin(ctx)


def seat_elimination(ctx: BuildContext):
    """
    Seat round 1 by seed projection.

    A pairing whose second seed is beyond the entrant count is a bye: the
    lone entrant goes straight to the round 2 slot that the ghost set
    would have fed.
    """
    by_seed = {seed: entrant for seed, entrant in enumerate(ctx.ranked, start=1)}
    round_one = iter(ctx.sets_by_round(1))
    byes = []

    for index, (high, low) in enumerate(seed_pairs(ctx.entrant_count)):
        if low is None:
            byes.append((index, by_seed[high]))
            continue
        bracket_set = next(round_one)
        bracket_set.seat_entrant(0, by_seed[high].entrant_id)
        bracket_set.seat_entrant(1, by_seed[low].entrant_id)

    if not byes:
        return
    round_two = ctx.sets_by_round(2)
    for index, entrant in byes:
        round_two[index // 2].seat_entrant(index % 2, entrant.entrant_id)
