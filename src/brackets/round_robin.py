"""
Round robin scheduling with the circle method.
"""
from .context import BuildContext
from .topology import matches_in_round, round_count


def build_round_robin(ctx: BuildContext):
    """Create every round's sets; round robin sets carry no links."""
    num_entrants = ctx.entrant_count
    for round_number in range(1, round_count(num_entrants, ctx.layout) + 1):
        for _ in range(matches_in_round(round_number, num_entrants, ctx.layout)):
            ctx.new_set(round_number)


def seat_round_robin(ctx: BuildContext):
    """
    Seat entrants round by round.

    The top seed stays fixed while everyone else rotates one position per
    round; position i plays position (count - 1 - i). An odd field gets a
    placeholder so that whoever faces it sits the round out.
    """
    rotation = list(ctx.ranked)
    if len(rotation) % 2:
        rotation.append(None)

    for round_number in range(1, round_count(ctx.entrant_count, ctx.layout) + 1):
        round_sets = iter(ctx.sets_by_round(round_number))
        for index in range(len(rotation) // 2):
            first, second = rotation[index], rotation[-1 - index]
            if first is None or second is None:
                continue
            bracket_set = next(round_sets)
            bracket_set.seat_entrant(0, first.entrant_id)
            bracket_set.seat_entrant(1, second.entrant_id)
        rotation.insert(1, rotation.pop())
