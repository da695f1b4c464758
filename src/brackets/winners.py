"""
Single elimination tree construction (also the winners side of double elimination).
"""
from .context import BuildContext
from .models import BracketSet
from .seeding import seed_pairs
from .topology import is_power_of_two, matches_in_round, round_count


def build_winners_bracket(ctx: BuildContext) -> BracketSet:
    """
    Create every winners-side round and link each set to the set its winner
    advances to. Returns the final.

    With fewer than two entrants no sets are created and a placeholder set
    (id 0, round 0) outside the arena is returned instead.
    """
    num_entrants = ctx.entrant_count
    if num_entrants < 2:
        return BracketSet(0, 0)

    total_rounds = round_count(num_entrants, ctx.layout)
    pairs = seed_pairs(num_entrants)
    previous_round = []

    for round_number in range(1, total_rounds + 1):
        num_sets = matches_in_round(round_number, num_entrants, ctx.layout, len(previous_round))
        current_round = [ctx.new_set(round_number) for _ in range(num_sets)]

        if round_number == 2 and not is_power_of_two(num_entrants):
            _link_round_two(current_round, previous_round, pairs)
        elif previous_round:
            for index, bracket_set in enumerate(current_round):
                bracket_set.add_child(previous_round[index * 2], 0)
                bracket_set.add_child(previous_round[index * 2 + 1], 1)

        previous_round = current_round

    assert len(previous_round) == 1, f"{len(previous_round)} sets in the winners final round"
    return previous_round[0]


def _link_round_two(round_two, round_one, pairs):
    # Each round 2 set covers two round 1 pairings; a bye pairing has no set,
    # its slot is seated directly with the bye entrant later on.
    assert len(pairs) == len(round_two) * 2
    round_one = iter(round_one)
    for index, bracket_set in enumerate(round_two):
        for slot in (0, 1):
            _, low = pairs[index * 2 + slot]
            if low is not None:
                bracket_set.add_child(next(round_one), slot)
