"""
Seed projection for elimination brackets.
"""
from typing import List, Optional, Tuple

from .models import Entrant
from .topology import highest_power_of_two_at_least


def generate_bracket_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    This ensures that if all higher seeds win, they meet in the proper rounds.

    For 8 entrants: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    Winners: 1v4 side, 2v3 side
    Final: 1v2 (if chalk)
    """
    if bracket_size < 2:
        return [1] if bracket_size == 1 else []
    if bracket_size == 2:
        return [1, 2]

    half_size = bracket_size // 2
    upper_half = generate_bracket_order(half_size)

    # Pair each upper seed with its complement
    result = []
    for seed in upper_half:
        result.extend([seed, bracket_size + 1 - seed])

    return result


def generate_projections(total_rounds: int) -> List[List[int]]:
    """
    Seed order for every round, indexed by round number.

    Index ``total_rounds`` is the final (``[1, 2]``); each earlier round
    expands seed ``s`` into ``(s, size + 1 - s)``. Index 0 is unused.
    """
    if total_rounds < 1:
        return [[]]
    seeds_by_round: List[List[int]] = [[] for _ in range(total_rounds + 1)]
    seeds_by_round[total_rounds] = [1, 2]

    for current_round in range(total_rounds, 1, -1):
        current = seeds_by_round[current_round]
        previous_size = len(current) * 2
        previous = []
        for seed in current:
            previous.extend([seed, previous_size + 1 - seed])
        seeds_by_round[current_round - 1] = previous

    return seeds_by_round


def seed_pairs(num_entrants: int) -> List[Tuple[int, Optional[int]]]:
    """
    Round 1 seed pairings for ``num_entrants``, including ghost pairings.

    Seeds beyond the entrant count are byes and come back as ``None``;
    the real seed is always first in a bye pairing.
    """
    if num_entrants < 2:
        return []
    order = generate_bracket_order(highest_power_of_two_at_least(num_entrants))
    pairs = []
    for i in range(0, len(order), 2):
        high, low = order[i], order[i + 1]
        pairs.append((high, low if low <= num_entrants else None))
    return pairs


def rank_entrants(entrants: List[Entrant]) -> List[Entrant]:
    """
    Order entrants by seed; ties and gaps fall back to input order.

    The position in the result is the effective seed used for pairing.
    """
    indexed = list(enumerate(entrants))
    indexed.sort(key=lambda item: (item[1].seed if item[1].seed > 0 else float('inf'), item[0]))
    return [entrant for _, entrant in indexed]
