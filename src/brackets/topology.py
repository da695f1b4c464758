"""
Round and set counts for a bracket of a given size.

Everything here is a pure function of the entrant count and layout, so it
can be used for speculative sizing before any bracket exists.
"""
from typing import List, Optional

from .models import Layout


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def highest_power_of_two_at_least(n: int) -> int:
    """Smallest power of two >= n. Values below 2 are returned unchanged."""
    if n < 2:
        return n
    power = 1
    while power < n:
        power *= 2
    return power


def calculate_byes(num_entrants: int) -> int:
    """Calculate number of byes needed to pad an elimination bracket."""
    if num_entrants < 2:
        return 0
    return highest_power_of_two_at_least(num_entrants) - num_entrants


def round_count(num_entrants: int, layout: Layout) -> int:
    """
    Number of rounds for a bracket.

    Elimination layouts need the smallest r with 2^r >= n. Round robin
    needs n - 1 rounds, or n when the count is odd (one bye per round).
    """
    if num_entrants < 2:
        return 0
    if layout == Layout.ROUND_ROBIN:
        return num_entrants if num_entrants % 2 else num_entrants - 1
    rounds = 0
    while 2 ** rounds < num_entrants:
        rounds += 1
    return rounds


def matches_in_round(round_number: int, num_entrants: int, layout: Layout,
                     previous_round_matches: Optional[int] = None) -> int:
    """
    Number of sets in a winners-side round.

    Round 1 holds the non-bye pairings, round 2 absorbs the byes together
    with the round 1 winners, and every later round halves the previous one.
    """
    if round_number < 1 or round_number > round_count(num_entrants, layout):
        return 0
    if layout == Layout.ROUND_ROBIN:
        return num_entrants // 2

    byes = calculate_byes(num_entrants)
    if round_number == 1:
        return (num_entrants - byes) // 2
    if previous_round_matches is None:
        previous_round_matches = matches_in_round(round_number - 1, num_entrants, layout)
    if round_number == 2:
        return (byes + previous_round_matches) // 2
    return previous_round_matches // 2


def round_sizes(num_entrants: int, layout: Layout) -> List[int]:
    """Set count for every winners-side round, in round order."""
    sizes = []
    previous = 0
    for round_number in range(1, round_count(num_entrants, layout) + 1):
        previous = matches_in_round(round_number, num_entrants, layout, previous)
        sizes.append(previous)
    return sizes


def losers_set_count(num_entrants: int) -> int:
    """Every winners-side loser but the losers finalist is knocked out once."""
    return max(num_entrants - 2, 0)


def total_set_count(num_entrants: int, layout: Layout, grand_finals_reset: bool = True) -> int:
    """Total sets a bracket of this size and layout builds."""
    winners = sum(round_sizes(num_entrants, layout))
    if layout != Layout.DOUBLE_ELIMINATION or num_entrants <= 2:
        return winners
    return winners + losers_set_count(num_entrants) + (2 if grand_finals_reset else 1)


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of entrants still in it."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def get_winners_round_name(teams_in_round: int) -> str:
    """Get the name for a winners bracket round."""
    if teams_in_round == 2:
        return "Winners Final"
    elif teams_in_round == 4:
        return "Winners Semifinal"
    elif teams_in_round == 8:
        return "Winners Quarterfinal"
    else:
        return f"Winners Round of {teams_in_round}"


def get_losers_round_name(round_number: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (1-indexed)."""
    rounds_from_end = total_losers_rounds - round_number
    if rounds_from_end == 0:
        return "Losers Final"
    elif rounds_from_end == 1:
        return "Losers Semifinal"
    else:
        return f"Losers Round {round_number}"
