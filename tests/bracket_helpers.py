"""
Helpers for playing a bracket out with a chosen winner policy.
"""
import random

from brackets.models import SetStatus


class PlayedSet:
    def __init__(self, set_id, winner, loser):
        self.set_id = set_id
        self.winner = winner
        self.loser = loser

    def __repr__(self):
        return f"PlayedSet(set_id={self.set_id}, winner={self.winner}, loser={self.loser})"


def play_out(bracket, pick_winner):
    """
    Play every set in id order, recording results on the sets.

    ``pick_winner(bracket, bracket_set, first_id, second_id)`` returns the id
    of the winner. The bracket reset is skipped when grand finals is won by
    the winners side. Returns the played sets by id and, per entrant, the
    list of ``(set_id, opponent_id)`` in the order they were played.
    """
    played = {}
    history = {entrant.entrant_id: [] for entrant in bracket.entrants}

    for bracket_set in sorted(bracket.sets, key=lambda s: s.set_id):
        if bracket_set is bracket.bracket_reset:
            grand_finals = played[bracket.grand_finals.set_id]
            if grand_finals.winner == bracket.grand_finals.entrants[0]:
                continue

        for slot in (0, 1):
            if bracket_set.children[slot] is not None:
                bracket_set.entrants[slot] = played[bracket_set.children[slot]].winner
            elif bracket_set.sources[slot] is not None:
                bracket_set.entrants[slot] = played[bracket_set.sources[slot]].loser

        first, second = bracket_set.entrants
        assert first is not None and second is not None, f"set {bracket_set.set_id} has an empty slot"
        winner = pick_winner(bracket, bracket_set, first, second)
        loser = second if winner == first else first

        winning_slot = bracket_set.entrants.index(winner)
        bracket_set.update_score(winning_slot, bracket_set.number_to_win)
        bracket_set.update_score(1 - winning_slot, 0)
        bracket_set.status = SetStatus.COMPLETED

        played[bracket_set.set_id] = PlayedSet(bracket_set.set_id, winner, loser)
        history[first].append((bracket_set.set_id, second))
        history[second].append((bracket_set.set_id, first))

    return played, history


def _seed(bracket, entrant_id):
    return bracket.get_entrant(entrant_id).seed


def chalk(bracket, bracket_set, first, second):
    """Better seed always wins."""
    return first if _seed(bracket, first) < _seed(bracket, second) else second


def upsets(bracket, bracket_set, first, second):
    """Worse seed always wins."""
    return first if _seed(bracket, first) > _seed(bracket, second) else second


def challenger_wins(bracket, bracket_set, first, second):
    """Better seed wins, except in grand finals and the reset where the second slot wins."""
    if bracket_set is bracket.grand_finals or bracket_set is bracket.bracket_reset:
        return second
    return chalk(bracket, bracket_set, first, second)


def coin_flips(seed):
    rng = random.Random(seed)

    def pick(bracket, bracket_set, first, second):
        return rng.choice((first, second))
    return pick


def losses(played):
    counts = {}
    for result in played.values():
        counts[result.loser] = counts.get(result.loser, 0) + 1
    return counts
