"""
Conversion between bracket objects and interchange records.

Records are plain dicts using the interchange field names (``entrantID``,
``setID``, ``entrant1Score``...). Import is best effort: any field that
cannot be resolved is skipped and logged, never raised.
"""
import logging
import re
from typing import Dict, List, Optional

from .models import BracketSet, Entrant, Layout, SetResult, SetStatus, Side
from .topology import get_losers_round_name, get_round_name, get_winners_round_name

logger = logging.getLogger(__name__)

INTERCHANGE_VERSION = '1.0'
EMPTY_ID = 'null'

GAME_FIELDS = ('gameNumber', 'entrant1Characters', 'entrant2Characters', 'stage',
               'entrant1Result', 'entrant2Result')


def is_empty_id(value) -> bool:
    return value is None or str(value).strip() in ('', EMPTY_ID, 'None', 'undefined')


def entrant_from_record(record, index: int) -> Optional[Entrant]:
    """Build an entrant from a record; seed 0 or absent means input position."""
    if isinstance(record, Entrant):
        return Entrant(record.entrant_id, record.tag, record.seed or index + 1, record.final_placement,
                       record.personal_information, record.other)
    if isinstance(record, str):
        return Entrant(entrant_id=str(index + 1), tag=record, seed=index + 1)
    if not isinstance(record, dict) or is_empty_id(record.get('entrantID')):
        logger.warning(f"Skipping entrant record #{index + 1} without an entrantID")
        return None
    people = record.get('personalInformation')
    other = record.get('other')
    return Entrant(
        entrant_id=record['entrantID'],
        tag=record.get('entrantTag', ''),
        seed=_as_int(record.get('initialSeed')) or index + 1,
        final_placement=record.get('finalPlacement'),
        personal_information=[p for p in people if isinstance(p, dict)] if isinstance(people, list) else None,
        other=other if isinstance(other, dict) else None,
    )


def entrants_from_records(records) -> List[Entrant]:
    if not isinstance(records, (list, tuple)):
        raise ValueError("Entrants must be a list of entrant records")
    entrants = []
    seen = set()
    for index, record in enumerate(records):
        entrant = entrant_from_record(record, index)
        if entrant is None:
            continue
        if entrant.entrant_id in seen:
            logger.warning(f"Skipping duplicate entrant {entrant.entrant_id}")
            continue
        seen.add(entrant.entrant_id)
        entrants.append(entrant)
    return entrants


def entrant_to_record(entrant: Entrant) -> Dict:
    record = {
        'entrantID': entrant.entrant_id,
        'entrantTag': entrant.tag,
        'initialSeed': entrant.seed,
        'personalInformation': [dict(person) for person in entrant.personal_information],
    }
    if entrant.final_placement:
        record['finalPlacement'] = entrant.final_placement
    if entrant.other:
        record['other'] = dict(entrant.other)
    return record


def format_set_format(number_to_win: int) -> str:
    return f"Best of {2 * number_to_win - 1}"


def parse_set_format(value) -> Optional[int]:
    """Number of wins needed for a 'Best of N' style descriptor, if one is present."""
    match = re.search(r'(\d+)', str(value or ''))
    if not match:
        return None
    best_of = int(match.group(1))
    if best_of < 1:
        return None
    return best_of // 2 + 1


def round_name(bracket_set: BracketSet, winners_round_sizes: Dict[int, int],
               total_losers_rounds: int, layout: Layout) -> str:
    if layout == Layout.ROUND_ROBIN:
        return f"Round {bracket_set.round}"
    if bracket_set.side == Side.LOSERS:
        return get_losers_round_name(bracket_set.round, total_losers_rounds)
    if bracket_set.round not in winners_round_sizes:
        return "Bracket Reset" if bracket_set.sources[1] is not None else "Grand Final"
    teams_in_round = 2 ** (len(winners_round_sizes) - bracket_set.round + 1)
    if layout == Layout.DOUBLE_ELIMINATION and total_losers_rounds:
        return get_winners_round_name(teams_in_round)
    return get_round_name(teams_in_round)


def set_to_record(bracket_set: BracketSet, layout: Layout, name: str = '') -> Dict:
    """
    Export one set. Round and advancement fields always come from the live
    links, never from whatever was imported.
    """
    def ref(set_id):
        return EMPTY_ID if set_id is None else str(set_id)

    record = {
        'setID': str(bracket_set.set_id),
        'status': bracket_set.status.value,
        'phaseID': '',
        'roundID': str(bracket_set.round if bracket_set.side == Side.WINNERS else -bracket_set.round),
        'setFormat': format_set_format(bracket_set.number_to_win),
        'entrant1ID': bracket_set.entrants[0] or EMPTY_ID,
        'entrant2ID': bracket_set.entrants[1] or EMPTY_ID,
        'entrant1Score': bracket_set.scores[0],
        'entrant2Score': bracket_set.scores[1],
        'entrant1NextSetID': ref(bracket_set.parent),
        'entrant2NextSetID': ref(bracket_set.parent),
        'entrant1PrevSetID': ref(_previous(bracket_set, 0)),
        'entrant2PrevSetID': ref(_previous(bracket_set, 1)),
        'games': [dict(game) for game in bracket_set.games],
        'other': {
            'matchLimit': bracket_set.number_to_win,
            'nextWinnerSet': ref(bracket_set.parent),
            'nextLoserSet': ref(bracket_set.drop),
            'leftSet': ref(bracket_set.children[0]),
            'rightSet': ref(bracket_set.children[1]),
            'placement': bracket_set.placement,
            'side': bracket_set.side.value,
            'roundName': name,
            'label': str(bracket_set.set_id),
        },
    }
    for slot in (0, 1):
        if bracket_set.results[slot] is not None:
            record[f'entrant{slot + 1}Result'] = bracket_set.results[slot].value
    return record


def _previous(bracket_set: BracketSet, slot: int) -> Optional[int]:
    if bracket_set.children[slot] is not None:
        return bracket_set.children[slot]
    return bracket_set.sources[slot]


def apply_set_record(bracket_set: BracketSet, record: Dict, entrants_by_id: Dict[str, Entrant]):
    """
    Rehydrate a set from a recorded set. Entrants that are not registered
    are skipped together with their score.
    """
    status = _parse_enum(SetStatus, record.get('status'), 'status', bracket_set)
    if status is not None:
        bracket_set.status = status

    for slot in (0, 1):
        field = f'entrant{slot + 1}'
        result = _parse_enum(SetResult, record.get(f'{field}Result'), f'{field}Result', bracket_set)
        if result is not None:
            bracket_set.results[slot] = result
        entrant_id = record.get(f'{field}ID')
        if is_empty_id(entrant_id):
            continue
        entrant = entrants_by_id.get(str(entrant_id))
        if entrant is None:
            logger.debug(f"Set {bracket_set.set_id}: unknown entrant {entrant_id}, slot {slot + 1} skipped")
            continue
        bracket_set.entrants[slot] = entrant.entrant_id
        score = _as_int(record.get(f'{field}Score'))
        if score is not None:
            bracket_set.update_score(slot, score)

    number_to_win = parse_set_format(record.get('setFormat'))
    if number_to_win:
        bracket_set.number_to_win = number_to_win

    games = record.get('games')
    if isinstance(games, list):
        bracket_set.games = [game_from_record(game) for game in games if isinstance(game, dict)]


def game_from_record(record: Dict) -> Dict:
    game = {key: record[key] for key in GAME_FIELDS if record.get(key) is not None}
    for key in ('entrant1Characters', 'entrant2Characters'):
        game[key] = list(game.get(key) or [])
    game.setdefault('stage', '')
    return game


def event_to_record(name: str, state: str, layout: Layout, num_entrants: int) -> Dict:
    return {
        'name': name,
        'state': state,
        'date': '',
        'gameName': '',
        'tournamentStructure': layout.value,
        'ruleset': '',
        'originURL': '',
        'numberEntrants': num_entrants,
    }


def _parse_enum(enum_cls, value, field: str, bracket_set: BracketSet):
    if value is None or value == '':
        return None
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        logger.debug(f"Set {bracket_set.set_id}: ignoring {field} {value!r}")
        return None


def _as_int(value) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
