import argparse
import logging
import os
import sys

import yaml

from brackets.event import Bracket
from brackets.interchange import is_empty_id
from brackets.models import Layout, Side
from brackets.settings import load_settings

logger = logging.getLogger(__name__)


def load_entrants(file_path):
    """Load entrants from a YAML list of tags or entrant records."""
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get('entrants', [])
    if not isinstance(data, list):
        raise ValueError(f"{file_path} must contain a list of entrants")
    return data


def load_sets(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if isinstance(data, dict):
        data = data.get('sets', [])
    return data or []


def describe_slot(bracket, bracket_set, slot):
    """Tag of the seated entrant, or where the slot will be filled from."""
    entrant_id = bracket_set.entrants[slot]
    if not is_empty_id(entrant_id):
        entrant = bracket.get_entrant(entrant_id)
        return entrant.tag or entrant.entrant_id
    if bracket_set.children[slot] is not None:
        return f"Winner of {bracket_set.children[slot]}"
    if bracket_set.sources[slot] is not None:
        return f"Loser of {bracket_set.sources[slot]}"
    return "TBD"


def format_bracket(bracket):
    """Render the bracket round by round as printable lines."""
    lines = []
    sides = [Side.WINNERS]
    if bracket.layout == Layout.DOUBLE_ELIMINATION:
        sides.append(Side.LOSERS)

    for side in sides:
        for round_number in range(1, bracket.total_rounds(side) + 1):
            round_sets = bracket.sets_by_round(round_number, side)
            if not round_sets:
                continue
            if lines:
                lines.append('')
            if bracket.layout == Layout.ROUND_ROBIN:
                lines.append(f"# Round {round_number}")
            else:
                lines.append(f"# {side.value.capitalize()} Round {round_number}")
            for bracket_set in round_sets:
                first = describe_slot(bracket, bracket_set, 0)
                second = describe_slot(bracket, bracket_set, 1)
                lines.append(f"{bracket_set.set_id}: {first} vs {second}")
    return lines


def main(argv=None):
    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    parser = argparse.ArgumentParser(description='Generate a tournament bracket from a list of entrants.')
    parser.add_argument('entrants', nargs='?', default=os.path.join(base_dir, 'data', 'entrants.yaml'),
                        help='YAML file with a list of entrant tags or entrant records')
    parser.add_argument('--layout', help='single-elim, double-elim or round-robin')
    parser.add_argument('--sets', help='YAML file with recorded set records to import')
    parser.add_argument('--settings', help='YAML settings file')
    parser.add_argument('--output', help='Write the tournament record to this YAML file')
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'WARNING'))
    settings = load_settings(args.settings)

    try:
        entrants = load_entrants(args.entrants)
        sets = load_sets(args.sets) if args.sets else None
        bracket = Bracket(
            entrants,
            layout=args.layout or settings['layout'],
            sets=sets,
            number_to_win=settings['number_to_win'],
            grand_finals_reset=settings['grand_finals_reset'],
            name=settings['event_name'],
            state=settings['state'],
        )
    except (OSError, yaml.YAMLError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not bracket.sets:
        print(f"Warning: {len(bracket.entrants)} entrant(s) is not enough for a bracket.", file=sys.stderr)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            yaml.safe_dump(bracket.export(), f, default_flow_style=False, sort_keys=False)
        logger.info(f"Wrote {len(bracket.sets)} sets to {args.output}")
        return 0

    for line in format_bracket(bracket):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
