"""
Flask web application exposing bracket generation as a JSON API.
"""
from flask import Flask, request, jsonify
from brackets.event import Bracket
from brackets.models import Layout
from brackets.settings import load_settings
from brackets.topology import calculate_byes, round_count, round_sizes, total_set_count

app = Flask(__name__)

MAX_ENTRANTS = 1024


def _bracket_from_request() -> Bracket:
    """Build a bracket from the JSON body, falling back to configured settings."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError('Request body must be a JSON object.')
    entrants = payload.get('entrants')
    if not isinstance(entrants, list):
        raise ValueError('A list of entrants is required.')
    if len(entrants) > MAX_ENTRANTS:
        raise ValueError(f'At most {MAX_ENTRANTS} entrants are supported.')

    settings = load_settings()
    return Bracket(
        entrants,
        layout=payload.get('layout') or settings['layout'],
        sets=payload.get('sets'),
        number_to_win=payload.get('numberToWin', settings['number_to_win']),
        grand_finals_reset=payload.get('grandFinalsReset', settings['grand_finals_reset']),
        name=payload.get('name') or settings['event_name'],
        state=payload.get('state') or settings['state'],
    )


@app.route('/api/bracket', methods=['POST'])
def api_bracket():
    """Build a bracket, rehydrate any recorded sets, and return it as a tournament record."""
    try:
        bracket = _bracket_from_request()
    except ValueError as e:
        app.logger.warning(f'Rejected bracket request: {e}')
        return jsonify({'success': False, 'error': str(e)}), 400
    return jsonify(bracket.export())


@app.route('/api/bracket/standings', methods=['POST'])
def api_bracket_standings():
    """Return final placements earned from the recorded sets."""
    try:
        bracket = _bracket_from_request()
    except ValueError as e:
        app.logger.warning(f'Rejected standings request: {e}')
        return jsonify({'success': False, 'error': str(e)}), 400

    placements = bracket.standings()
    standings = [
        {
            'entrantID': entrant.entrant_id,
            'entrantTag': entrant.tag,
            'finalPlacement': placements[entrant.entrant_id],
        }
        for entrant in bracket.entrants if entrant.entrant_id in placements
    ]
    standings.sort(key=lambda row: (row['finalPlacement'], row['entrantID']))
    return jsonify({'success': True, 'standings': standings})


@app.route('/api/topology', methods=['GET'])
def api_topology():
    """Speculative sizing for a bracket that does not exist yet."""
    try:
        num_entrants = int(request.args.get('entrants', ''))
        layout = Layout.parse(request.args.get('layout') or load_settings()['layout'])
    except ValueError as e:
        return jsonify({'success': False, 'error': f'Invalid topology request: {e}'}), 400
    if num_entrants < 0 or num_entrants > MAX_ENTRANTS:
        return jsonify({'success': False, 'error': f'Entrant count must be between 0 and {MAX_ENTRANTS}.'}), 400

    reset = request.args.get('reset', 'true').lower() not in ('0', 'false', 'no')
    return jsonify({
        'success': True,
        'layout': layout.value,
        'entrants': num_entrants,
        'rounds': round_count(num_entrants, layout),
        'setsPerRound': round_sizes(num_entrants, layout),
        'byes': calculate_byes(num_entrants) if layout.is_elimination else num_entrants % 2,
        'totalSets': total_set_count(num_entrants, layout, grand_finals_reset=reset),
    })


if __name__ == '__main__':
    app.run(debug=True, port=5000)
