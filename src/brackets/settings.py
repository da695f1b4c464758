"""
Bracket settings loaded from YAML.
"""
import logging
import os

import yaml

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DEFAULT_SETTINGS_FILE = os.path.join(BASE_DIR, 'data', 'settings.yaml')


def get_default_settings():
    """Return default settings."""
    return {
        'layout': 'single-elim',
        'number_to_win': 3,
        'grand_finals_reset': True,
        'event_name': 'Tournament',
        'state': 'pending',
    }


def settings_path(file_path=None):
    return file_path or os.environ.get('BRACKET_SETTINGS_FILE', DEFAULT_SETTINGS_FILE)


def load_settings(file_path=None):
    """Load settings from YAML file, merging with defaults."""
    defaults = get_default_settings()
    path = settings_path(file_path)
    if not os.path.exists(path):
        return defaults
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f'Failed to parse {path}: {e}')
        return defaults
    if not isinstance(data, dict):
        if data:
            logger.warning(f'Ignoring {path}: expected a mapping of settings')
        return defaults
    # Merge with defaults to ensure all keys exist
    for key, value in defaults.items():
        if key not in data:
            data[key] = value
    return data


def validate_number_to_win(value) -> int:
    try:
        number_to_win = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"number_to_win must be a positive integer, got {value!r}")
    if number_to_win < 1 or isinstance(value, bool):
        raise ValueError(f"number_to_win must be a positive integer, got {value!r}")
    return number_to_win
