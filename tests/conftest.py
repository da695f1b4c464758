"""
Shared pytest fixtures for bracket tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the entrant-count sweeps
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.dirname(__file__))

from brackets.models import Entrant


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Create a test client that reads settings from an empty temp location."""
    monkeypatch.setenv('BRACKET_SETTINGS_FILE', str(tmp_path / 'settings.yaml'))
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def make_entrants():
    """Factory for entrants with ids '1'..'n', tags 'P1'..'Pn' and seeds in input order."""
    def _make(count):
        return [Entrant(str(i), f"P{i}", i) for i in range(1, count + 1)]
    return _make


@pytest.fixture
def sample_records():
    """Entrant records in interchange shape."""
    return [
        {'entrantID': 'A', 'entrantTag': 'Alpha', 'initialSeed': 1},
        {'entrantID': 'B', 'entrantTag': 'Bravo', 'initialSeed': 2},
    ]
