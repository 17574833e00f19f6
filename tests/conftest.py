"""Pytest fixtures and configuration."""
import pytest

from engines.scoring import default_weights


@pytest.fixture
def weights():
    """Default weights {3, 2, 2, 1}."""
    return default_weights()


@pytest.fixture
def raw_a():
    return {'name': 'A', 'uvTri': 5, 'tcEd': 5, 'rrOe': 5, 'crSla': 5, 'jobSize': 5}


@pytest.fixture
def raw_b():
    return {'name': 'B', 'uvTri': 10, 'tcEd': 10, 'rrOe': 10, 'crSla': 10, 'jobSize': 1}


@pytest.fixture
def client():
    """Flask test client over a freshly reset in-memory state."""
    import app as server
    server._reset_state()
    server.app.config['TESTING'] = True
    with server.app.test_client() as c:
        yield c
    server._reset_state()
