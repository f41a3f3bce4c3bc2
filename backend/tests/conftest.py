import os
import sys
import pytest

# Ensure the backend root (containing the `songguess` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from songguess import create_app, socketio


class TestConfig(Config):
    __test__ = False
    TESTING = True
    SECRET_KEY = 'test-secret'
    SONG_CATALOG_FILE = None
    HINT_DURATIONS = [0, 1, 2, 4, 8]
    HINT_POINTS = [0, 100, 75, 50, 20]
    ROUND_START_HINT_LEVEL = 1
    LEADERBOARD_SIZE = 10
    SOCKETIO_NAMESPACE = '/'


@pytest.fixture()
def flask_app(tmp_path):
    config_class = type('TmpConfig', (TestConfig,), {
        'LEADERBOARD_FILE': str(tmp_path / 'top10.json'),
        'SONGS_DIR': str(tmp_path / 'songs'),
    })
    application = create_app(config_class)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def engine(flask_app):
    return flask_app.extensions['songguess']


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def sio_client(make_sio_client):
    return make_sio_client()
