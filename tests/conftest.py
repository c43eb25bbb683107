"""
Pytest configuration and fixtures for tournament hub tests.
"""
import os
import sys
import random
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from hub.app import create_app
from hub.models import Person
from hub.store import TournamentStore
from hub.sync import Channel, SyncHub


ADMIN_PASSWORD = 'test-secret'


class RecordingChannel(Channel):
    """Collects every emit instead of sending it."""

    def __init__(self):
        self.sent = []

    def emit(self, event, data, to):
        self.sent.append((to, event, data))

    def received(self, sid, event=None):
        return [d for (to, e, d) in self.sent if to == sid and (event is None or e == event)]

    def events_for(self, sid):
        return [e for (to, e, _) in self.sent if to == sid]

    def clear(self):
        self.sent = []


def make_people(count, referees=0, captains=0, selected=True, start_id=1):
    """People numbered from start_id; the first ones are referees/captains."""
    people = []
    for i in range(count):
        people.append(Person(
            id=start_id + i,
            name=f"Person {start_id + i}",
            is_ref=i < referees,
            is_captain=i < captains,
            is_selected=selected
        ))
    return people


@pytest.fixture
def people_factory():
    return make_people


@pytest.fixture
def recording_channel_cls():
    return RecordingChannel


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    return create_app('testing')


@pytest.fixture(scope='function')
def client(app):
    """Create HTTP test client."""
    return app.test_client()


@pytest.fixture
def socket_client(app):
    """Socket.IO test client connected to the app."""
    sc = app.socketio.test_client(app)
    yield sc
    if sc.is_connected():
        sc.disconnect()


@pytest.fixture
def admin_socket(app):
    """Socket.IO test client that has logged in as admin."""
    sc = app.socketio.test_client(app)
    sc.emit('loginAdmin', ADMIN_PASSWORD)
    sc.get_received()
    yield sc
    if sc.is_connected():
        sc.disconnect()


@pytest.fixture
def store():
    """Fresh store with a fixed random seed."""
    return TournamentStore(rng=random.Random(42))


@pytest.fixture
def seeded_store(store):
    """Store holding the 40 standard test people."""
    store.add_test_people()
    return store


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def hub(store, channel):
    """SyncHub over a recording channel, no redis."""
    return SyncHub(store, channel, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def mock_pubsub(mocker):
    """Stand-in for the redis publisher."""
    mock_instance = mocker.MagicMock()
    mock_instance.record = mocker.MagicMock(return_value=True)
    return mock_instance
