import os
import sys
import random
import pytest

# Ensure the backend root (containing the `wordchain` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordchain import create_app, db, socketio
from wordchain.services.games import MemStorage, current_storage


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STORAGE_BACKEND = 'memory'
    ROUND_DURATION_SEC = 5
    TOTAL_ROUNDS = 5
    MAX_PLAYERS = 4
    GAME_CODE_LENGTH = 6
    BOT_WINDOW_MIN_SEC = 1
    BOT_WINDOW_MAX_SEC = 3
    BOT_ACCURACY = 0.7


class SqlTestConfig(TestConfig):
    STORAGE_BACKEND = 'sql'


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class PinnedRandom(random.Random):
    """Seeded Random whose ``random()`` returns a fixed value.

    ``choice``/``choices`` keep drawing from the seeded generator so game
    codes stay distinct.
    """

    def __init__(self, value=0.0, seed=1234):
        self.value = value
        super().__init__(seed)

    def random(self):
        return self.value

    # Defining getrandbits keeps choice() on the bit generator; with only
    # random() overridden, Random routes _randbelow through random()
    def getrandbits(self, k):
        return super().getrandbits(k)

    def choices(self, population, weights=None, *, cum_weights=None, k=1):
        return [self.choice(population) for _ in range(k)]


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def rng():
    return PinnedRandom(0.0)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def app_storage(flask_app, clock, rng):
    """The application's own store, driven by the fake clock."""
    store = current_storage()
    store.clock = clock
    store.rng = rng
    return store


@pytest.fixture(params=['memory', 'sql'])
def store(request, clock, rng):
    """A store of each backend with a fake clock and pinned random source."""
    if request.param == 'memory':
        yield MemStorage(clock=clock, rng=rng)
        return

    from wordchain.services.games.sql import SqlStorage
    application = create_app(SqlTestConfig)
    with application.app_context():
        yield SqlStorage(db, clock=clock, rng=rng)
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
