"""Shared fixtures: a throwaway SQLite store and an app bound to it."""

import pytest

from pantryfinder.app import create_app
from pantryfinder.db import PantryStore

ENV_VARS = ('BASE_PATH', 'BASE_URL', 'NODE_ENV', 'FLASK_ENV', 'DATABASE_PATH', 'DATA_DIRECTORY')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / 'data' / 'database.sqlite'


@pytest.fixture
def store(db_path):
    s = PantryStore(db_path)
    s.init_schema()
    return s


@pytest.fixture
def make_app(store):
    """Build an app on the test store with extra config."""

    def _make(**config):
        return create_app({'TESTING': True, **config}, store=store)

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


def pantry(name='Community Food Hub', **overrides):
    data = {
        'name': name,
        'address': '123 Main St, Anytown, USA',
        'notes': 'Bring a bag',
        'hours': 'M-F 9am-5pm',
        'lat': 40.0,
        'lng': -75.0,
        'type': 'food',
        'repeating': 'weekly',
    }
    data.update(overrides)
    return data
