import pytest
from wpstore.connection import dispose_all_engines

pytest_plugins = [
    'tests.fixtures.values',
    'tests.fixtures.sqlite',
    'tests.fixtures.postgres',
]


@pytest.fixture(scope='session', autouse=True)
def dispose_engines():
    """Dispose registered engines once the session ends."""
    yield
    dispose_all_engines()
