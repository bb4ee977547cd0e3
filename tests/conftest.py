import os

import pytest
import sqlalchemy as sa
from sqlalchemy.pool import StaticPool

from gamepager.game.models import Base
from gamepager.testing import created_tables


# URL of the database to connect to
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite://')


@pytest.fixture(scope='function')
def engine() -> sa.engine.Engine:
    if DATABASE_URL.startswith('sqlite'):
        # One in-memory database shared by every thread: TestClient runs endpoints in a threadpool
        kwargs = dict(poolclass=StaticPool, connect_args={'check_same_thread': False})
    else:
        kwargs = dict()

    engine = sa.engine.create_engine(DATABASE_URL, **kwargs)
    yield engine
    engine.dispose()


@pytest.fixture(scope='function')
def connection(engine: sa.engine.Engine) -> sa.engine.Connection:
    """ A connection with all tables created """
    with engine.connect() as conn:
        with created_tables(conn, Base.metadata):
            yield conn
