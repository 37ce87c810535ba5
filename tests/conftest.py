"""
Shared test fixtures.

Provides:
- Recording fakes for PyMySQL connections (schema initializer tests)
- In-memory SQLite engines sharing the production pool bounds (pool tests)
"""

import itertools

import pymysql
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from db import connection as db_connection
from db.connection import pool_options


class FakeCursor:
    """Records every statement; raises for statements containing ``fail_on``."""

    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def _record(self, sql, args, many=False):
        if self.conn.fail_on and self.conn.fail_on in sql:
            raise pymysql.err.OperationalError(1050, f"boom on {self.conn.fail_on}")
        self.conn.executed.append((" ".join(sql.split()), args, many))

    def execute(self, sql, args=None):
        self._record(sql, args)
        return 1

    def executemany(self, sql, args):
        self._record(sql, list(args), many=True)
        return len(args)


class FakeConnection:
    _ids = itertools.count(1)

    def __init__(self, fail_on=None, **kwargs):
        self.number = next(self._ids)
        self.kwargs = kwargs
        self.fail_on = fail_on
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    @property
    def open(self):
        return not self.closed

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_pool():
    """Each test starts and ends without a process-wide pool."""
    db_connection.close_pool()
    yield
    db_connection.close_pool()


@pytest.fixture()
def sqlite_engine():
    """Factory for in-memory SQLite engines pooled exactly like the MySQL one."""
    engines = []

    def make(config, creator=None):
        kwargs = {"creator": creator} if creator else {"connect_args": {"check_same_thread": False}}
        engine = create_engine("sqlite://", poolclass=QueuePool, **kwargs, **pool_options(config))
        engines.append(engine)
        return engine

    yield make
    for engine in engines:
        engine.dispose()
