"""
Pool lifecycle without a database: ConnectionPool is patched, so these only
check how init/get/close/ping drive it and what each connection runs on setup.
"""

from unittest.mock import MagicMock, patch

import pytest

from daily_report.infrastructure.db import pool as db_pool
from daily_report.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)


@pytest.fixture(autouse=True)
def clean_pool():
    db_pool.close_pool()
    yield
    db_pool.close_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_creates_pool(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = db_pool.init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            assert MockPool.call_args.kwargs["min_size"] == 2
            assert MockPool.call_args.kwargs["max_size"] == 10
            assert result is mock_pool
            assert db_pool.get_pool() is mock_pool

    def test_init_pool_twice_raises_error(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool"):
            db_pool.init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                db_pool.init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        with pytest.raises(PoolNotInitializedError):
            db_pool.get_pool()

    def test_close_pool_clears_singleton(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            db_pool.init_pool("postgresql://test", min_size=1, max_size=2)

            db_pool.close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                db_pool.get_pool()

    def test_statement_timeout_is_applied_on_connect(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool") as MockPool:
            db_pool.init_pool(
                "postgresql://test", min_size=1, max_size=2, statement_timeout_ms=5000
            )
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_called_once_with("SET statement_timeout = 5000")
        conn.commit.assert_called_once()

    def test_zero_statement_timeout_skips_session_setup(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool") as MockPool:
            db_pool.init_pool("postgresql://test", min_size=1, max_size=2)
            configure = MockPool.call_args.kwargs["configure"]

        conn = MagicMock()
        configure(conn)

        conn.execute.assert_not_called()

    def test_ping_runs_select_one(self):
        with patch("daily_report.infrastructure.db.pool.ConnectionPool") as MockPool:
            conn = MagicMock()
            conn.execute.return_value.fetchone.return_value = (1,)
            MockPool.return_value.connection.return_value.__enter__.return_value = conn
            db_pool.init_pool("postgresql://test", min_size=1, max_size=2)

            assert db_pool.ping() is True

        conn.execute.assert_called_once_with("SELECT 1")
