"""Unit tests for database configuration and management."""
from unittest.mock import Mock, patch
from sqlalchemy import inspect, text

from salesops.config.database import get_db, init_db, close_db, engine


class TestGetDb:
    """Tests for get_db generator function."""

    def test_get_db_closes_on_exit(self):
        """Test that get_db closes session when generator exits."""
        mock_db = Mock()

        with patch('salesops.config.database.SessionLocal', return_value=mock_db):
            db_gen = get_db()
            assert next(db_gen) is mock_db

            try:
                next(db_gen)
            except StopIteration:
                pass

            mock_db.close.assert_called_once()


class TestInitDb:
    """Tests for init_db function."""

    @patch('salesops.database.base.Base.metadata.create_all')
    @patch('salesops.config.database.engine')
    def test_init_db_creates_tables(self, mock_engine, mock_create_all):
        init_db()
        mock_create_all.assert_called_once_with(bind=mock_engine)

    def test_init_db_registers_all_tables(self):
        init_db()
        tables = set(inspect(engine).get_table_names())
        assert {"quotes", "quote_items", "orders", "order_items", "number_sequences"} <= tables


class TestSqliteEngine:
    """Tests for the SQLite engine setup."""

    def test_foreign_keys_enabled(self):
        with engine.connect() as connection:
            assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1


class TestCloseDb:
    """Tests for close_db function."""

    def test_close_db_removes_scoped_session(self):
        with patch('salesops.config.database.SessionLocal') as mock_session_local:
            close_db()
            mock_session_local.remove.assert_called_once()


class TestCreateTablesScript:
    """Tests for salesops.database.create_tables."""

    def test_create_tables_calls_init_db(self):
        from salesops.database.create_tables import create_tables

        with patch('salesops.database.create_tables.init_db') as mock_init_db:
            create_tables()
            mock_init_db.assert_called_once()
