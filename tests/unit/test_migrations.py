"""
Unit tests for the migration runner.

Uses a mocked pool; the SQL files themselves ship inside the package.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

import exclusive_drop
from exclusive_drop.adapters.repository.postgres import MIGRATIONS_DIR, run_migrations


@pytest.fixture
def mock_pool() -> tuple[MagicMock, MagicMock]:
    """Pool whose connection() context manager yields a mock connection."""
    pool = MagicMock()
    conn = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool, conn


class TestMigrationsDirectory:
    """Tests for where the migration files live."""

    def test_directory_is_inside_the_package(self) -> None:
        """Migrations resolve under the installed exclusive_drop package."""
        package_dir = Path(exclusive_drop.__file__).resolve().parent
        assert MIGRATIONS_DIR == package_dir / "migrations"

    def test_at_least_one_sql_file_ships(self) -> None:
        """The orders table migration is found."""
        names = [path.name for path in MIGRATIONS_DIR.glob("*.sql")]
        assert "001_create_orders.sql" in names


class TestRunMigrations:
    """Tests for run_migrations."""

    def test_executes_packaged_orders_migration(
        self, mock_pool: tuple[MagicMock, MagicMock]
    ) -> None:
        """Every packaged file is executed, including the orders table."""
        pool, conn = mock_pool

        run_migrations(pool)

        assert conn.execute.call_count == len(list(MIGRATIONS_DIR.glob("*.sql")))
        executed = [call.args[0] for call in conn.execute.call_args_list]
        assert any("CREATE TABLE IF NOT EXISTS orders" in sql for sql in executed)

    def test_runs_files_in_name_order(
        self, tmp_path: Path, mock_pool: tuple[MagicMock, MagicMock]
    ) -> None:
        """Files run sorted by filename."""
        pool, conn = mock_pool
        (tmp_path / "002_second.sql").write_text("SELECT 2")
        (tmp_path / "001_first.sql").write_text("SELECT 1")

        run_migrations(pool, tmp_path)

        assert [call.args[0] for call in conn.execute.call_args_list] == [
            "SELECT 1",
            "SELECT 2",
        ]

    def test_empty_directory_executes_nothing(
        self, tmp_path: Path, mock_pool: tuple[MagicMock, MagicMock]
    ) -> None:
        """No files, no statements."""
        pool, conn = mock_pool

        run_migrations(pool, tmp_path)

        conn.execute.assert_not_called()

    def test_failure_is_wrapped(
        self, tmp_path: Path, mock_pool: tuple[MagicMock, MagicMock]
    ) -> None:
        """A failing file stops the run with the file named."""
        pool, conn = mock_pool
        (tmp_path / "001_broken.sql").write_text("NOT SQL")
        conn.execute.side_effect = Exception("syntax error")

        with pytest.raises(RuntimeError, match="001_broken.sql"):
            run_migrations(pool, tmp_path)
