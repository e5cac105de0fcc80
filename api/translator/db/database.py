"""
SQLite access for the translator.

One file holds the ``language_profiles`` and ``translations`` tables. A
``TranslatorDatabase`` is created at startup and handed to the stores that
need it; every operation opens its own short-lived connection.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class TranslatorDatabase:
    """Location of the translator database plus schema setup."""

    def __init__(self, db_path: str):
        self.db_path = Path(db_path)
        self.initialized = False

    def initialize(self) -> None:
        """Create the parent directory and apply ``schema.sql``.

        The schema only uses IF NOT EXISTS, so running it against an existing
        database is harmless.

        Raises:
            FileNotFoundError: If schema.sql is missing from the package
            sqlite3.Error: If the database cannot be created
        """
        if self.initialized:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        schema = SCHEMA_PATH.read_text(encoding="utf-8")
        with self.get_connection() as conn:
            conn.executescript(schema)
            conn.commit()

        self.initialized = True
        logger.info(f"Translator database ready at {self.db_path}")

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """
        Yield a connection with ``sqlite3.Row`` rows, closed on exit.

        Example:
            with db.get_connection() as conn:
                conn.execute("SELECT lang_code FROM language_profiles")
        """
        conn = sqlite3.connect(
            str(self.db_path),
            check_same_thread=False,  # Classifier writes may come from worker threads
            timeout=30.0,
        )
        try:
            conn.row_factory = sqlite3.Row
            yield conn
        finally:
            conn.close()
