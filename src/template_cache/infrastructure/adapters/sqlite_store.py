"""SQLite adapter implementation for the KeyValueStore port."""

from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session

from ...const import PRAGMA_JOURNAL_MODE, PRAGMA_SYNCHRONOUS
from ...ports.key_value_store import KeyValueStore
from ..database.models import Base, KeyValueModel


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite implementation of the KeyValueStore port."""

    def __init__(self, db_path: Path, check_same_thread: bool = False):
        """Initialize the SQLite key-value store.

        Args:
            db_path: Path to SQLite database file
            check_same_thread: For SQLite thread safety (default False)
        """
        self.db_path = db_path
        if str(db_path) != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)
        self._engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": check_same_thread}
        )
        self._register_sqlite_pragmas()
        Base.metadata.create_all(self._engine, tables=[KeyValueModel.__table__])

    def _register_sqlite_pragmas(self):
        """Set SQLite PRAGMAs on every new connection."""
        @event.listens_for(self._engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            dbapi_connection.execute(PRAGMA_JOURNAL_MODE)
            dbapi_connection.execute(PRAGMA_SYNCHRONOUS)

    def get(self, key: str) -> Optional[str]:
        with Session(self._engine) as session:
            row = session.get(KeyValueModel, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with Session(self._engine) as session:
            row = session.get(KeyValueModel, key)
            if row:
                row.value = value
            else:
                session.add(KeyValueModel(key=key, value=value))
            session.commit()

    def remove(self, key: str) -> None:
        with Session(self._engine) as session:
            session.query(KeyValueModel).filter(KeyValueModel.key == key).delete()
            session.commit()

    def list_keys(self) -> List[str]:
        with Session(self._engine) as session:
            return [row.key for row in session.query(KeyValueModel.key).all()]

    def close(self) -> None:
        """Close the database connection."""
        if self._engine:
            self._engine.dispose()
