import os
import unicodedata
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

DB_PATH = os.environ.get(
    "PRAYER_DIARY_DB_PATH",
    str(Path(__file__).resolve().parent.parent.parent / "prayer_diary.db"),
)
DATABASE_URL = f"sqlite:///{DB_PATH}"


def fold_name(value: str | None) -> str | None:
    """Case- and accent-insensitive form of a name ("Émile" -> "emile").

    SQLite's lower() and LIKE only fold ASCII, so names are searched and
    sorted through this function instead.
    """
    if value is None:
        return None
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def register_functions(target_engine):
    """Make fold_name() callable from SQL on every connection of target_engine."""

    @event.listens_for(target_engine, "connect")
    def _register(dbapi_conn, connection_record):
        dbapi_conn.create_function("fold_name", 1, fold_name, deterministic=True)


engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
register_functions(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create any missing tables. Existing rows are left alone."""
    engine.dispose()
    Base.metadata.create_all(bind=engine)
