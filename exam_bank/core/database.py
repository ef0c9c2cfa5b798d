import json
import logging
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from exam_bank.core.config import settings
from exam_bank.models.orm import Base

logger = logging.getLogger(__name__)


def _json_serializer(value) -> str:
    # keep accented topics readable so substring filters can match them
    return json.dumps(value, ensure_ascii=False)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_conn, _record) -> None:
    # SQLite's builtin lower() only folds ASCII
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def build_engine(url: str, **kwargs) -> Engine:
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    bind = create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        json_serializer=_json_serializer,
        echo=settings.DEBUG,
        **kwargs,
    )
    if is_sqlite:
        event.listen(bind, "connect", _register_sqlite_functions)
    return bind


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def init_db(bind: Engine = engine) -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready")


def close_db(bind: Engine = engine) -> None:
    bind.dispose()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
