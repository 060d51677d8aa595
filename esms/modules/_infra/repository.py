"""Database routing helpers shared by every register module."""

import importlib
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from esms.utils import app_settings

from .base import Base

logger = logging.getLogger(__name__)

# Model modules are imported before ``create_all`` so every table is
# registered on ``Base.metadata``.
MODEL_MODULES = (
    "esms.modules._infra.models",
    "esms.modules.reference.models",
    "esms.modules.risks.models",
    "esms.modules.emergency.models",
    "esms.modules.communications.models",
    "esms.modules.documents.models",
    "esms.modules.training.models",
    "esms.modules.waste.models",
)

_engine_cache: Dict[str, Any] = {}
_engine_lock = threading.Lock()


def _import_models() -> None:
    for name in MODEL_MODULES:
        importlib.import_module(name)


def get_engine():
    """Return the (cached) engine for the configured database URL."""
    url = app_settings.database_url()
    engine = _engine_cache.get(url)
    if engine is not None:
        return engine
    # Endpoints run in a thread pool; only one thread may create the tables.
    with _engine_lock:
        engine = _engine_cache.get(url)
        if engine is None:
            connect_args: Dict[str, Any] = {}
            if url.startswith("sqlite"):
                connect_args["check_same_thread"] = False
                db_file = url.split("///", 1)[-1]
                if db_file and db_file != ":memory:":
                    Path(db_file).parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(url, connect_args=connect_args)
            _import_models()
            Base.metadata.create_all(engine)
            logger.info("Database ready at %s", url)
            _engine_cache[url] = engine
    return engine


def reset_engines() -> None:
    """Dispose cached engines; the next session re-reads the settings."""
    with _engine_lock:
        for engine in _engine_cache.values():
            engine.dispose()
        _engine_cache.clear()


@contextmanager
def with_session() -> Iterator[Session]:
    engine = get_engine()
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
