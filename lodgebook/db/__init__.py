from lodgebook.db.session import (
    build_engine,
    build_session_factory,
    init_db,
    session_factory_from_settings,
)

__all__ = [
    "build_engine",
    "build_session_factory",
    "init_db",
    "session_factory_from_settings",
]
