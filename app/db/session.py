from atams.db.session import create_session_factory, get_db_factory

from app.core.config import settings

# Session factory and request dependency
SessionLocal = create_session_factory(settings)
get_db = get_db_factory(SessionLocal)
