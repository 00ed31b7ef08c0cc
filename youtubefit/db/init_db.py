from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from youtubefit.catalog.yoga import reclassify_yoga_workouts
from youtubefit.db.models import Base
from youtubefit.db.session import get_engine


def init_db(engine: Engine | None = None) -> None:
    """Create all tables, then reclassify keyword-matching workouts as yoga."""
    engine = engine or get_engine()
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables verified")

    with Session(engine) as session:
        reclassify_yoga_workouts(session)
        session.commit()
