from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from launchpro.config import settings


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # handlers run on the threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
