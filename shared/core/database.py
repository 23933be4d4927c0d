from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import INTAKE_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def create_intake_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,    # max temporary extra connections
        pool_timeout=30               # wait time before failing
    )


intake_engine = create_intake_engine(INTAKE_DATABASE_URL)
IntakeSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=intake_engine)


# Dependency
def get_intake_db():
    db = IntakeSessionLocal()
    try:
        yield db
    finally:
        db.close()
