from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv

from streamhub.core.config import get_settings

# Load environment variables
load_dotenv()

DATABASE_URL = get_settings().DATABASE_URL


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def build_engine(url: str):
    """SQLite needs its connection shared across the request pool threads"""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": 30}
    engine = create_engine(url, connect_args=connect_args, pool_pre_ping=not url.startswith("sqlite"))

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def register_functions(dbapi_connection, connection_record):
            # SQLite'ın yerleşik lower() sadece ASCII; Python'unkiyle değiştir
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
