from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from zorax.core.config import settings


def build_engine(uri: str):
    if not uri.startswith("sqlite"):
        return create_engine(uri, pool_pre_ping=True)

    connect_args = {"check_same_thread": False}
    if uri in ("sqlite://", "sqlite:///:memory:"):
        # every connection must see the same in-memory database
        return create_engine(uri, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(uri, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URI)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
