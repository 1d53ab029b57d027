from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from ..app.config import Config

# Create a base class for our models
Base = declarative_base()

def make_engine(database_url: str):
    """Create an engine; SQLite connections are shared across worker threads."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            # one connection for the whole process, otherwise each thread sees an empty DB
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url)

def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create the SQLAlchemy engine
engine = make_engine(Config.DATABASE_URL)

# Create a configured "Session" class
SessionLocal = make_session_factory(engine)


def create_tables(bind=None):
    """Create all tables in the database."""
    # Import all models here before calling create_all
    # This ensures they are registered with the Base metadata
    from .models import Product, Brand, Category, Feature, Tag, Order, OrderItem, ProductReview
    Base.metadata.create_all(bind=bind or engine)
    print("Database tables created successfully.")

if __name__ == "__main__":
    create_tables()
