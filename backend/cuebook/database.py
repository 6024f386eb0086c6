from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from .config import settings

# check_same_thread=False: FastAPI runs sync endpoints in a threadpool
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.resolved_database_url,
    connect_args=connect_args,
)


if settings.is_sqlite:
    @event.listens_for(engine, "connect")
    def enable_sqlite_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        # Readers must not hold off the commit of a reservation
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()
        # Let SQLAlchemy's "begin" event emit BEGIN itself (see below)
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def begin_sqlite_transaction(conn):
        # IMMEDIATE takes the write lock up front, so the conflict check
        # and the insert of a reservation see the same snapshot.
        mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
        conn.exec_driver_sql(f"BEGIN {mode}")


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
