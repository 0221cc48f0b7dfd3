from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.engine.url import make_url
from typing import Generator
from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL

_url = make_url(DATABASE_URL)
_engine_kwargs: dict = {"echo": False, "pool_pre_ping": True}

# SQLite 本地开发：允许跨线程使用同一连接池
if _url.drivername.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs.update({"pool_size": 10, "max_overflow": 20})


def enable_sqlite_savepoints(target: Engine) -> None:
    """让 pysqlite 正确支持 SAVEPOINT：关闭驱动自带的事务管理，由 SQLAlchemy 显式发出 BEGIN"""

    @event.listens_for(target, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ARG001
        dbapi_connection.isolation_level = None

    @event.listens_for(target, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(DATABASE_URL, **_engine_kwargs)
if _url.drivername.startswith("sqlite"):
    enable_sqlite_savepoints(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """数据库会话依赖注入"""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
