"""
SQLAlchemy/SQLModel 引擎与会话工厂

数据库 URL 来自 Config.DATABASE_URL（环境变量 DATABASE_URL），
切换到 PostgreSQL 只需修改该配置。
"""
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)


def _make_absolute_sqlite_url(url: str) -> str:
    """
    将相对的 sqlite:/// 路径解析为项目根目录下的绝对路径，
    与当前工作目录无关
    """
    if not url.startswith("sqlite:///"):
        return url
    rel_path = url[len("sqlite:///"):]
    if os.path.isabs(rel_path):
        return url
    root = Path(__file__).resolve().parents[1]
    abs_path = (root / rel_path).resolve()
    abs_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{abs_path}"


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """
    创建数据库引擎

    Args:
        db_url: 数据库 URL；"sqlite://" 表示内存数据库
        echo: 是否输出 SQL 日志

    Returns:
        SQLAlchemy 引擎
    """
    is_sqlite = db_url.startswith("sqlite")
    kwargs = {"echo": echo}

    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # 内存库必须共享同一连接，否则每个会话看到的都是空库
            kwargs["poolclass"] = StaticPool
        else:
            db_url = _make_absolute_sqlite_url(db_url)
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(db_url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA busy_timeout=30000")
            cursor.close()

    logger.info(f"数据库引擎已创建: {engine.url.render_as_string(hide_password=True)}")
    return engine


def init_db(engine: Engine) -> None:
    """创建尚不存在的数据表"""
    import models as _models  # noqa: F401 — 确保所有表模型已注册
    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """会话上下文：正常结束时提交，异常时回滚"""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
