"""
db — 数据库引擎与会话工厂

Usage:
    from db import create_db_engine, init_db, session_scope
"""
from .engine import create_db_engine, init_db, session_scope

__all__ = ["create_db_engine", "init_db", "session_scope"]
