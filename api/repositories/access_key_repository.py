"""
API Key 数据访问层
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import col, select

from db import session_scope
from models import UserAccessKey

logger = logging.getLogger(__name__)


class AccessKeyRepository:
    """API Key 数据访问层"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get_by_hashed_key(self, hashed_key: str) -> Optional[UserAccessKey]:
        with session_scope(self.engine) as session:
            statement = select(UserAccessKey).where(col(UserAccessKey.hashed_key) == hashed_key)
            return session.exec(statement).first()

    def get_by_email(self, email: str) -> Optional[UserAccessKey]:
        with session_scope(self.engine) as session:
            statement = select(UserAccessKey).where(col(UserAccessKey.email) == email)
            return session.exec(statement).first()

    def create(self, email: str, hashed_key: str) -> UserAccessKey:
        """
        创建 API Key 记录

        Raises:
            sqlalchemy.exc.IntegrityError: 邮箱或哈希重复
        """
        access_key = UserAccessKey(email=email, hashed_key=hashed_key)
        with session_scope(self.engine) as session:
            session.add(access_key)
            session.flush()
            session.refresh(access_key)
        logger.info(f"API Key 已创建: {access_key.id}")
        return access_key
