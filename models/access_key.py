"""
API Key 模型 - 不透明访问凭证，只保存哈希
"""
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field

from models.base import BaseModel, new_id, now_local


class UserAccessKey(BaseModel, table=True):
    """访问凭证模型"""
    __tablename__ = "user_access_keys"

    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_key: str = Field(unique=True, index=True)   # SHA-256 十六进制
    created_at: datetime = Field(default_factory=now_local, sa_type=DateTime)
