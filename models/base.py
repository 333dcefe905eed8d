"""
模型基类 - 所有数据模型的父类
"""
import uuid
from datetime import datetime
from typing import Dict, Any

from sqlmodel import SQLModel


def new_id() -> str:
    """生成不透明的唯一 ID"""
    return uuid.uuid4().hex


def now_local() -> datetime:
    """当前本地时间（不带时区，与日期范围计算保持一致）"""
    return datetime.now()


class BaseModel(SQLModel):
    """基础模型类"""

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            k: v for k, v in self.__dict__.items()
            if not k.startswith('_')
        }

    def to_json(self) -> Dict[str, Any]:
        """转换为 JSON 序列化的字典"""
        data = self.to_dict()
        # 处理 datetime 对象
        for key, value in data.items():
            if isinstance(value, datetime):
                data[key] = value.isoformat()
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()})"
