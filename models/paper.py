"""
论文模型 - 定义论文数据结构
"""
from datetime import datetime
from typing import Dict, Any

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from models.base import BaseModel, new_id, now_local
from models.enums import ReadingStage


class Paper(BaseModel, table=True):
    """论文模型

    同一 API Key 下 (title, first_author) 唯一，归档不释放该组合。
    """
    __tablename__ = "papers"
    __table_args__ = (
        UniqueConstraint("title", "first_author", "user_key_id", name="uq_papers_owner_title_author"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    user_key_id: str = Field(foreign_key="user_access_keys.id", index=True)
    title: str
    first_author: str
    research_domain: str              # ResearchDomain 取值
    reading_stage: str                # ReadingStage 取值
    citation_count: int = 0
    impact_score: str                 # ImpactScore 取值
    date_added: datetime = Field(default_factory=now_local, index=True, sa_type=DateTime)   # 本地时间，不带时区
    is_archived: bool = Field(default=False, index=True)

    @property
    def is_fully_read(self) -> bool:
        """是否已完整阅读"""
        return self.reading_stage == ReadingStage.FULLY_READ.value

    def to_dict(self) -> Dict[str, Any]:
        """转换为列表接口的投影（不含 isArchived）"""
        return {
            'id': self.id,
            'title': self.title,
            'firstAuthor': self.first_author,
            'researchDomain': self.research_domain,
            'readingStage': self.reading_stage,
            'citationCount': self.citation_count,
            'impactScore': self.impact_score,
            'dateAdded': self.date_added,
        }
