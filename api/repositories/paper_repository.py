"""
论文数据访问层 - 处理所有论文相关的数据库查询

查询统一通过 PaperPredicate 表达，count 与 find 使用同一个谓词对象，
保证分页总数与返回条目一致。
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import col, select

from db import session_scope
from models import Paper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaperPredicate:
    """
    论文查询谓词

    owner_id 与 is_archived = False 始终生效；其余维度为 None 时不限制。
    """

    owner_id: str
    reading_stages: Optional[Tuple[str, ...]] = None
    research_domains: Optional[Tuple[str, ...]] = None
    impact_scores: Optional[Tuple[str, ...]] = None
    date_from: Optional[datetime] = None

    def to_clauses(self) -> list:
        """转换为 SQLAlchemy WHERE 子句列表（AND 关系）"""
        clauses = [
            col(Paper.user_key_id) == self.owner_id,
            col(Paper.is_archived) == False,  # noqa: E712
        ]
        if self.reading_stages is not None:
            clauses.append(col(Paper.reading_stage).in_(self.reading_stages))
        if self.research_domains is not None:
            clauses.append(col(Paper.research_domain).in_(self.research_domains))
        if self.impact_scores is not None:
            clauses.append(col(Paper.impact_score).in_(self.impact_scores))
        if self.date_from is not None:
            clauses.append(col(Paper.date_added) >= self.date_from)
        return clauses

    def matches(self, paper: Paper) -> bool:
        """在内存中判断单条记录是否满足谓词"""
        if paper.user_key_id != self.owner_id or paper.is_archived:
            return False
        if self.reading_stages is not None and paper.reading_stage not in self.reading_stages:
            return False
        if self.research_domains is not None and paper.research_domain not in self.research_domains:
            return False
        if self.impact_scores is not None and paper.impact_score not in self.impact_scores:
            return False
        if self.date_from is not None and paper.date_added < self.date_from:
            return False
        return True


class PaperRepository:
    """论文数据访问层"""

    def __init__(self, engine: Engine):
        """
        初始化仓库

        Args:
            engine: 数据库引擎
        """
        self.engine = engine

    def get_by_id(self, paper_id: str) -> Optional[Paper]:
        """
        按ID获取论文（不区分归属和归档状态）

        Args:
            paper_id: 论文ID

        Returns:
            论文或None
        """
        with session_scope(self.engine) as session:
            return session.get(Paper, paper_id)

    def find_by_title_author(self, owner_id: str, title: str, first_author: str) -> Optional[Paper]:
        """按 (title, first_author) 查找该 API Key 下的论文，包括已归档的"""
        with session_scope(self.engine) as session:
            statement = select(Paper).where(
                col(Paper.user_key_id) == owner_id,
                col(Paper.title) == title,
                col(Paper.first_author) == first_author,
            )
            return session.exec(statement).first()

    def create(self, paper: Paper) -> Paper:
        """
        插入论文

        Raises:
            sqlalchemy.exc.IntegrityError: 违反唯一约束
        """
        with session_scope(self.engine) as session:
            session.add(paper)
            session.flush()
            session.refresh(paper)
        logger.info(f"论文已创建: {paper.id}")
        return paper

    def update_fields(self, paper_id: str, fields: Dict[str, Any]) -> Optional[Paper]:
        """
        更新论文字段（最后写入者生效）

        Args:
            paper_id: 论文ID
            fields: 列名 -> 新值

        Returns:
            更新后的论文，不存在时为None
        """
        with session_scope(self.engine) as session:
            paper = session.get(Paper, paper_id)
            if paper is None:
                return None
            for name, value in fields.items():
                setattr(paper, name, value)
            session.add(paper)
        return paper

    def count(self, predicate: PaperPredicate) -> int:
        """统计满足谓词的论文数量"""
        with session_scope(self.engine) as session:
            statement = select(func.count()).select_from(Paper).where(*predicate.to_clauses())
            return session.exec(statement).one()

    def find(
        self,
        predicate: PaperPredicate,
        offset: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[Paper]:
        """
        查找满足谓词的论文，按 date_added 倒序、id 倒序排列

        Args:
            predicate: 查询谓词
            offset: 跳过条数
            limit: 返回数量限制，None 表示全部

        Returns:
            论文列表
        """
        with session_scope(self.engine) as session:
            statement = (
                select(Paper)
                .where(*predicate.to_clauses())
                .order_by(col(Paper.date_added).desc(), col(Paper.id).desc())
            )
            if offset:
                statement = statement.offset(offset)
            if limit is not None:
                statement = statement.limit(limit)
            return list(session.exec(statement).all())
