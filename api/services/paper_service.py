"""
论文服务层 - 处理论文的创建、更新和归档
使用 Repository 层读写数据，专注于业务规则：
- 同一 API Key 下 (title, firstAuthor) 唯一，归档后也不释放
- 只有 researchDomain、readingStage、citationCount 可以修改
- 论文不存在与不属于当前 API Key 返回相同的 NOT_FOUND
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from models import Paper, ReadingStage, ResearchDomain, ImpactScore
from models.base import now_local
from api.repositories import PaperRepository
from api.exceptions import (
    DuplicatePaperException,
    PaperNotFoundException,
    ValidationException
)

logger = logging.getLogger(__name__)


def _require_text(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{key} is required")
    return value.strip()


def _require_enum(payload: Dict[str, Any], key: str, enum_cls) -> str:
    raw = payload.get(key)
    if raw is None:
        raise ValidationException(f"{key} is required")
    member = enum_cls.parse(raw)
    if member is None:
        raise ValidationException(
            f"{key} must be one of: {', '.join(enum_cls.values())}"
        )
    return member.value


def _require_citation_count(payload: Dict[str, Any], key: str = "citationCount") -> int:
    value = payload.get(key)
    if value is None:
        raise ValidationException(f"{key} is required")
    # bool 是 int 的子类，需要单独排除
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationException(f"{key} must be a non-negative integer")
    return value


class PaperService:
    """论文服务 - 处理论文生命周期操作"""

    def __init__(self, repository: PaperRepository):
        """初始化论文服务"""
        self.repository = repository

    def create_paper(self, owner_id: str, payload: Optional[Dict[str, Any]]) -> Dict[str, str]:
        """
        创建论文

        Args:
            owner_id: API Key ID
            payload: 请求体 {title, firstAuthor, researchDomain, readingStage,
                     citationCount, impactScore}

        Returns:
            {"id": 论文ID}

        Raises:
            ValidationException: 必填字段缺失或非法
            DuplicatePaperException: (title, firstAuthor) 已存在
        """
        payload = payload or {}

        title = _require_text(payload, "title")
        first_author = _require_text(payload, "firstAuthor")
        research_domain = _require_enum(payload, "researchDomain", ResearchDomain)
        reading_stage = _require_enum(payload, "readingStage", ReadingStage)
        citation_count = _require_citation_count(payload)
        impact_score = _require_enum(payload, "impactScore", ImpactScore)

        logger.info(f"创建论文: owner={owner_id}, title={title!r}")

        existing = self.repository.find_by_title_author(owner_id, title, first_author)
        if existing is not None:
            logger.warning(f"论文重复: owner={owner_id}, title={title!r}")
            raise DuplicatePaperException()

        paper = Paper(
            user_key_id=owner_id,
            title=title,
            first_author=first_author,
            research_domain=research_domain,
            reading_stage=reading_stage,
            citation_count=citation_count,
            impact_score=impact_score,
            date_added=now_local(),
            is_archived=False
        )

        try:
            paper = self.repository.create(paper)
        except IntegrityError:
            # 并发创建时由唯一约束兜底
            logger.warning(f"论文重复（唯一约束）: owner={owner_id}, title={title!r}")
            raise DuplicatePaperException()

        return {"id": paper.id}

    def update_paper(
        self,
        paper_id: str,
        owner_id: str,
        payload: Optional[Dict[str, Any]]
    ) -> None:
        """
        更新论文

        只处理 researchDomain、readingStage、citationCount，其它字段忽略。

        Raises:
            PaperNotFoundException: 论文不存在或不属于当前 API Key
            ValidationException: 可修改字段的取值非法
        """
        payload = payload or {}
        self._resolve_owned_paper(paper_id, owner_id)

        fields = {}
        if payload.get("researchDomain") is not None:
            fields["research_domain"] = _require_enum(payload, "researchDomain", ResearchDomain)
        if payload.get("readingStage") is not None:
            fields["reading_stage"] = _require_enum(payload, "readingStage", ReadingStage)
        if payload.get("citationCount") is not None:
            fields["citation_count"] = _require_citation_count(payload)

        if not fields:
            logger.info(f"论文无可更新字段: {paper_id}")
            return

        logger.info(f"更新论文: {paper_id}, 字段={sorted(fields)}")
        self.repository.update_fields(paper_id, fields)

    def archive_paper(self, paper_id: str, owner_id: str) -> None:
        """
        归档论文（单向操作，重复归档视为无操作）

        Raises:
            PaperNotFoundException: 论文不存在或不属于当前 API Key
        """
        paper = self._resolve_owned_paper(paper_id, owner_id)
        if paper.is_archived:
            logger.info(f"论文已归档: {paper_id}")
            return

        logger.info(f"归档论文: {paper_id}")
        self.repository.update_fields(paper_id, {"is_archived": True})

    def _resolve_owned_paper(self, paper_id: str, owner_id: str) -> Paper:
        """
        获取属于当前 API Key 的论文

        不存在和不属于当前 API Key 统一抛出 PaperNotFoundException，
        避免泄露其他用户的论文是否存在。
        """
        paper = self.repository.get_by_id(paper_id)
        if paper is None or paper.user_key_id != owner_id:
            logger.warning(f"论文不存在或无权访问: {paper_id}")
            raise PaperNotFoundException()
        return paper
