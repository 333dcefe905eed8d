"""
论文查询服务 - 将筛选条件转换为作用域谓词并执行查询

列表与统计共用 scoped_predicate，保证两者对"当前作用域"的理解一致。
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from config import Config
from models import Paper
from api.repositories import PaperRepository, PaperPredicate
from api.utils.filter_parser import FilterSpec, filter_values
from api.utils.time_window import resolve_date_range_start

logger = logging.getLogger(__name__)


def _normalize_page(value, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


class PaperQueryService:
    """论文查询服务"""

    def __init__(self, repository: PaperRepository):
        """初始化查询服务"""
        self.repository = repository

    def scoped_predicate(
        self,
        owner_id: str,
        filter_spec: Optional[FilterSpec] = None,
        now: Optional[datetime] = None
    ) -> PaperPredicate:
        """
        构建作用域谓词

        始终包含 owner_id 相等与未归档两个条件（不可覆盖）；
        FilterSpec 中存在的维度以集合包含方式 AND 进来。

        Args:
            owner_id: API Key ID
            filter_spec: 筛选条件
            now: 当前时间（用于日期范围计算）

        Returns:
            PaperPredicate
        """
        if filter_spec is None:
            filter_spec = FilterSpec()

        stages = filter_values(filter_spec.reading_stages)
        domains = filter_values(filter_spec.research_domains)
        impacts = filter_values(filter_spec.impact_scores)

        return PaperPredicate(
            owner_id=owner_id,
            reading_stages=tuple(stages) if stages is not None else None,
            research_domains=tuple(domains) if domains is not None else None,
            impact_scores=tuple(impacts) if impacts is not None else None,
            date_from=resolve_date_range_start(filter_spec.date_range, now=now),
        )

    def list_papers(
        self,
        owner_id: str,
        filter_spec: Optional[FilterSpec] = None,
        page: int = Config.DEFAULT_PAGE,
        page_size: int = Config.DEFAULT_PAGE_SIZE,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        分页获取论文列表

        Args:
            owner_id: API Key ID
            filter_spec: 筛选条件
            page: 页码（从1开始）
            page_size: 每页条数
            now: 当前时间（用于日期范围计算）

        Returns:
            {"items": [...], "pagination": {"page", "pageSize", "total"}}
        """
        page = _normalize_page(page, Config.DEFAULT_PAGE)
        page_size = _normalize_page(page_size, Config.DEFAULT_PAGE_SIZE)

        predicate = self.scoped_predicate(owner_id, filter_spec, now=now)
        logger.info(
            f"获取论文列表: owner={owner_id}, "
            f"{(filter_spec or FilterSpec()).describe()}, page={page}, pageSize={page_size}"
        )

        # 总数与分页数据使用同一个谓词
        total = self.repository.count(predicate)
        offset = (page - 1) * page_size
        if offset >= total:
            # 超出末页时不查询，超大的 offset 也不会传给数据库
            papers = []
        else:
            papers = self.repository.find(
                predicate,
                offset=offset,
                limit=min(page_size, total - offset)
            )

        return {
            "items": [paper.to_json() for paper in papers],
            "pagination": {
                "page": page,
                "pageSize": page_size,
                "total": total
            }
        }

    def fetch_scope(
        self,
        owner_id: str,
        filter_spec: Optional[FilterSpec] = None,
        now: Optional[datetime] = None
    ) -> List[Paper]:
        """获取作用域内的全部论文（不分页），供统计使用"""
        predicate = self.scoped_predicate(owner_id, filter_spec, now=now)
        return self.repository.find(predicate)
