"""
统计服务层 - 处理阅读进度统计的业务逻辑
包括阶段漏斗、引用/影响力散点、领域×阶段堆叠柱和汇总指标

四个视图都从同一作用域的论文集合计算；展示顺序由枚举声明顺序决定，
与存储顺序无关，相同输入必然得到相同输出。
"""
import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Any, Optional

import numpy as np

from models import Paper, ReadingStage, ResearchDomain
from api.services.query_service import PaperQueryService
from api.utils.filter_parser import FilterSpec

logger = logging.getLogger(__name__)


class AnalyticsService:
    """统计服务 - 处理统计相关操作"""

    def __init__(self, query_service: PaperQueryService):
        """初始化统计服务"""
        self.query_service = query_service

    def get_analytics(
        self,
        owner_id: str,
        filter_spec: Optional[FilterSpec] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        获取统计数据

        Args:
            owner_id: API Key ID
            filter_spec: 筛选条件（与列表接口相同）
            now: 当前时间（用于日期范围计算）

        Returns:
            {"funnel", "scatter", "stackedBar", "summary"}
        """
        logger.info(
            f"获取统计数据: owner={owner_id}, "
            f"{(filter_spec or FilterSpec()).describe()}"
        )

        papers = self.query_service.fetch_scope(owner_id, filter_spec, now=now)
        return self.compute_analytics(papers)

    def compute_analytics(self, papers: List[Paper]) -> Dict[str, Any]:
        """
        计算统计数据

        Args:
            papers: 作用域内的全部论文

        Returns:
            包含漏斗、散点、堆叠柱和汇总指标的字典
        """
        stage_counts = defaultdict(int)
        domain_stage_counts = defaultdict(lambda: defaultdict(int))
        citations_by_domain = defaultdict(list)
        scatter = []

        # 单次遍历收集所有视图需要的数据
        for paper in papers:
            stage_counts[paper.reading_stage] += 1
            domain_stage_counts[paper.research_domain][paper.reading_stage] += 1
            citations_by_domain[paper.research_domain].append(paper.citation_count)
            scatter.append({
                "citationCount": paper.citation_count,
                "impactScore": paper.impact_score
            })

        return {
            "funnel": self._compute_funnel(stage_counts),
            "scatter": scatter,
            "stackedBar": self._compute_stacked_bar(domain_stage_counts),
            "summary": self._compute_summary(
                total_papers=len(papers),
                fully_read=stage_counts[ReadingStage.FULLY_READ.value],
                citations_by_domain=citations_by_domain
            )
        }

    def _compute_funnel(self, stage_counts: Dict[str, int]) -> List[Dict[str, Any]]:
        """
        计算阶段漏斗

        六个阶段始终全部出现，没有论文的阶段计数为 0。
        """
        return [
            {"stage": stage, "count": stage_counts.get(stage, 0)}
            for stage in ReadingStage.values()
        ]

    def _compute_stacked_bar(
        self,
        domain_stage_counts: Dict[str, Dict[str, int]]
    ) -> List[Dict[str, Any]]:
        """
        计算领域×阶段堆叠柱

        六个领域始终全部出现；每个领域只包含至少有一篇论文的阶段，
        没有论文的领域对应空映射。
        """
        stacked_bar = []

        for domain in ResearchDomain.values():
            counts = domain_stage_counts.get(domain, {})
            stages = {
                stage: counts[stage]
                for stage in ReadingStage.values()
                if counts.get(stage, 0) > 0
            }
            stacked_bar.append({"domain": domain, "stages": stages})

        return stacked_bar

    def _compute_summary(
        self,
        total_papers: int,
        fully_read: int,
        citations_by_domain: Dict[str, List[int]]
    ) -> Dict[str, Any]:
        """
        计算汇总指标

        Args:
            total_papers: 论文总数
            fully_read: 已完整阅读的论文数
            citations_by_domain: 按领域分组的引用数

        Returns:
            汇总指标字典
        """
        if total_papers > 0:
            completion_rate = fully_read / total_papers
        else:
            completion_rate = 0

        avg_citations_by_domain = {}
        for domain in ResearchDomain.values():
            citations = citations_by_domain.get(domain)
            if citations:
                avg_citations_by_domain[domain] = float(np.mean(citations))
            else:
                avg_citations_by_domain[domain] = 0

        return {
            "totalPapers": total_papers,
            "fullyRead": fully_read,
            "completionRate": completion_rate,
            "avgCitationsByDomain": avg_citations_by_domain
        }
