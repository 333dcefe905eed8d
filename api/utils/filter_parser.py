"""
筛选参数解析 - 将原始查询参数规范化为 FilterSpec

解析是宽松的：非字符串或无法识别的取值直接丢弃，不报错；
列表为空（或全部被丢弃）时该维度不做限制。
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from config import Config
from models.enums import DateRange, ImpactScore, ReadingStage, ResearchDomain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterSpec:
    """规范化后的筛选条件，None 表示该维度不限制"""

    reading_stages: Optional[FrozenSet[ReadingStage]] = None
    research_domains: Optional[FrozenSet[ResearchDomain]] = None
    impact_scores: Optional[FrozenSet[ImpactScore]] = None
    date_range: Optional[DateRange] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.reading_stages is None
            and self.research_domains is None
            and self.impact_scores is None
            and self.date_range is None
        )

    def describe(self) -> str:
        """日志用的简短描述"""
        parts = []
        for name in ("reading_stages", "research_domains", "impact_scores"):
            values = getattr(self, name)
            if values is not None:
                parts.append(f"{name}={sorted(v.value for v in values)}")
        if self.date_range is not None:
            parts.append(f"date_range={self.date_range.value}")
        return ", ".join(parts) or "无筛选"


# 查询参数名 -> 枚举类型；领域同时接受原接口的 domains 和 researchDomains
STAGE_KEYS = ("readingStages",)
DOMAIN_KEYS = ("domains", "researchDomains")
IMPACT_KEYS = ("impactScores",)
DATE_RANGE_KEY = "dateRange"


def _get_list(args, key: str) -> List:
    """同时兼容 werkzeug MultiDict 与普通 dict"""
    if args is None:
        return []
    if hasattr(args, "getlist"):
        return list(args.getlist(key))
    value = args.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _parse_enum_set(args, keys: Tuple[str, ...], enum_cls) -> Optional[FrozenSet]:
    raw_values = []
    for key in keys:
        raw_values.extend(_get_list(args, key))

    parsed = set()
    for raw in raw_values:
        member = enum_cls.parse(raw)
        if member is None:
            logger.debug(f"丢弃无法识别的筛选值: {keys[0]}={raw!r}")
            continue
        parsed.add(member)

    return frozenset(parsed) if parsed else None


def parse_filters(args) -> FilterSpec:
    """
    解析筛选参数

    Args:
        args: request.args 或普通字典

    Returns:
        FilterSpec
    """
    date_range = None
    if args is not None:
        raw_range = args.get(DATE_RANGE_KEY)
        date_range = DateRange.parse(raw_range)
        if raw_range is not None and date_range is None:
            logger.debug(f"丢弃无法识别的日期范围: {raw_range!r}")

    return FilterSpec(
        reading_stages=_parse_enum_set(args, STAGE_KEYS, ReadingStage),
        research_domains=_parse_enum_set(args, DOMAIN_KEYS, ResearchDomain),
        impact_scores=_parse_enum_set(args, IMPACT_KEYS, ImpactScore),
        date_range=date_range,
    )


def _positive_int(raw, default: int) -> int:
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw if raw > 0 else default
    if isinstance(raw, str):
        raw = raw.strip()
        # isdigit() 对 "²" 等 Unicode 数字也为真，只接受 ASCII 数字
        if not (raw.isascii() and raw.isdigit()):
            return default
        try:
            value = int(raw)
        except ValueError:
            # 超过 int 字符串位数上限
            return default
        return value if value > 0 else default
    return default


def parse_pagination(args) -> Tuple[int, int]:
    """
    解析分页参数，非法值回退到默认值，从不报错

    Args:
        args: request.args 或普通字典

    Returns:
        (page, page_size)
    """
    if args is None:
        return Config.DEFAULT_PAGE, Config.DEFAULT_PAGE_SIZE

    page = _positive_int(args.get("page"), Config.DEFAULT_PAGE)
    page_size = _positive_int(args.get("pageSize"), Config.DEFAULT_PAGE_SIZE)
    return page, page_size


def filter_values(values: Optional[Iterable]) -> Optional[List[str]]:
    """将枚举集合转换为存储层使用的字符串列表（按声明顺序）"""
    if values is None:
        return None
    members = list(values)
    if not members:
        return None
    order = list(type(members[0]))
    return [m.value for m in sorted(members, key=order.index)]
