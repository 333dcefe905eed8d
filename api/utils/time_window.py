"""
日期范围解析 - 将符号化的日期范围转换为 dateAdded 的下界

所有边界都是本地时间零点；上界隐含为当前时间（不截断未来日期）。
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from models.enums import DateRange

logger = logging.getLogger(__name__)


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_date_range_start(
    date_range: Optional[DateRange],
    now: Optional[datetime] = None
) -> Optional[datetime]:
    """
    计算日期范围的起始时间（含）

    - THIS_WEEK: 最近的周一零点；周日时为 6 天前的周一
    - THIS_MONTH: 本月 1 日零点
    - LAST_3_MONTHS: 3 个自然月前的同一天零点（目标月份较短时截断到月末）
    - ALL_TIME / None: 不限制，返回 None

    Args:
        date_range: 日期范围
        now: 当前时间，默认 datetime.now()

    Returns:
        下界时间或 None
    """
    if date_range is None or date_range == DateRange.ALL_TIME:
        return None

    if now is None:
        now = datetime.now()

    if date_range == DateRange.THIS_WEEK:
        # weekday(): 周一=0 ... 周日=6，正好是距本周一的天数
        start = now - timedelta(days=now.weekday())
    elif date_range == DateRange.THIS_MONTH:
        start = now.replace(day=1)
    elif date_range == DateRange.LAST_3_MONTHS:
        start = now - relativedelta(months=3)
    else:
        logger.debug(f"未知的日期范围: {date_range!r}")
        return None

    return _midnight(start)
