"""
枚举定义 - 阅读阶段、研究领域、影响力评分、日期范围

枚举的声明顺序即固定的展示顺序，统计输出按此顺序遍历，不依赖存储顺序。
"""
from enum import Enum
from typing import List, Optional


class _LabelEnum(str, Enum):
    """以展示文本作为取值的枚举基类"""

    @classmethod
    def values(cls) -> List[str]:
        """按声明顺序返回所有取值"""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw) -> Optional["_LabelEnum"]:
        """
        宽松解析：非字符串或未知取值返回 None，不抛异常

        Args:
            raw: 原始输入

        Returns:
            枚举成员或 None
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class ReadingStage(_LabelEnum):
    """阅读阶段（有序）"""
    ABSTRACT_READ = "Abstract Read"
    INTRODUCTION_DONE = "Introduction Done"
    METHODOLOGY_DONE = "Methodology Done"
    RESULTS_ANALYZED = "Results Analyzed"
    FULLY_READ = "Fully Read"
    NOTES_COMPLETED = "Notes Completed"


class ResearchDomain(_LabelEnum):
    """研究领域"""
    COMPUTER_SCIENCE = "Computer Science"
    BIOLOGY = "Biology"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    MATHEMATICS = "Mathematics"
    SOCIAL_SCIENCES = "Social Sciences"


class ImpactScore(_LabelEnum):
    """影响力评分"""
    HIGH = "High Impact"
    MEDIUM = "Medium Impact"
    LOW = "Low Impact"
    UNKNOWN = "Unknown"


class DateRange(_LabelEnum):
    """日期范围筛选"""
    THIS_WEEK = "THIS_WEEK"
    THIS_MONTH = "THIS_MONTH"
    LAST_3_MONTHS = "LAST_3_MONTHS"
    ALL_TIME = "ALL_TIME"
