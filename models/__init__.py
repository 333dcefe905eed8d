"""数据模型"""
from .enums import ReadingStage, ResearchDomain, ImpactScore, DateRange
from .paper import Paper
from .access_key import UserAccessKey

__all__ = [
    "ReadingStage",
    "ResearchDomain",
    "ImpactScore",
    "DateRange",
    "Paper",
    "UserAccessKey",
]
