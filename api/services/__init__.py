"""
服务层 - 包含所有业务逻辑
"""
from .query_service import PaperQueryService
from .paper_service import PaperService
from .analytics_service import AnalyticsService
from .setup_service import SetupService

__all__ = [
    'PaperQueryService',
    'PaperService',
    'AnalyticsService',
    'SetupService',
]
