"""API工具模块"""

from .filter_parser import FilterSpec, parse_filters, parse_pagination
from .time_window import resolve_date_range_start
from .rate_limiter import RateLimiter, classify_method, READ, WRITE
from .common import send_response, hash_api_key, generate_api_key

__all__ = [
    # 筛选与分页
    'FilterSpec',
    'parse_filters',
    'parse_pagination',
    # 日期范围
    'resolve_date_range_start',
    # 限流
    'RateLimiter',
    'classify_method',
    'READ',
    'WRITE',
    # 通用工具
    'send_response',
    'hash_api_key',
    'generate_api_key',
]
