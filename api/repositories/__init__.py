"""
数据访问层 - Repository 模式
"""
from .paper_repository import PaperRepository, PaperPredicate
from .access_key_repository import AccessKeyRepository

__all__ = [
    'PaperRepository',
    'PaperPredicate',
    'AccessKeyRepository',
]
