"""
API 蓝图模块
"""
from .health import health_bp
from .setup import setup_bp
from .papers import papers_bp
from .analytics import analytics_bp

__all__ = ['health_bp', 'setup_bp', 'papers_bp', 'analytics_bp']
