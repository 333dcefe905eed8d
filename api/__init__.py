import logging

from flask import Blueprint

from api.blueprints import health_bp, setup_bp, papers_bp, analytics_bp


logger = logging.getLogger(__name__)


def init_api_blueprint() -> Blueprint:
    """初始化API主蓝图，注册所有子蓝图"""
    api_bp = Blueprint('api', __name__)

    # 注册所有子蓝图
    api_bp.register_blueprint(health_bp)
    api_bp.register_blueprint(setup_bp)
    api_bp.register_blueprint(papers_bp)
    api_bp.register_blueprint(analytics_bp)

    logger.info("✓ API 初始化完成 - 所有蓝图已注册")
    logger.info("  ├─ health_bp (健康检查)")
    logger.info("  ├─ setup_bp (注册)")
    logger.info("  ├─ papers_bp (论文管理)")
    logger.info("  └─ analytics_bp (统计数据)")

    return api_bp
