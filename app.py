"""
主应用程序 - Research Paper Tracker Backend
"""
import logging
from dataclasses import dataclass

from flask import Flask
from flask_cors import CORS
from flasgger import Flasgger
from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException

from config import get_config
from db import create_db_engine, init_db
from api.exceptions import BaseAPIException
from api.repositories import PaperRepository, AccessKeyRepository
from api.services import PaperQueryService, PaperService, AnalyticsService, SetupService
from api.utils.common import send_response
from api.utils.rate_limiter import RateLimiter

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@dataclass
class Services:
    """应用级服务容器，每个 Flask 应用一份"""
    engine: Engine
    query_service: PaperQueryService
    paper_service: PaperService
    analytics_service: AnalyticsService
    setup_service: SetupService
    rate_limiter: RateLimiter


def build_services(config) -> Services:
    """根据配置创建数据库引擎、仓库和服务"""
    engine = create_db_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)
    init_db(engine)

    paper_repository = PaperRepository(engine)
    query_service = PaperQueryService(paper_repository)

    rate_limiter = RateLimiter(
        read_limit=config.READ_LIMIT,
        write_limit=config.WRITE_LIMIT,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        use_redis=config.RATE_LIMIT_USE_REDIS,
        redis_host=config.REDIS_HOST,
        redis_port=config.REDIS_PORT,
        redis_db=config.REDIS_DB
    )

    return Services(
        engine=engine,
        query_service=query_service,
        paper_service=PaperService(paper_repository),
        analytics_service=AnalyticsService(query_service),
        setup_service=SetupService(AccessKeyRepository(engine)),
        rate_limiter=rate_limiter
    )


def register_error_handlers(app: Flask):
    """所有错误统一返回 {code, data, message} 信封"""

    @app.errorhandler(BaseAPIException)
    def handle_api_exception(error: BaseAPIException):
        logger.warning(f"请求失败: {error.code} - {error.message}")
        return error.to_dict(), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        code = "NOT_FOUND" if error.code == 404 else "VALIDATION_ERROR"
        if error.code >= 500:
            code = "INTERNAL_ERROR"
        return send_response(error.code, code, None, error.description or error.name)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.error(f"未处理的异常: {str(error)}", exc_info=True)
        return send_response(500, "INTERNAL_ERROR", None, "Unexpected server error")


def create_app(config_name: str = None):
    """
    创建Flask应用

    Args:
        config_name: 配置名称 ('development', 'production', 'testing')

    Returns:
        Flask应用实例
    """
    app = Flask(__name__)

    # 加载配置
    config = get_config(config_name)
    app.config.from_object(config)

    # 启用CORS
    CORS(app)

    # 初始化 Swagger/Flasgger
    swagger_config = {
        "headers": [],
        "specs": [
            {
                "endpoint": 'apispec',
                "route": '/apispec.json',
                "rule_filter": lambda rule: True,
                "model_filter": lambda tag: True,
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/api/docs"
    }

    Flasgger(app, config=swagger_config)

    logger.info(f"Flask应用初始化: {config_name or 'development'}")

    # 初始化数据库和服务
    app.extensions["paper_tracker"] = build_services(config)

    # 注册API蓝图
    from api import init_api_blueprint
    blueprint = init_api_blueprint()
    app.register_blueprint(blueprint, url_prefix='/api')

    register_error_handlers(app)

    # 添加健康检查路由
    @app.route('/health', methods=['GET'])
    def health():
        return send_response(200, "HEALTH_OK", None, "Service is healthy")

    logger.info("应用初始化完成")

    return app


if __name__ == '__main__':
    app = create_app('development')
    app.run(host='0.0.0.0', port=5000, debug=True)
