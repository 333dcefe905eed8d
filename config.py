"""
配置文件 - 管理环境变量和系统配置
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """基础配置"""
    # Flask配置
    DEBUG = False
    TESTING = False
    JSON_SORT_KEYS = False
    JSONIFY_PRETTYPRINT_REGULAR = True

    # 数据库配置
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/paper_tracker.db")
    DATABASE_ECHO = False

    # 分页配置
    DEFAULT_PAGE = 1
    DEFAULT_PAGE_SIZE = 10

    # 限流配置（每个 API Key 每个窗口内的请求数）
    READ_LIMIT = int(os.getenv("READ_LIMIT", 100))
    WRITE_LIMIT = int(os.getenv("WRITE_LIMIT", 30))
    RATE_LIMIT_WINDOW_SECONDS = 60

    # 限流计数存储（多进程部署时使用 Redis 共享计数）
    RATE_LIMIT_USE_REDIS = os.getenv("RATE_LIMIT_USE_REDIS", "false").lower() == "true"
    REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB = int(os.getenv("REDIS_DB", 0))


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """测试环境配置"""
    TESTING = True
    DATABASE_URL = "sqlite://"   # 内存数据库
    RATE_LIMIT_USE_REDIS = False
    READ_LIMIT = 20
    WRITE_LIMIT = 10


# 获取配置
def get_config(env=None):
    """根据环境变量返回对应配置"""
    if env is None:
        env = os.getenv("FLASK_ENV", "development")

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
