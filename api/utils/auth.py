"""
认证与限流装饰器

顺序固定：先 require_api_key 解析 API Key，再 rate_limited 计数，
两者都在进入业务服务之前拒绝请求。
"""
import logging
from functools import wraps

from flask import current_app, g, request

from api.exceptions import AuthorizationException, RateLimitedException
from api.utils.rate_limiter import classify_method

logger = logging.getLogger(__name__)


def get_services():
    """获取当前应用的服务容器"""
    return current_app.extensions["paper_tracker"]


def require_api_key(view):
    """校验 X-API-KEY 请求头，并将 API Key ID 写入 g.user_key_id"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        api_key = request.headers.get("X-API-KEY")
        if not api_key:
            raise AuthorizationException("API key is required")

        owner_id = get_services().setup_service.resolve_owner(api_key)
        if owner_id is None:
            raise AuthorizationException("API key is invalid")

        g.user_key_id = owner_id
        return view(*args, **kwargs)

    return wrapper


def rate_limited(view):
    """按 (API Key, 读/写) 限流，必须在 require_api_key 之后使用"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        request_type = classify_method(request.method)
        limiter = get_services().rate_limiter

        if not limiter.try_acquire(g.user_key_id, request_type):
            logger.warning(f"请求超限: owner={g.user_key_id}, type={request_type}")
            raise RateLimitedException()

        return view(*args, **kwargs)

    return wrapper
