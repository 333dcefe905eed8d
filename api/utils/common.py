"""
共享的工具函数 - 响应信封、API Key 哈希
"""
import hashlib
import logging
import secrets
import time
from typing import Any

from flask import jsonify

logger = logging.getLogger(__name__)


def send_response(status_code: int, code: str, data: Any = None, message: str = ""):
    """
    构造统一响应信封 {code, data, message}

    Args:
        status_code: HTTP 状态码
        code: 机器可读的结果码
        data: 响应数据
        message: 可读消息

    Returns:
        (Response, status_code)
    """
    return jsonify({
        "code": code,
        "data": data,
        "message": message
    }), status_code


def hash_api_key(api_key: str) -> str:
    """SHA-256 单向哈希"""
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


def generate_api_key(email: str) -> str:
    """基于邮箱、毫秒时间戳和随机字节生成 API Key"""
    timestamp = str(int(time.time() * 1000))
    combined = f"{email}-{timestamp}-{secrets.token_hex(16)}"
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()
