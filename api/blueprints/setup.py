"""
注册端点 - 公开接口，无需 API Key
"""
import logging
from flask import Blueprint, request

from api.utils.auth import get_services
from api.utils.common import send_response

logger = logging.getLogger(__name__)

setup_bp = Blueprint('setup', __name__)


@setup_bp.route('/setup', methods=['POST'])
def register_user():
    """
    注册邮箱并获取 API Key
    ---
    tags:
      - Setup
    parameters:
      - name: body
        in: body
        required: true
        schema:
          properties:
            email:
              type: string
              example: "reader@example.com"
    responses:
      201:
        description: 注册成功，apiKey 只返回这一次
        schema:
          properties:
            code:
              type: string
              example: "USER_REGISTERED"
            data:
              type: object
              properties:
                id:
                  type: string
                apiKey:
                  type: string
            message:
              type: string
      400:
        description: 邮箱缺失或格式错误 (VALIDATION_ERROR)
      409:
        description: 邮箱已注册 (EMAIL_EXISTS)
    """
    body = request.get_json(silent=True)
    email = body.get('email') if isinstance(body, dict) else None

    result = get_services().setup_service.register_user(email)

    return send_response(201, "USER_REGISTERED", result, "User registered successfully")
