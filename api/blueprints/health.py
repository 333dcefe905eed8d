"""
健康检查端点
"""
import logging
from flask import Blueprint

from api.utils.common import send_response

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """
    健康检查端点
    ---
    tags:
      - Health
    responses:
      200:
        description: 服务正常运行
        schema:
          properties:
            code:
              type: string
              example: "HEALTH_OK"
            data:
              type: object
            message:
              type: string
              example: "Service is healthy"
    """
    return send_response(200, "HEALTH_OK", None, "Service is healthy")
