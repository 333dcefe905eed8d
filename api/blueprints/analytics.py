"""
统计相关端点 - 提供阅读进度统计数据
"""
import logging
from flask import Blueprint, g, request

from api.utils.auth import get_services, rate_limited, require_api_key
from api.utils.common import send_response
from api.utils.filter_parser import parse_filters

logger = logging.getLogger(__name__)

analytics_bp = Blueprint('analytics', __name__)


@analytics_bp.route('/analytics', methods=['GET'])
@require_api_key
@rate_limited
def get_analytics():
    """
    获取阅读进度统计 - 阶段漏斗、散点、堆叠柱和汇总指标

    筛选参数与论文列表相同，统计基于同一作用域内的全部论文（不分页）。
    ---
    tags:
      - Analytics
    parameters:
      - name: X-API-KEY
        in: header
        type: string
        required: true
      - name: readingStages
        in: query
        type: array
        items:
          type: string
        collectionFormat: multi
        required: false
      - name: domains
        in: query
        type: array
        items:
          type: string
        collectionFormat: multi
        required: false
      - name: impactScores
        in: query
        type: array
        items:
          type: string
        collectionFormat: multi
        required: false
      - name: dateRange
        in: query
        type: string
        enum: ["THIS_WEEK", "THIS_MONTH", "LAST_3_MONTHS", "ALL_TIME"]
        required: false
    responses:
      200:
        description: 成功获取统计数据 (ANALYTICS_FETCHED)
        schema:
          properties:
            code:
              type: string
              example: "ANALYTICS_FETCHED"
            data:
              type: object
              properties:
                funnel:
                  type: array
                  description: 六个阅读阶段的论文数（始终完整）
                  items:
                    type: object
                    properties:
                      stage:
                        type: string
                      count:
                        type: integer
                scatter:
                  type: array
                  description: 每篇论文的引用数与影响力
                  items:
                    type: object
                    properties:
                      citationCount:
                        type: integer
                      impactScore:
                        type: string
                stackedBar:
                  type: array
                  description: 每个领域内各阶段的论文数（只含非零阶段）
                  items:
                    type: object
                    properties:
                      domain:
                        type: string
                      stages:
                        type: object
                        additionalProperties:
                          type: integer
                summary:
                  type: object
                  properties:
                    totalPapers:
                      type: integer
                    fullyRead:
                      type: integer
                    completionRate:
                      type: number
                    avgCitationsByDomain:
                      type: object
                      additionalProperties:
                        type: number
            message:
              type: string
      401:
        description: API Key 缺失或无效 (INVALID_API_KEY)
      429:
        description: 请求过于频繁 (RATE_LIMITED)
    """
    filter_spec = parse_filters(request.args)

    result = get_services().analytics_service.get_analytics(g.user_key_id, filter_spec)

    return send_response(200, "ANALYTICS_FETCHED", result, "Analytics fetched successfully")
