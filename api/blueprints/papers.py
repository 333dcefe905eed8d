"""
论文端点 - 创建、更新、归档和分页列表
"""
import logging
from flask import Blueprint, g, request

from api.utils.auth import get_services, rate_limited, require_api_key
from api.utils.common import send_response
from api.utils.filter_parser import parse_filters, parse_pagination

logger = logging.getLogger(__name__)

papers_bp = Blueprint('papers', __name__)


def _json_body() -> dict:
    """请求体不是 JSON 对象时按空对象处理"""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@papers_bp.route('/papers', methods=['POST'])
@require_api_key
@rate_limited
def create_paper():
    """
    创建论文
    ---
    tags:
      - Papers
    parameters:
      - name: X-API-KEY
        in: header
        type: string
        required: true
      - name: body
        in: body
        required: true
        schema:
          required:
            - title
            - firstAuthor
            - researchDomain
            - readingStage
            - citationCount
            - impactScore
          properties:
            title:
              type: string
            firstAuthor:
              type: string
            researchDomain:
              type: string
              enum: ["Computer Science", "Biology", "Physics", "Chemistry", "Mathematics", "Social Sciences"]
            readingStage:
              type: string
              enum: ["Abstract Read", "Introduction Done", "Methodology Done", "Results Analyzed", "Fully Read", "Notes Completed"]
            citationCount:
              type: integer
              minimum: 0
            impactScore:
              type: string
              enum: ["High Impact", "Medium Impact", "Low Impact", "Unknown"]
    responses:
      201:
        description: 创建成功 (PAPER_CREATED)，data 为 {id}
      400:
        description: 必填字段缺失或非法 (VALIDATION_ERROR)
      401:
        description: API Key 缺失或无效 (INVALID_API_KEY)
      409:
        description: 同标题同作者的论文已存在 (DUPLICATE_PAPER)
      429:
        description: 请求过于频繁 (RATE_LIMITED)
    """
    result = get_services().paper_service.create_paper(g.user_key_id, _json_body())
    return send_response(201, "PAPER_CREATED", result, "Paper created successfully")


@papers_bp.route('/papers/<string:paper_id>', methods=['PATCH'])
@require_api_key
@rate_limited
def update_paper(paper_id: str):
    """
    更新论文（仅 researchDomain、readingStage、citationCount）
    ---
    tags:
      - Papers
    parameters:
      - name: X-API-KEY
        in: header
        type: string
        required: true
      - name: paper_id
        in: path
        type: string
        required: true
      - name: body
        in: body
        schema:
          properties:
            researchDomain:
              type: string
            readingStage:
              type: string
            citationCount:
              type: integer
    responses:
      200:
        description: 更新成功 (PAPER_UPDATED)
      400:
        description: 字段取值非法 (VALIDATION_ERROR)
      404:
        description: 论文不存在 (NOT_FOUND)
    """
    get_services().paper_service.update_paper(paper_id, g.user_key_id, _json_body())
    return send_response(200, "PAPER_UPDATED", None, "Paper updated successfully")


@papers_bp.route('/papers/<string:paper_id>/archive', methods=['PATCH'])
@require_api_key
@rate_limited
def archive_paper(paper_id: str):
    """
    归档论文
    ---
    tags:
      - Papers
    parameters:
      - name: X-API-KEY
        in: header
        type: string
        required: true
      - name: paper_id
        in: path
        type: string
        required: true
    responses:
      200:
        description: 归档成功 (PAPER_ARCHIVED)
      404:
        description: 论文不存在 (NOT_FOUND)
    """
    get_services().paper_service.archive_paper(paper_id, g.user_key_id)
    return send_response(200, "PAPER_ARCHIVED", None, "Paper archived successfully")


@papers_bp.route('/papers', methods=['GET'])
@require_api_key
@rate_limited
def get_papers():
    """
    分页获取论文列表（按添加时间倒序，不含已归档）
    ---
    tags:
      - Papers
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
      - name: page
        in: query
        type: integer
        default: 1
      - name: pageSize
        in: query
        type: integer
        default: 10
    responses:
      200:
        description: 成功获取论文列表 (PAPERS_FETCHED)
        schema:
          properties:
            code:
              type: string
              example: "PAPERS_FETCHED"
            data:
              type: object
              properties:
                items:
                  type: array
                  items:
                    type: object
                pagination:
                  type: object
                  properties:
                    page:
                      type: integer
                    pageSize:
                      type: integer
                    total:
                      type: integer
            message:
              type: string
    """
    filter_spec = parse_filters(request.args)
    page, page_size = parse_pagination(request.args)

    result = get_services().query_service.list_papers(
        g.user_key_id,
        filter_spec,
        page=page,
        page_size=page_size
    )

    return send_response(200, "PAPERS_FETCHED", result, "Papers fetched successfully")
