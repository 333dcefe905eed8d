"""
共享 Fixtures: 内存数据库 / 仓库 / 服务 / Flask 测试客户端
"""

from datetime import datetime, timedelta

import pytest

from app import create_app
from db import create_db_engine, init_db
from models import Paper
from api.repositories import AccessKeyRepository, PaperRepository
from api.services import AnalyticsService, PaperQueryService, PaperService


@pytest.fixture
def engine():
    """每个测试一个独立的内存数据库"""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def access_key_repository(engine):
    return AccessKeyRepository(engine)


@pytest.fixture
def paper_repository(engine):
    return PaperRepository(engine)


@pytest.fixture
def query_service(paper_repository):
    return PaperQueryService(paper_repository)


@pytest.fixture
def paper_service(paper_repository):
    return PaperService(paper_repository)


@pytest.fixture
def analytics_service(query_service):
    return AnalyticsService(query_service)


@pytest.fixture
def owner_id(access_key_repository):
    return access_key_repository.create("alice@example.com", "hash-alice").id


@pytest.fixture
def other_owner_id(access_key_repository):
    return access_key_repository.create("bob@example.com", "hash-bob").id


@pytest.fixture
def base_time():
    """固定的参考时间：2024-05-15（周三）12:00"""
    return datetime(2024, 5, 15, 12, 0, 0)


@pytest.fixture
def make_paper(paper_repository):
    """直接写入仓库的论文工厂，可指定 date_added 和归档状态"""
    counter = {"n": 0}

    def _make(owner_id, **overrides):
        counter["n"] += 1
        fields = {
            "user_key_id": owner_id,
            "title": f"Paper {counter['n']}",
            "first_author": "Doe",
            "research_domain": "Computer Science",
            "reading_stage": "Abstract Read",
            "citation_count": 0,
            "impact_score": "Unknown",
            "date_added": datetime(2024, 5, 1, 9, 0, 0) + timedelta(minutes=counter["n"]),
            "is_archived": False,
        }
        fields.update(overrides)
        return paper_repository.create(Paper(**fields))

    return _make


@pytest.fixture
def paper_payload():
    """合法的创建请求体"""
    return {
        "title": "Attention Is All You Need",
        "firstAuthor": "Vaswani",
        "researchDomain": "Computer Science",
        "readingStage": "Abstract Read",
        "citationCount": 90000,
        "impactScore": "High Impact",
    }


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api_key(client):
    """注册并返回一个明文 API Key"""
    resp = client.post("/api/setup", json={"email": "reader@example.com"})
    assert resp.status_code == 201
    return resp.get_json()["data"]["apiKey"]
