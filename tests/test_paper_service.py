"""
论文服务单元测试：创建校验 / 唯一性 / 可修改字段 / 归属校验 / 归档
"""

from datetime import datetime

import pytest

from api.exceptions import DuplicatePaperException, PaperNotFoundException, ValidationException
from api.utils.filter_parser import FilterSpec


# ── 创建 ──

class TestCreatePaper:
    def test_success_sets_system_fields(self, paper_service, paper_repository, owner_id, paper_payload):
        before = datetime.now()
        result = paper_service.create_paper(owner_id, paper_payload)

        paper = paper_repository.get_by_id(result["id"])
        assert paper is not None
        assert paper.user_key_id == owner_id
        assert paper.is_archived is False
        assert paper.date_added >= before.replace(microsecond=0)
        assert paper.research_domain == "Computer Science"
        assert paper.citation_count == 90000

    def test_naive_local_datetimes_round_trip(self, make_paper, paper_repository, access_key_repository, owner_id):
        """时间字段以不带时区的本地时间存取"""
        local = datetime(2024, 5, 13, 0, 0, 0)
        paper = paper_repository.get_by_id(make_paper(owner_id, date_added=local).id)
        assert paper.date_added == local
        assert paper.date_added.tzinfo is None

        key = access_key_repository.get_by_email("alice@example.com")
        assert key.created_at.tzinfo is None

    def test_trims_title_and_author(self, paper_service, paper_repository, owner_id, paper_payload):
        paper_payload.update(title="  Spaced  ", firstAuthor=" Author ")
        paper = paper_repository.get_by_id(paper_service.create_paper(owner_id, paper_payload)["id"])
        assert paper.title == "Spaced"
        assert paper.first_author == "Author"

    @pytest.mark.parametrize("field", [
        "title", "firstAuthor", "researchDomain", "readingStage", "citationCount", "impactScore",
    ])
    def test_missing_required_field(self, paper_service, owner_id, paper_payload, field):
        del paper_payload[field]
        with pytest.raises(ValidationException):
            paper_service.create_paper(owner_id, paper_payload)

    @pytest.mark.parametrize("field,value", [
        ("title", "   "),
        ("researchDomain", "Astrology"),
        ("readingStage", "Skimmed"),
        ("impactScore", 3),
        ("citationCount", -1),
        ("citationCount", "12"),
        ("citationCount", True),
    ])
    def test_invalid_field(self, paper_service, owner_id, paper_payload, field, value):
        paper_payload[field] = value
        with pytest.raises(ValidationException):
            paper_service.create_paper(owner_id, paper_payload)

    def test_empty_payload(self, paper_service, owner_id):
        with pytest.raises(ValidationException):
            paper_service.create_paper(owner_id, None)

    def test_duplicate_for_same_owner(self, paper_service, owner_id, paper_payload):
        paper_service.create_paper(owner_id, paper_payload)
        with pytest.raises(DuplicatePaperException):
            paper_service.create_paper(owner_id, dict(paper_payload, readingStage="Fully Read"))

    def test_same_pair_for_different_owner(self, paper_service, owner_id, other_owner_id, paper_payload):
        first = paper_service.create_paper(owner_id, paper_payload)
        second = paper_service.create_paper(other_owner_id, paper_payload)
        assert first["id"] != second["id"]

    def test_archived_paper_still_blocks_duplicate(self, paper_service, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.archive_paper(paper_id, owner_id)
        with pytest.raises(DuplicatePaperException):
            paper_service.create_paper(owner_id, paper_payload)

    def test_unique_constraint_backstop(self, paper_service, paper_repository, owner_id, paper_payload, monkeypatch):
        paper_service.create_paper(owner_id, paper_payload)
        # 模拟并发：预检查没有看到已存在的记录
        monkeypatch.setattr(paper_repository, "find_by_title_author", lambda *args: None)
        with pytest.raises(DuplicatePaperException):
            paper_service.create_paper(owner_id, paper_payload)


# ── 更新 ──

class TestUpdatePaper:
    def test_updates_mutable_fields(self, paper_service, paper_repository, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.update_paper(paper_id, owner_id, {
            "researchDomain": "Mathematics",
            "readingStage": "Notes Completed",
            "citationCount": 0,
        })
        paper = paper_repository.get_by_id(paper_id)
        assert paper.research_domain == "Mathematics"
        assert paper.reading_stage == "Notes Completed"
        assert paper.citation_count == 0

    def test_stage_can_move_backward(self, paper_service, paper_repository, owner_id, paper_payload):
        paper_payload["readingStage"] = "Notes Completed"
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.update_paper(paper_id, owner_id, {"readingStage": "Abstract Read"})
        assert paper_repository.get_by_id(paper_id).reading_stage == "Abstract Read"

    def test_immutable_fields_ignored(self, paper_service, paper_repository, owner_id, other_owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.update_paper(paper_id, owner_id, {
            "title": "Changed",
            "firstAuthor": "Someone",
            "impactScore": "Low Impact",
            "isArchived": True,
            "dateAdded": "2000-01-01T00:00:00",
            "userKeyId": other_owner_id,
            "citationCount": 7,
        })
        paper = paper_repository.get_by_id(paper_id)
        assert paper.title == paper_payload["title"]
        assert paper.first_author == paper_payload["firstAuthor"]
        assert paper.impact_score == "High Impact"
        assert paper.is_archived is False
        assert paper.user_key_id == owner_id
        assert paper.citation_count == 7

    def test_partial_update_keeps_other_fields(self, paper_service, paper_repository, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.update_paper(paper_id, owner_id, {"citationCount": 1})
        paper = paper_repository.get_by_id(paper_id)
        assert paper.reading_stage == "Abstract Read"
        assert paper.research_domain == "Computer Science"

    def test_invalid_value_rejected(self, paper_service, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        with pytest.raises(ValidationException):
            paper_service.update_paper(paper_id, owner_id, {"citationCount": -3})

    def test_missing_paper(self, paper_service, owner_id):
        with pytest.raises(PaperNotFoundException):
            paper_service.update_paper("does-not-exist", owner_id, {"citationCount": 1})

    def test_other_owner_gets_not_found(self, paper_service, paper_repository, owner_id, other_owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        with pytest.raises(PaperNotFoundException) as missing:
            paper_service.update_paper("does-not-exist", other_owner_id, {"citationCount": 1})
        with pytest.raises(PaperNotFoundException) as foreign:
            paper_service.update_paper(paper_id, other_owner_id, {"citationCount": 1})

        # 两种情况对调用方完全一致
        assert missing.value.to_dict() == foreign.value.to_dict()
        assert missing.value.status_code == foreign.value.status_code == 404
        assert paper_repository.get_by_id(paper_id).citation_count == 90000


# ── 归档 ──

class TestArchivePaper:
    def test_archive_removes_from_listing(self, paper_service, query_service, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        assert query_service.list_papers(owner_id, FilterSpec())["pagination"]["total"] == 1

        paper_service.archive_paper(paper_id, owner_id)
        assert query_service.list_papers(owner_id, FilterSpec())["pagination"]["total"] == 0

    def test_archive_twice_is_noop(self, paper_service, paper_repository, owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        paper_service.archive_paper(paper_id, owner_id)
        paper_service.archive_paper(paper_id, owner_id)
        assert paper_repository.get_by_id(paper_id).is_archived is True

    def test_other_owner_gets_not_found(self, paper_service, paper_repository, owner_id, other_owner_id, paper_payload):
        paper_id = paper_service.create_paper(owner_id, paper_payload)["id"]
        with pytest.raises(PaperNotFoundException):
            paper_service.archive_paper(paper_id, other_owner_id)
        assert paper_repository.get_by_id(paper_id).is_archived is False

    def test_missing_paper(self, paper_service, owner_id):
        with pytest.raises(PaperNotFoundException):
            paper_service.archive_paper("does-not-exist", owner_id)
