"""
统计服务单元测试：漏斗 / 散点 / 堆叠柱 / 汇总指标
"""

from datetime import datetime

import pytest

from models import Paper, ReadingStage, ResearchDomain
from api.utils.filter_parser import FilterSpec, parse_filters


def _paper(stage, domain, citations=0, impact="Unknown"):
    return Paper(
        user_key_id="owner",
        title=f"{stage}-{domain}-{citations}",
        first_author="Doe",
        research_domain=domain,
        reading_stage=stage,
        citation_count=citations,
        impact_score=impact,
        date_added=datetime(2024, 5, 1),
    )


@pytest.fixture
def three_papers():
    """A(Fully Read, Physics, 10)、B(Abstract Read, Physics, 0)、C(Fully Read, Biology, 5)"""
    return [
        _paper("Fully Read", "Physics", 10, "High Impact"),
        _paper("Abstract Read", "Physics", 0, "Low Impact"),
        _paper("Fully Read", "Biology", 5, "Medium Impact"),
    ]


# ── 漏斗 ──

class TestFunnel:
    def test_always_six_stages_in_order(self, analytics_service):
        funnel = analytics_service.compute_analytics([])["funnel"]
        assert [entry["stage"] for entry in funnel] == ReadingStage.values()
        assert all(entry["count"] == 0 for entry in funnel)

    def test_counts_sum_to_total(self, analytics_service, three_papers):
        result = analytics_service.compute_analytics(three_papers)
        counts = {entry["stage"]: entry["count"] for entry in result["funnel"]}
        assert counts["Fully Read"] == 2
        assert counts["Abstract Read"] == 1
        assert counts["Notes Completed"] == 0
        assert sum(counts.values()) == result["summary"]["totalPapers"]


# ── 散点 ──

class TestScatter:
    def test_one_entry_per_record(self, analytics_service, three_papers):
        scatter = analytics_service.compute_analytics(three_papers)["scatter"]
        assert scatter == [
            {"citationCount": 10, "impactScore": "High Impact"},
            {"citationCount": 0, "impactScore": "Low Impact"},
            {"citationCount": 5, "impactScore": "Medium Impact"},
        ]

    def test_no_dedup(self, analytics_service):
        papers = [_paper("Fully Read", "Physics", 3, "Unknown") for _ in range(3)]
        assert len(analytics_service.compute_analytics(papers)["scatter"]) == 3


# ── 堆叠柱 ──

class TestStackedBar:
    def test_six_domains_and_sparse_stages(self, analytics_service, three_papers):
        stacked_bar = analytics_service.compute_analytics(three_papers)["stackedBar"]
        assert [entry["domain"] for entry in stacked_bar] == ResearchDomain.values()

        by_domain = {entry["domain"]: entry["stages"] for entry in stacked_bar}
        assert by_domain["Physics"] == {"Abstract Read": 1, "Fully Read": 1}
        assert by_domain["Biology"] == {"Fully Read": 1}
        assert by_domain["Chemistry"] == {}
        assert by_domain["Computer Science"] == {}

    def test_stage_keys_follow_stage_order(self, analytics_service):
        papers = [
            _paper("Notes Completed", "Mathematics"),
            _paper("Abstract Read", "Mathematics"),
            _paper("Methodology Done", "Mathematics"),
        ]
        stacked_bar = analytics_service.compute_analytics(papers)["stackedBar"]
        math = next(entry for entry in stacked_bar if entry["domain"] == "Mathematics")
        assert list(math["stages"]) == ["Abstract Read", "Methodology Done", "Notes Completed"]

    def test_counts_sum_to_total(self, analytics_service, three_papers):
        result = analytics_service.compute_analytics(three_papers)
        total = sum(sum(entry["stages"].values()) for entry in result["stackedBar"])
        assert total == result["summary"]["totalPapers"] == 3


# ── 汇总指标 ──

class TestSummary:
    def test_concrete_scenario(self, analytics_service, three_papers):
        summary = analytics_service.compute_analytics(three_papers)["summary"]
        assert summary["totalPapers"] == 3
        assert summary["fullyRead"] == 2
        assert summary["completionRate"] == pytest.approx(0.6667, abs=1e-4)
        assert summary["completionRate"] == 2 / 3
        assert summary["avgCitationsByDomain"] == {
            "Computer Science": 0,
            "Biology": 5,
            "Physics": 5,
            "Chemistry": 0,
            "Mathematics": 0,
            "Social Sciences": 0,
        }

    def test_empty_scope_has_zero_rate(self, analytics_service):
        summary = analytics_service.compute_analytics([])["summary"]
        assert summary["totalPapers"] == 0
        assert summary["fullyRead"] == 0
        assert summary["completionRate"] == 0
        assert set(summary["avgCitationsByDomain"]) == set(ResearchDomain.values())

    def test_zero_citation_domain_reports_zero(self, analytics_service):
        summary = analytics_service.compute_analytics([_paper("Abstract Read", "Chemistry", 0)])["summary"]
        assert "Chemistry" in summary["avgCitationsByDomain"]
        assert summary["avgCitationsByDomain"]["Chemistry"] == 0

    def test_average_is_plain_float(self, analytics_service):
        papers = [_paper("Abstract Read", "Biology", c) for c in (1, 2)]
        avg = analytics_service.compute_analytics(papers)["summary"]["avgCitationsByDomain"]["Biology"]
        assert type(avg) is float
        assert avg == 1.5

    def test_deterministic(self, analytics_service, three_papers):
        first = analytics_service.compute_analytics(three_papers)
        second = analytics_service.compute_analytics(list(three_papers))
        assert first == second


# ── 基于仓库的统计 ──

class TestGetAnalytics:
    def test_uses_same_scope_as_listing(self, analytics_service, query_service, make_paper, owner_id):
        make_paper(owner_id, reading_stage="Fully Read", research_domain="Physics", citation_count=10)
        make_paper(owner_id, reading_stage="Abstract Read", research_domain="Physics")
        make_paper(owner_id, reading_stage="Fully Read", research_domain="Biology", citation_count=5)

        filters = parse_filters({"domains": "Physics"})
        analytics = analytics_service.get_analytics(owner_id, filters)
        listing = query_service.list_papers(owner_id, filters)

        assert analytics["summary"]["totalPapers"] == listing["pagination"]["total"] == 2
        assert analytics["summary"]["completionRate"] == 0.5

    def test_archived_excluded(self, analytics_service, paper_service, make_paper, owner_id):
        kept = make_paper(owner_id, reading_stage="Fully Read")
        archived = make_paper(owner_id, reading_stage="Fully Read")
        paper_service.archive_paper(archived.id, owner_id)

        for args in ({}, {"readingStages": "Fully Read"}, {"dateRange": "ALL_TIME"}):
            summary = analytics_service.get_analytics(owner_id, parse_filters(args))["summary"]
            assert summary["totalPapers"] == 1
        assert kept.id != archived.id

    def test_other_owner_invisible(self, analytics_service, make_paper, owner_id, other_owner_id):
        make_paper(other_owner_id, citation_count=100)
        result = analytics_service.get_analytics(owner_id, FilterSpec())
        assert result["summary"]["totalPapers"] == 0
        assert result["scatter"] == []
