"""Unit tests for analysis input, result and category schemas."""

import pytest

from resumatch.schemas.match import (
    AnalysisInput,
    Category,
    MatchResult,
    classify,
)


class TestClassify:
    """Score-to-category thresholds."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (100, Category.HIGH),
            (75, Category.HIGH),
            (74.999, Category.MEDIUM),
            (50, Category.MEDIUM),
            (49.999, Category.LOW),
            (0, Category.LOW),
            (-10, Category.LOW),
            (150, Category.HIGH),
        ],
    )
    def test_thresholds(self, score: float, expected: Category) -> None:
        assert classify(score) is expected

    def test_same_score_same_category(self) -> None:
        """Classification is a pure function of the score."""
        assert classify(62.5) is classify(62.5)


class TestAnalysisInput:
    def test_both_present(self) -> None:
        analysis_input = AnalysisInput(resume="cv", job_description="job")
        assert analysis_input.missing_fields() == []

    @pytest.mark.parametrize(
        ("resume", "job_description", "missing"),
        [
            ("", "job", ["resume"]),
            ("cv", "   ", ["job_description"]),
            ("\n\t", "", ["resume", "job_description"]),
        ],
    )
    def test_blank_fields_reported(
        self, resume: str, job_description: str, missing: list[str]
    ) -> None:
        analysis_input = AnalysisInput(resume=resume, job_description=job_description)
        assert analysis_input.missing_fields() == missing

    def test_payload_keeps_text_untrimmed(self) -> None:
        analysis_input = AnalysisInput(resume="  cv  ", job_description="job\n")
        assert analysis_input.to_payload() == {
            "resume": "  cv  ",
            "job_description": "job\n",
        }


class TestMatchResult:
    def test_parses_wire_payload(self, success_body: dict) -> None:
        result = MatchResult.model_validate(
            {**success_body, "missing_keywords": ["docker", "aws", "docker"]}
        )

        assert result.final_match_percentage == 82
        assert result.semantic_score == 90
        assert result.skill_overlap_score == 75
        assert result.impact_score == 80
        # order and duplicates preserved
        assert result.missing_keywords == ["docker", "aws", "docker"]

    def test_missing_keywords_absent_defaults_to_empty(self) -> None:
        result = MatchResult.model_validate({"final_match_percentage": 40})
        assert result.missing_keywords == []

    def test_missing_keywords_null_defaults_to_empty(self) -> None:
        result = MatchResult.model_validate({"missing_keywords": None})
        assert result.missing_keywords == []

    def test_absent_scores_are_none(self) -> None:
        result = MatchResult.model_validate({})
        assert result.scores() == {
            "final_match_percentage": None,
            "semantic_score": None,
            "skill_overlap_score": None,
            "impact_score": None,
        }
        assert set(result.categories().values()) == {None}

    def test_scalar_keywords_kept_as_text(self) -> None:
        result = MatchResult.model_validate({"missing_keywords": ["docker", 3, 2.5]})
        assert result.missing_keywords == ["docker", "3", "2.5"]

    def test_nested_keyword_objects_rejected(self) -> None:
        with pytest.raises(ValueError):
            MatchResult.model_validate({"missing_keywords": [{"term": "docker"}]})

    def test_unknown_fields_ignored(self) -> None:
        result = MatchResult.model_validate({"impact_score": 10, "debug": {"x": 1}})
        assert result.impact_score == 10

    def test_categories_per_dimension(self, success_body: dict) -> None:
        result = MatchResult.model_validate({**success_body, "impact_score": 20})
        assert result.categories() == {
            "final_match_percentage": Category.HIGH,
            "semantic_score": Category.HIGH,
            "skill_overlap_score": Category.HIGH,
            "impact_score": Category.LOW,
        }


class TestScorePolicy:
    def _result(self) -> MatchResult:
        return MatchResult(
            final_match_percentage=120,
            semantic_score=-5,
            skill_overlap_score=60,
            impact_score=None,
        )

    def test_trust_keeps_values(self) -> None:
        result = self._result().with_score_policy("trust")
        assert result.final_match_percentage == 120
        assert result.semantic_score == -5

    def test_clamp_limits_to_range(self) -> None:
        result = self._result().with_score_policy("clamp")
        assert result.final_match_percentage == 100
        assert result.semantic_score == 0
        assert result.skill_overlap_score == 60
        assert result.impact_score is None

    def test_clamp_maps_nan_to_minimum(self) -> None:
        result = MatchResult(
            final_match_percentage=float("nan"),
            semantic_score=float("inf"),
        ).with_score_policy("clamp")

        assert result.final_match_percentage == 0
        assert result.semantic_score == 100
        assert result.out_of_range_scores() == []

    def test_reject_flags_nan(self) -> None:
        with pytest.raises(ValueError, match="impact_score"):
            MatchResult(impact_score=float("nan")).with_score_policy("reject")

    def test_reject_raises(self) -> None:
        with pytest.raises(ValueError, match="final_match_percentage, semantic_score"):
            self._result().with_score_policy("reject")

    def test_in_range_unaffected_by_reject(self, success_body: dict) -> None:
        result = MatchResult.model_validate(success_body)
        assert result.with_score_policy("reject") is result
