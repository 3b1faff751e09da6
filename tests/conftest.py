"""Pytest configuration and fixtures shared across all test modules.

Environment is seeded before any import of ``resumatch.core.config`` so the
global settings instance points at a test endpoint.
"""

import os

# Must run before settings are imported anywhere
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("MATCH_SERVICE_BASE_URL", "https://match.test")
os.environ.setdefault("MATCH_SERVICE_TIMEOUT_SECONDS", "5")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any

import pytest

from resumatch.schemas.match import AnalysisInput


@pytest.fixture
def valid_input() -> AnalysisInput:
    return AnalysisInput(
        resume="Python developer",
        job_description="Looking for a Python developer",
    )


@pytest.fixture
def success_body() -> dict[str, Any]:
    return {
        "final_match_percentage": 82,
        "semantic_score": 90,
        "skill_overlap_score": 75,
        "impact_score": 80,
        "missing_keywords": [],
    }
