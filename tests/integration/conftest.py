"""
Integration Test Configuration

Tests marked ``slow`` talk to the real GitHub and Gemini services. They are
skipped in CI (CI=true) and whenever LIVE_TESTS is not set.
"""

import os

import pytest


@pytest.fixture
def is_ci_environment() -> bool:
    return os.getenv("CI", "").lower() == "true"


@pytest.fixture(autouse=True)
def skip_live_tests(request, is_ci_environment):
    """Skip ``slow`` tests unless live runs were requested outside CI."""
    if not request.node.get_closest_marker("slow"):
        return
    if is_ci_environment:
        pytest.skip("Skipping live test in CI environment")
    if os.getenv("LIVE_TESTS", "").lower() != "true":
        pytest.skip("Set LIVE_TESTS=true to run live tests")
