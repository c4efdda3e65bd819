"""
Unit tests for prompt_loader module.
"""

import pytest
from jinja2 import TemplateNotFound, TemplateSyntaxError, UndefinedError

from src.models.profile import GitHubProfile
from src.utils.prompt_loader import PROMPTS_DIR, get_environment, render_prompt


@pytest.fixture
def template_dir(tmp_path):
    directory = tmp_path / "prompts"
    directory.mkdir()
    return directory


class TestRenderPrompt:
    """Test cases for render_prompt against a temporary template directory."""

    def test_render_simple_template(self, template_dir):
        # Arrange
        (template_dir / "test.j2").write_text("Audit for {{ role }}")

        # Act
        result = render_prompt("test.j2", template_dir=template_dir, role="Backend")

        # Assert
        assert result == "Audit for Backend"

    def test_render_template_not_found(self, template_dir):
        with pytest.raises(TemplateNotFound):
            render_prompt("nonexistent.j2", template_dir=template_dir)

    def test_undefined_variable_raises(self, template_dir):
        """A missing variable is an error, not an empty string in the prompt."""
        (template_dir / "test.j2").write_text("Hello {{ name }}!")

        with pytest.raises(UndefinedError):
            render_prompt("test.j2", template_dir=template_dir)

    def test_syntax_error_raises(self, template_dir):
        (template_dir / "broken.j2").write_text("{% if role %}unterminated")

        with pytest.raises(TemplateSyntaxError):
            render_prompt("broken.j2", template_dir=template_dir, role="Backend")

    def test_nested_directory_template(self, template_dir):
        nested = template_dir / "analysis"
        nested.mkdir()
        (nested / "audit.j2").write_text("User: @{{ login }}")

        result = render_prompt("analysis/audit.j2", template_dir=template_dir, login="octocat")

        assert result == "User: @octocat"


class TestGetEnvironment:
    def test_environment_is_shared_per_directory(self, template_dir):
        assert get_environment(template_dir) is get_environment(template_dir)
        assert get_environment(template_dir) is not get_environment(PROMPTS_DIR)

    def test_default_directory_holds_the_audit_prompt(self):
        assert (PROMPTS_DIR / "analysis" / "portfolio_audit.j2").exists()


class TestPortfolioAuditTemplate:
    """The packaged audit prompt."""

    def test_renders_profile_and_repositories(self):
        # Arrange
        profile = GitHubProfile(login="octocat", name="The Octocat", bio=None, public_repos=8)

        # Act
        result = render_prompt(
            "analysis/portfolio_audit.j2",
            role="Mobile",
            profile=profile,
            repositories_json='[{"name": "repo-01"}]',
        )

        # Assert
        assert result.startswith(
            "Analyze this GitHub profile for a developer portfolio for a Mobile role."
        )
        assert "User: The Octocat (@octocat), Bio: None, Repos: 8." in result
        assert 'Key Repositories: [{"name": "repo-01"}]' in result
        assert "Return strictly as JSON." in result

    def test_missing_variable_raises(self):
        with pytest.raises(UndefinedError):
            render_prompt("analysis/portfolio_audit.j2", role="Mobile")
