"""Tests for Profile Studio CLI."""

from pathlib import Path

from typer.testing import CliRunner

from profile_studio.cli import app


def test_version() -> None:
    """Test --version flag."""
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "profile-studio 0.1.0" in result.output


def test_help() -> None:
    """Test --help flag."""
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "GitHub profile README builder" in result.output


def test_templates_command(tmp_path: Path) -> None:
    """Test listing the built-in catalog."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["templates"])
        assert result.exit_code == 0
        assert "fullstack-developer" in result.output
        assert "minimal-professional" in result.output


def test_templates_command_category(tmp_path: Path) -> None:
    """Test filtering the catalog by category."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["templates", "--category", "academic"])
        assert result.exit_code == 0
        assert "academic-researcher" in result.output
        assert "fullstack-developer" not in result.output


def test_render_to_stdout(tmp_path: Path) -> None:
    """Test rendering a README to stdout."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["render", "minimal-professional", "-u", "octocat"])
        assert result.exit_code == 0
        assert "## About Me" in result.output
        assert "username=octocat" in result.output


def test_render_to_file(tmp_path: Path) -> None:
    """Test rendering a README to a file with attribution and CRLF endings."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            app,
            [
                "render",
                "fullstack-developer",
                "-u",
                "octocat",
                "-o",
                "out/README.md",
                "--attribution",
                "--crlf",
            ],
        )
        assert result.exit_code == 0
        assert "README rendered successfully!" in result.output

        content = Path("out/README.md").read_bytes().decode()
        assert content.startswith("<!-- Created with GitHub Profile Studio -->\r\n")
        assert "\n" not in content.replace("\r\n", "")


def test_render_with_profile(tmp_path: Path) -> None:
    """Test rendering with a profile file."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        Path("profile.yaml").write_text(
            "github_username: hubot\npersonal:\n  display_name: Hubot\n"
        )
        result = runner.invoke(app, ["render", "fullstack-developer", "-p", "profile.yaml"])
        assert result.exit_code == 0
        assert "Hi there, I'm Hubot" in result.output
        assert "username=hubot" in result.output


def test_render_unknown_template(tmp_path: Path) -> None:
    """Test rendering a template that does not exist."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["render", "nope"])
        assert result.exit_code == 1
        assert "Template not found: nope" in result.output


def test_render_invalid_template_fails(tmp_path: Path) -> None:
    """Test that a structurally invalid template fails the render."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        Path("dup.yaml").write_text(
            "metadata: {id: dup, name: Dup}\n"
            "sections:\n"
            "  - {id: s, type: spacer}\n"
            "  - {id: s, type: spacer}\n"
        )
        result = runner.invoke(app, ["render", "dup.yaml"])
        assert result.exit_code == 1
        assert "DUPLICATE_SECTION_ID" in result.output


def test_render_rejects_unknown_theme(tmp_path: Path) -> None:
    """Test --theme validation."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["render", "minimal-professional", "--theme", "neon"])
        assert result.exit_code == 2


def test_validate_command(tmp_path: Path) -> None:
    """Test validating a built-in template."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["validate", "fullstack-developer"])
        assert result.exit_code == 0
        assert "Template is valid" in result.output
        assert "needs a GitHub username" in result.output


def test_validate_command_invalid(tmp_path: Path) -> None:
    """Test validating a template with unsupported sections."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        Path("bad.yaml").write_text(
            "metadata: {id: bad, name: Bad}\n"
            "capabilities: {supported_sections: [hero]}\n"
            "sections:\n"
            "  - {id: q, type: quote}\n"
        )
        result = runner.invoke(app, ["validate", "bad.yaml"])
        assert result.exit_code == 1
        assert "SECTION_UNSUPPORTED" in result.output


def test_preview_command(tmp_path: Path) -> None:
    """Test writing an HTML preview."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            app, ["preview", "minimal-professional", "-u", "octocat", "-o", "preview.html"]
        )
        assert result.exit_code == 0
        assert "Preview written to" in result.output

        page = Path("preview.html").read_text()
        assert page.startswith("<!DOCTYPE html>")
        assert 'class="stat-card stat-stats"' in page


def test_preview_command_skeletons(tmp_path: Path) -> None:
    """Test previewing stats cards as loading placeholders."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            app, ["preview", "minimal-professional", "-u", "octocat", "--skeletons"]
        )
        assert result.exit_code == 0
        page = Path("preview.html").read_text()
        assert "stat-card-skeleton" in page
        assert 'aria-busy="true"' in page


def test_preview_command_failed_render(tmp_path: Path) -> None:
    """Test that a failed render still writes an error page."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        Path("dup.yaml").write_text(
            "metadata: {id: dup, name: Dup}\n"
            "sections:\n"
            "  - {id: s, type: spacer}\n"
            "  - {id: s, type: spacer}\n"
        )
        result = runner.invoke(app, ["preview", "dup.yaml"])
        assert result.exit_code == 0
        assert "Preview unavailable" in Path("preview.html").read_text()


def test_init_command(tmp_path: Path) -> None:
    """Test init command."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "Initialized Profile Studio" in result.output
        assert Path(".profile-studio/config.yaml").exists()
        assert Path("profile.yaml").exists()

        rendered = runner.invoke(app, ["render", "fullstack-developer", "-p", "profile.yaml"])
        assert rendered.exit_code == 0
        assert "Made with" in rendered.output


def test_init_command_already_initialized(tmp_path: Path) -> None:
    """Test init command when already initialized."""
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "already initialized" in result.output
