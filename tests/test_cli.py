"""
End-to-end CLI tests — init → plan → generate → export.

Uses Click's CliRunner so everything runs in-process.
"""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from framewright.core.persistence.state_file import load_state
from framewright.core.services.framework_generate import FIXED_FILE_COUNT
from framewright.main import cli


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """A directory with a framewright.yml pointing state and output inside it."""
    (tmp_path / "framewright.yml").write_text(
        "state_file: state/project.json\noutput_dir: out\n"
    )
    return tmp_path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def invoke(runner: CliRunner, project_dir: Path, args: list[str], **kwargs):
    """Helper: invoke CLI with the project config."""
    return runner.invoke(cli, ["--config", str(project_dir / "framewright.yml"), *args], **kwargs)


def state_of(project_dir: Path):
    return load_state(project_dir / "state" / "project.json")


@pytest.fixture()
def planned(runner: CliRunner, project_dir: Path) -> Path:
    """A project with one feature and one task."""
    invoke(runner, project_dir, ["init", "--name", "Acme", "--framework", "nextjs"])
    invoke(runner, project_dir, ["feature", "add", "Login", "-d", "Users can log in"])
    invoke(runner, project_dir, ["task", "add", "Build login", "--feature", "Login",
                                 "--done", "User can authenticate"])
    return project_dir


# ── Global ───────────────────────────────────────────────────────


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Framewright" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_config(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yml"), "status"])
        assert result.exit_code == 1
        assert "❌" in result.output

    def test_no_state_yet(self, runner: CliRunner, project_dir: Path):
        result = invoke(runner, project_dir, ["status"])
        assert result.exit_code == 1
        assert "framewright init" in result.output


# ── Lifecycle ────────────────────────────────────────────────────


class TestInit:
    def test_init(self, runner: CliRunner, project_dir: Path):
        result = invoke(runner, project_dir, ["init", "--name", "Acme", "--framework", "nextjs"])
        assert result.exit_code == 0
        assert "✅ Project initialised" in result.output
        assert "Suggested features" in result.output

        state = state_of(project_dir)
        assert state.identity.name == "Acme"
        assert state.architecture.app_type == "web-app"
        assert state.architecture.layers

    def test_refuses_overwrite(self, runner: CliRunner, project_dir: Path):
        invoke(runner, project_dir, ["init", "--name", "Acme"])
        result = invoke(runner, project_dir, ["init", "--name", "Other"])
        assert result.exit_code == 1
        assert "--force" in result.output
        assert state_of(project_dir).identity.name == "Acme"

    def test_force(self, runner: CliRunner, project_dir: Path):
        invoke(runner, project_dir, ["init", "--name", "Acme"])
        result = invoke(runner, project_dir, ["init", "--name", "Other", "--force"])
        assert result.exit_code == 0
        assert state_of(project_dir).identity.name == "Other"

    def test_state_option_overrides_settings(self, runner: CliRunner, tmp_path: Path):
        path = tmp_path / "elsewhere.json"
        result = runner.invoke(cli, ["--state", str(path), "init", "--name", "X"])
        assert result.exit_code == 0
        assert path.is_file()


class TestStepAndStatus:
    def test_step(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["step", "3"])
        assert result.exit_code == 0
        assert state_of(planned).meta.current_step == 3

    def test_step_out_of_range(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["step", "42"])
        assert result.exit_code == 1

    def test_status_json(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["status", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["name"] == "Acme"
        assert data["features"] == 1
        assert data["tasks"] == 2


# ── Planning ─────────────────────────────────────────────────────


class TestFeatureAndTask:
    def test_first_feature_seeds_skeleton(self, runner: CliRunner, project_dir: Path):
        invoke(runner, project_dir, ["init", "--name", "Acme"])
        result = invoke(runner, project_dir, ["feature", "add", "Login"])
        assert result.exit_code == 0
        assert "Seeded task-000" in result.output

        result = invoke(runner, project_dir, ["feature", "add", "Signup"])
        assert "Seeded" not in result.output
        assert [t.task_number for t in state_of(project_dir).tasks] == [0]

    def test_task_links_feature(self, runner: CliRunner, planned: Path):
        state = state_of(planned)
        task = state.tasks[-1]
        assert task.task_number == 1
        assert task.feature_ids == [state.features[0].id]

    def test_task_unknown_feature(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["task", "add", "X", "--feature", "Nope"])
        assert result.exit_code == 1
        assert "Feature not found" in result.output

    def test_task_status(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["task", "status", "1", "done"])
        assert result.exit_code == 0
        assert state_of(planned).tasks[-1].status == "done"

    def test_task_list_json(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["task", "list", "--json"])
        names = [t["name"] for t in json.loads(result.output)]
        assert names == ["Skeleton Deployment", "Build login"]

    def test_feature_remove_unlinks_tasks(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["feature", "remove", "login"])
        assert result.exit_code == 0
        state = state_of(planned)
        assert state.features == []
        assert state.tasks[-1].feature_ids == []

    def test_feature_list_json(self, runner: CliRunner, planned: Path):
        data = json.loads(invoke(runner, planned, ["feature", "list", "--json"]).output)
        assert data[0]["name"] == "Login"


class TestTable:
    def test_rename_cascades(self, runner: CliRunner, planned: Path):
        invoke(runner, planned, ["table", "add", "users", "--columns", "id, email"])
        invoke(runner, planned, ["feature", "add", "Profile", "--table", "users"])
        result = invoke(runner, planned, ["table", "rename", "users", "accounts"])
        assert result.exit_code == 0
        state = state_of(planned)
        assert state.database.tables[0].name == "accounts"
        assert state.features[-1].related_tables == ["accounts"]

    def test_duplicate(self, runner: CliRunner, planned: Path):
        invoke(runner, planned, ["table", "add", "users"])
        result = invoke(runner, planned, ["table", "add", "users"])
        assert result.exit_code == 1


class TestConventions:
    def test_questions_json(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["conventions", "questions", "--json"])
        ids = [q["id"] for q in json.loads(result.output)]
        assert "component-organization" in ids

    def test_set(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["conventions", "set", "git-commits", "conventional-commits"])
        assert result.exit_code == 0
        decision = state_of(planned).conventions.decisions[0]
        assert decision.selected_option_id == "conventional-commits"

    def test_set_custom(self, runner: CliRunner, planned: Path):
        invoke(runner, planned, ["conventions", "set", "git-commits", "--custom", "Squash merges"])
        assert state_of(planned).conventions.decisions[0].custom_answer == "Squash merges"

    def test_bad_option(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["conventions", "set", "git-commits", "nope"])
        assert result.exit_code == 1
        assert "Unknown option" in result.output

    def test_option_and_custom_rejected(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["conventions", "set", "git-commits",
                                          "conventional-commits", "--custom", "Squash"])
        assert result.exit_code == 1
        assert "not both" in result.output
        assert state_of(planned).conventions.decisions == []

    def test_bad_question(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["conventions", "set", "nope", "x"])
        assert result.exit_code == 1


class TestOverride:
    def test_set_from_stdin_and_clear(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["override", "set", "PROJECT.md"], input="# Mine\n")
        assert result.exit_code == 0
        shown = invoke(runner, planned, ["show", "PROJECT.md"])
        assert shown.output == "# Mine\n"

        result = invoke(runner, planned, ["override", "clear", "PROJECT.md"])
        assert result.exit_code == 0
        assert invoke(runner, planned, ["show", "PROJECT.md"]).output.startswith("# Acme")

    def test_clear_missing(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["override", "clear", "PROJECT.md"])
        assert result.exit_code == 1


# ── Output ───────────────────────────────────────────────────────


class TestGenerate:
    def test_writes_files(self, runner: CliRunner, planned: Path):
        out = planned / "framework"
        result = invoke(runner, planned, ["generate", "--out", str(out)])
        assert result.exit_code == 0
        state = state_of(planned)
        expected = FIXED_FILE_COUNT + len(state.features) + len(state.tasks)
        assert expected == 15
        assert f"✅ Wrote {expected} files" in result.output
        assert len([p for p in out.rglob("*") if p.is_file()]) == expected
        assert (out / "PRIME.md").is_file()
        assert (out / "tasks" / "task-001-build-login.md").is_file()

    def test_default_output_dir_from_settings(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["generate"])
        assert result.exit_code == 0
        assert (planned / "out" / "CLAUDE.md").is_file()

    def test_dry_run_json(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["generate", "--dry-run", "--json"])
        data = json.loads(result.output)
        assert data["files"][0]["path"] == "PRIME.md"
        assert data["project_md"]["level"] == "ok"
        assert "out_dir" not in data
        assert not (planned / "out").exists()


class TestExport:
    def test_archive(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["export", "--out", str(planned)])
        assert result.exit_code == 0
        assert "📦" in result.output
        with zipfile.ZipFile(planned / "acme-framework.zip") as zf:
            assert "acme-framework/PROJECT.md" in zf.namelist()


class TestTreeAndShow:
    def test_tree(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["tree"])
        lines = result.output.splitlines()
        assert lines[0] == "acme-framework/"
        assert lines[1] == "├── .github/"

    def test_show_unknown(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["show", "docs/NOPE.md"])
        assert result.exit_code == 1


class TestCheck:
    def test_valid(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["check"])
        assert result.exit_code == 0
        assert "✅ Project is ready to export" in result.output

    def test_json_missing_state(self, runner: CliRunner, project_dir: Path):
        result = invoke(runner, project_dir, ["check", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["valid"] is False


class TestPrompt:
    def test_feature_prompt(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["prompt", "feature", "--feature", "Login"])
        assert result.exit_code == 0
        assert '"Login" feature' in result.output

    def test_feature_prompt_requires_feature(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["prompt", "feature"])
        assert result.exit_code == 1

    def test_skeleton_prompt(self, runner: CliRunner, planned: Path):
        result = invoke(runner, planned, ["prompt", "skeleton"])
        assert "Acme" in result.output
