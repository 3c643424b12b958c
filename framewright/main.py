"""
Framewright — CLI entrypoint.

Usage:
    framewright --help
    framewright init --name "My App" --framework nextjs
    framewright generate --out framework/
    framewright check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from framewright import __version__
from framewright.core.observability.logging_config import level_from_flags, setup_logging
from framewright.ui.cli.common import fail, load_project, save_project


@click.group()
@click.version_option(version=__version__, prog_name="framewright")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to framewright.yml (default: auto-detect).",
)
@click.option(
    "--state",
    "-s",
    "state_file",
    type=click.Path(exists=False),
    default=None,
    help="Path to the project state file (default: from settings).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    state_file: str | None,
) -> None:
    """Framewright — plan a project once, hand every AI session the same context."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("FRAMEWRIGHT_LOG_FILE"),
        log_file_level=os.environ.get("FRAMEWRIGHT_LOG_FILE_LEVEL"),
    )

    from framewright.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        fail(str(e))

    ctx.obj["settings"] = settings
    ctx.obj["state_path"] = Path(state_file) if state_file else settings.state_path()


# ── Project lifecycle ───────────────────────────────────────────


@cli.command()
@click.option("--name", default="", help="Project name.")
@click.option("--purpose", default="", help="One-paragraph purpose.")
@click.option("--framework", default="", help="Framework id (see 'conventions questions').")
@click.option("--force", is_flag=True, help="Overwrite an existing state file.")
@click.pass_context
def init(ctx: click.Context, name: str, purpose: str, framework: str, force: bool) -> None:
    """Create a new project state file."""
    from framewright.core.models.project import ProjectState
    from framewright.core.services import project_ops

    path: Path = ctx.obj["state_path"]
    if path.exists() and not force:
        fail(f"{path} already exists. Use --force to start over.")

    state = ProjectState()
    state = project_ops.set_identity(state, name=name, purpose=purpose)
    if framework:
        state = project_ops.set_tech_stack(state, framework=framework)
        state = project_ops.apply_smart_defaults(state)

    save_project(ctx, state)
    click.secho(f"✅ Project initialised at {path}", fg="green")

    suggestions = project_ops.suggested_features(framework)
    if suggestions and not ctx.obj.get("quiet"):
        click.echo("   Suggested features:")
        for s in suggestions:
            click.echo(f"     • {s}")


@cli.command()
@click.argument("step", type=int)
@click.pass_context
def step(ctx: click.Context, step: int) -> None:
    """Move the wizard to STEP."""
    from framewright.core.data import get_registry
    from framewright.core.services.project_ops import ProjectOpError, set_step

    state = load_project(ctx)
    try:
        state = set_step(state, step)
    except ProjectOpError as e:
        fail(str(e))
    save_project(ctx, state)
    click.echo(f"Step {step}: {get_registry().step_title(step)}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show a project summary."""
    state = load_project(ctx)
    summary = state.summary()

    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    click.secho(f"\n📋 {summary['name'] or 'Untitled Project'}", fg="cyan", bold=True)
    click.echo(f"   Framework: {summary['framework'] or '-'}")
    click.echo(f"   Features:  {summary['features']}")
    click.echo(f"   Tasks:     {summary['tasks']}")
    click.echo(f"   Overrides: {summary['overrides']}")
    click.echo()


# ── Generation ──────────────────────────────────────────────────


@cli.command()
@click.option("--out", "out_dir", type=click.Path(file_okay=False), default=None,
              help="Output directory (default: settings output_dir).")
@click.option("--dry-run", is_flag=True, help="List files without writing them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, out_dir: str | None, dry_run: bool, as_json: bool) -> None:
    """Render the framework documents and write them to disk."""
    from framewright.core.services.export_archive import write_files
    from framewright.core.services.framework_generate import generate_all, project_word_report

    settings = ctx.obj["settings"]
    files = generate_all(load_project(ctx))
    report = project_word_report(files, settings.word_warning, settings.word_danger)
    target = Path(out_dir) if out_dir else settings.output_path()

    result: dict = {"files": [
        {"path": f.path, "word_count": f.word_count, "category": f.category} for f in files
    ], "project_md": report}
    if not dry_run:
        written = write_files(files, target)
        if "error" in written:
            fail(written["error"])
        result["out_dir"] = written["out_dir"]

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    for f in files:
        click.echo(f"   {f.path:<50} {f.word_count:>6} words")
    click.echo()
    if dry_run:
        click.secho(f"📄 {len(files)} files (dry run)", fg="cyan")
    else:
        click.secho(f"✅ Wrote {len(files)} files to {target}", fg="green")
    _echo_word_level(report)


def _echo_word_level(report: dict) -> None:
    if report["level"] == "danger":
        click.secho(f"⚠️  PROJECT.md is {report['word_count']} words — trim it.", fg="red")
    elif report["level"] == "warning":
        click.secho(f"⚠️  PROJECT.md is {report['word_count']} words.", fg="yellow")


@cli.command()
@click.option("--out", "out_path", type=click.Path(), default=None,
              help="Archive path or directory (default: settings archive_root).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def export(ctx: click.Context, out_path: str | None, as_json: bool) -> None:
    """Bundle the framework into <slug>-framework.zip."""
    from framewright.core.services.export_archive import create_archive
    from framewright.core.services.framework_generate import generate_all

    settings = ctx.obj["settings"]
    state = load_project(ctx)

    if out_path:
        target: Path | None = Path(out_path)
    elif settings.archive_root:
        target = settings.root / settings.archive_root
        target.mkdir(parents=True, exist_ok=True)
    else:
        target = None

    result = create_archive(generate_all(state), state.identity.slug, target)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        sys.exit(0 if result.get("success") else 1)

    if "error" in result:
        fail(result["error"])
    click.secho(
        f"📦 {result['full_path']} ({len(result['files'])} files, {result['size_bytes']:,} B)",
        fg="green",
    )


@cli.command()
@click.option(
    "--sort",
    "sort_mode",
    type=click.Choice(["folders-first", "alpha", "insertion"]),
    default="folders-first",
    show_default=True,
    help="Child ordering.",
)
@click.pass_context
def tree(ctx: click.Context, sort_mode: str) -> None:
    """Print the framework as a folder tree."""
    from framewright.core.services.file_tree import build_tree, render_tree, sort_tree
    from framewright.core.services.framework_generate import generate_all

    state = load_project(ctx)
    root = build_tree(generate_all(state), root_name=f"{state.identity.slug or 'project'}-framework")
    if sort_mode != "insertion":
        root = sort_tree(root, folders_first=sort_mode == "folders-first")
    click.echo(render_tree(root))


@cli.command()
@click.argument("path")
@click.pass_context
def show(ctx: click.Context, path: str) -> None:
    """Print one generated document (e.g. 'docs/CONVENTIONS.md')."""
    from framewright.core.services.framework_generate import find_file, generate_all

    files = generate_all(load_project(ctx))
    found = find_file(files, path)
    if found is None:
        fail(f"No generated file '{path}'. Run 'framewright tree' to list them.")
    click.echo(found.content, nl=False)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Review the project before export."""
    from framewright.core.use_cases.check import check_project

    result = check_project(ctx.obj["state_path"], ctx.obj["settings"])

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Project is ready to export", fg="green", bold=True)
        click.echo(f"   Files: {result.file_count}")
        click.echo(f"   PROJECT.md: {result.word_count} words ({result.word_level})")
    else:
        click.secho("❌ Project errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


@cli.command()
@click.argument("kind", type=click.Choice(["skeleton", "conventions", "schema", "feature"]))
@click.option("--feature", "feature_key", default=None, help="Feature id or name (for 'feature').")
@click.pass_context
def prompt(ctx: click.Context, kind: str, feature_key: str | None) -> None:
    """Print a prompt for drafting a document with an AI assistant."""
    from framewright.core.services import prompts
    from framewright.ui.cli.project import find_feature

    state = load_project(ctx)

    if kind == "skeleton":
        text = prompts.skeleton_prompt(state)
    elif kind == "conventions":
        text = prompts.conventions_prompt(state)
    elif kind == "schema":
        text = prompts.schema_prompt(state)
    else:
        if not feature_key:
            fail("--feature is required for the 'feature' prompt.")
        feature = find_feature(state, feature_key)
        if feature is None:
            fail(f"Feature not found: {feature_key}")
        text = prompts.feature_prompt(state, feature.id)

    click.echo(text)


# ── Register sub-groups ─────────────────────────────────────────

from framewright.ui.cli.project import conventions, feature, override, table, task  # noqa: E402

cli.add_command(feature)
cli.add_command(task)
cli.add_command(table)
cli.add_command(conventions)
cli.add_command(override)


if __name__ == "__main__":
    cli()
