"""
CLI commands for editing the project — features, tasks, tables,
convention decisions and document overrides.

Thin wrappers over ``framewright.core.services.project_ops``. Every
command loads the state file, applies one operation and saves it back.
"""

from __future__ import annotations

import json
import sys

import click

from framewright.core.models.project import Feature, ProjectState, slugify
from framewright.core.services import project_ops
from framewright.core.services.project_ops import ProjectOpError
from framewright.ui.cli.common import fail, load_project, save_project


def find_feature(state: ProjectState, key: str) -> Feature | None:
    """Match a feature by id, exact name, or slug."""
    feature = state.get_feature(key)
    if feature is not None:
        return feature
    for f in state.features:
        if f.name == key or (f.slug and f.slug == slugify(key)):
            return f
    return None


def _require_feature(state: ProjectState, key: str) -> Feature:
    feature = find_feature(state, key)
    if feature is None:
        fail(f"Feature not found: {key}")
    return feature


def _require_task_id(state: ProjectState, number: int) -> str:
    task = project_ops.find_task_by_number(state, number)
    if task is None:
        fail(f"Task not found: {number}")
    return task.id


# ═══════════════════════════════════════════════════════════════════
#  Features
# ═══════════════════════════════════════════════════════════════════


@click.group("feature")
def feature() -> None:
    """Features — add, remove and list user-facing capabilities."""


@feature.command("add")
@click.argument("name")
@click.option("--description", "-d", default="", help="What the feature does.")
@click.option("--rule", "rules", multiple=True, help="Business rule (repeatable).")
@click.option("--criterion", "criteria", multiple=True, help="Acceptance criterion (repeatable).")
@click.option("--table", "tables", multiple=True, help="Related table name (repeatable).")
@click.pass_context
def feature_add(
    ctx: click.Context,
    name: str,
    description: str,
    rules: tuple[str, ...],
    criteria: tuple[str, ...],
    tables: tuple[str, ...],
) -> None:
    """Add a feature. The skeleton task 000 is seeded with the first feature."""
    state = load_project(ctx)
    try:
        state, created = project_ops.add_feature(
            state,
            name,
            description=description,
            business_rules=list(rules),
            acceptance_criteria=list(criteria),
            related_tables=list(tables),
        )
    except ProjectOpError as e:
        fail(str(e))

    seeded = not state.meta.skeleton_task_seeded
    state = project_ops.ensure_skeleton_task(state)
    seeded = seeded and state.meta.skeleton_task_seeded
    save_project(ctx, state)

    click.secho(f"✅ Added feature '{created.name}' ({created.id})", fg="green")
    if seeded:
        click.echo("   Seeded task-000: Skeleton Deployment")


@feature.command("remove")
@click.argument("key")
@click.pass_context
def feature_remove(ctx: click.Context, key: str) -> None:
    """Remove a feature (by id or name) and unlink it from tasks."""
    state = load_project(ctx)
    target = _require_feature(state, key)
    state = project_ops.remove_feature(state, target.id)
    save_project(ctx, state)
    click.secho(f"🗑️  Removed feature '{target.name}'", fg="yellow")


@feature.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def feature_list(ctx: click.Context, as_json: bool) -> None:
    """List features with their task counts."""
    state = load_project(ctx)

    if as_json:
        click.echo(json.dumps([
            {**f.model_dump(mode="json"), "task_count": len(state.tasks_for_feature(f))}
            for f in state.features
        ], indent=2))
        return

    if not state.features:
        click.echo("No features defined.")
        return
    for f in state.features:
        count = len(state.tasks_for_feature(f))
        click.echo(f"   • {f.name or 'Unnamed'}  ({count} task{'' if count == 1 else 's'})  {f.id}")


# ═══════════════════════════════════════════════════════════════════
#  Tasks
# ═══════════════════════════════════════════════════════════════════


@click.group("task")
def task() -> None:
    """Tasks — session-sized units of work."""


@task.command("add")
@click.argument("name")
@click.option("--feature", "feature_keys", multiple=True, help="Related feature id or name (repeatable).")
@click.option("--done", "definition_of_done", default="", help="Definition of done.")
@click.option("--files", "file_boundaries", default="", help="Files the task may touch.")
@click.option("--out-of-scope", default="", help="What the task must not do.")
@click.pass_context
def task_add(
    ctx: click.Context,
    name: str,
    feature_keys: tuple[str, ...],
    definition_of_done: str,
    file_boundaries: str,
    out_of_scope: str,
) -> None:
    """Add a task numbered one past the highest existing number."""
    from framewright.core.services.generators.common import format_task_number

    state = load_project(ctx)
    feature_ids = [_require_feature(state, key).id for key in feature_keys]
    try:
        state, created = project_ops.add_task(
            state,
            name,
            feature_ids=feature_ids,
            definition_of_done=definition_of_done,
            file_boundaries=file_boundaries,
            out_of_scope=out_of_scope,
        )
    except ProjectOpError as e:
        fail(str(e))
    save_project(ctx, state)
    click.secho(f"✅ Added {format_task_number(created.task_number)}: {created.name}", fg="green")


@task.command("remove")
@click.argument("number", type=int)
@click.pass_context
def task_remove(ctx: click.Context, number: int) -> None:
    """Remove a task by number."""
    state = load_project(ctx)
    state = project_ops.remove_task(state, _require_task_id(state, number))
    save_project(ctx, state)
    click.secho(f"🗑️  Removed task {number}", fg="yellow")


@task.command("status")
@click.argument("number", type=int)
@click.argument("new_status", type=click.Choice(["not-started", "in-progress", "done", "blocked"]))
@click.pass_context
def task_status(ctx: click.Context, number: int, new_status: str) -> None:
    """Set a task's status."""
    state = load_project(ctx)
    state = project_ops.update_task(state, _require_task_id(state, number), status=new_status)
    save_project(ctx, state)
    click.echo(f"Task {number}: {new_status}")


@task.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def task_list(ctx: click.Context, as_json: bool) -> None:
    """List tasks in stored order."""
    from framewright.core.services.generators.common import format_task_number

    state = load_project(ctx)

    if as_json:
        click.echo(json.dumps([t.model_dump(mode="json") for t in state.tasks], indent=2))
        return

    if not state.tasks:
        click.echo("No tasks defined.")
        return
    for t in state.tasks:
        features = ", ".join(f.name for f in state.features_for_task(t)) or "—"
        click.echo(f"   {format_task_number(t.task_number)}  [{t.status}]  {t.name or 'Unnamed'}  ({features})")


# ═══════════════════════════════════════════════════════════════════
#  Tables
# ═══════════════════════════════════════════════════════════════════


@click.group("table")
def table() -> None:
    """Tables — the structured schema sketch."""


@table.command("add")
@click.argument("name")
@click.option("--description", "-d", default="", help="What the table stores.")
@click.option("--columns", default="", help="Column list, free text.")
@click.pass_context
def table_add(ctx: click.Context, name: str, description: str, columns: str) -> None:
    """Add a table."""
    state = load_project(ctx)
    try:
        state = project_ops.add_table(state, name, description, columns)
    except ProjectOpError as e:
        fail(str(e))
    save_project(ctx, state)
    click.secho(f"✅ Added table '{name}'", fg="green")


@table.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def table_rename(ctx: click.Context, old_name: str, new_name: str) -> None:
    """Rename a table and update the features that reference it."""
    state = load_project(ctx)
    try:
        state = project_ops.rename_table(state, old_name, new_name)
    except ProjectOpError as e:
        fail(str(e))
    save_project(ctx, state)
    click.echo(f"Renamed table '{old_name}' → '{new_name}'")


@table.command("remove")
@click.argument("name")
@click.pass_context
def table_remove(ctx: click.Context, name: str) -> None:
    """Remove a table and unlink it from features."""
    state = load_project(ctx)
    try:
        state = project_ops.remove_table(state, name)
    except ProjectOpError as e:
        fail(str(e))
    save_project(ctx, state)
    click.secho(f"🗑️  Removed table '{name}'", fg="yellow")


# ═══════════════════════════════════════════════════════════════════
#  Conventions
# ═══════════════════════════════════════════════════════════════════


@click.group("conventions")
def conventions() -> None:
    """Conventions — catalog questions and decisions."""


@conventions.command("questions")
@click.option("--framework", default=None, help="Framework id (default: the project's).")
@click.option("--all", "show_all", is_flag=True, help="Every question in the catalog.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def conventions_questions(
    ctx: click.Context,
    framework: str | None,
    show_all: bool,
    as_json: bool,
) -> None:
    """List the convention questions for a framework."""
    from framewright.core.services.convention_catalog import (
        get_all_convention_questions,
        get_conventions_for_stack,
    )

    if show_all:
        questions = get_all_convention_questions()
    else:
        if framework is None:
            framework = load_project(ctx).identity.tech_stack.framework
        questions = get_conventions_for_stack(framework)

    if as_json:
        click.echo(json.dumps([q.model_dump() for q in questions], indent=2))
        return

    if not questions:
        click.echo("No convention questions for this framework.")
        return
    for q in questions:
        required = " (required)" if q.is_required else ""
        click.secho(f"   {q.id}{required}", fg="cyan", bold=True)
        click.echo(f"     {q.question}")
        for opt in q.options:
            marker = " ★" if opt.is_recommended else ""
            click.echo(f"       - {opt.id}: {opt.label}{marker}")


@conventions.command("set")
@click.argument("question_id")
@click.argument("option_id", required=False)
@click.option("--custom", "custom_answer", default=None, help="Custom answer instead of an option.")
@click.pass_context
def conventions_set(
    ctx: click.Context,
    question_id: str,
    option_id: str | None,
    custom_answer: str | None,
) -> None:
    """Record a decision: QUESTION_ID OPTION_ID, or QUESTION_ID --custom TEXT."""
    from framewright.core.services.convention_catalog import (
        find_option,
        find_question,
        get_all_convention_questions,
    )

    if option_id is None and not custom_answer:
        fail("Give an OPTION_ID or --custom TEXT.")
    if option_id is not None and custom_answer:
        fail("Give either an OPTION_ID or --custom TEXT, not both.")

    question = find_question(get_all_convention_questions(), question_id)
    if question is None:
        fail(f"Unknown convention question: {question_id}")
    if option_id is not None and find_option(question, option_id) is None:
        valid = ", ".join(o.id for o in question.options)
        fail(f"Unknown option '{option_id}' for {question_id}. Choose one of: {valid}")

    state = load_project(ctx)
    state = project_ops.set_decision(state, question_id, option_id, custom_answer)
    save_project(ctx, state)
    click.secho(f"✅ {question.question} → {option_id or 'custom'}", fg="green")


# ═══════════════════════════════════════════════════════════════════
#  Overrides
# ═══════════════════════════════════════════════════════════════════


@click.group("override")
def override() -> None:
    """Overrides — replace a generated document with hand-edited markdown."""


@override.command("set")
@click.argument("path")
@click.option("--file", "source", type=click.File("r", encoding="utf-8"), default=None,
              help="Read content from a file (default: stdin).")
@click.pass_context
def override_set(ctx: click.Context, path: str, source) -> None:
    """Override the document at PATH (e.g. 'PROJECT.md')."""
    content = source.read() if source is not None else sys.stdin.read()
    state = load_project(ctx)
    state = project_ops.set_override(state, path, content)
    save_project(ctx, state)
    click.secho(f"✅ Override set for {path}", fg="green")


@override.command("clear")
@click.argument("path")
@click.pass_context
def override_clear(ctx: click.Context, path: str) -> None:
    """Drop the override for PATH and go back to the generated content."""
    state = load_project(ctx)
    if path not in state.markdown_overrides:
        fail(f"No override for {path}")
    state = project_ops.clear_override(state, path)
    save_project(ctx, state)
    click.echo(f"Override cleared for {path}")
