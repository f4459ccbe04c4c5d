"""Cadence CLI - personal task dashboard."""

import json
import logging
import sys
from dataclasses import replace
from datetime import date, datetime, timedelta

import click

from .adapters.supabase_api import StoreError
from .adapters.supabase_auth import AuthenticationError, SupabaseAuth
from .config import Config, Session, load_config
from .core import calendar as cal
from .core.categories import DEFAULT_COLORS, Category, active_only, category_payload, toggle_status
from .core.formatting import PLACEHOLDER, format_due, format_time, format_timestamp, relative_time
from .core.listing import SortKey, TaskFilter
from .core.projects import ProjectStatus, filter_projects, project_payload
from .core.tasks import Priority, Task, TaskDraft, TaskStatus, ValidationError, build_due_at, utcnow
from .core.timing import TimeState, classify, local_date
from .core.views import ViewState
from .ports import CategoryRepository
from .workflows import Notice, TaskBoard, get_board, get_store

STATUS_CHOICES = click.Choice([s.value for s in TaskStatus], case_sensitive=False)
PRIORITY_CHOICES = click.Choice([p.value for p in Priority], case_sensitive=False)
SORT_CHOICES = click.Choice([k.value for k in SortKey])
PROJECT_STATUS_CHOICES = click.Choice([s.value for s in ProjectStatus], case_sensitive=False)

PRIORITY_MARKERS = {
    Priority.URGENT: "!!!",
    Priority.HIGH: "!!",
    Priority.MEDIUM: "!",
    Priority.LOW: "",
}


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _echo_notice(notice: Notice) -> None:
    click.echo(notice.text, err=notice.is_error)


def _load_board(config: Config) -> TaskBoard:
    try:
        board = get_board(config)
        board.refresh()
    except AuthenticationError as e:
        _fail(str(e))
    if board.from_cache:
        click.echo("(offline - showing cached tasks)", err=True)
    return board


def _match_category(categories: list[Category], ref: str) -> Category | None:
    """Match a category by id or case-insensitive name."""
    for c in categories:
        if c.id == ref or c.name.lower() == ref.lower():
            return c
    return None


def _resolve_category(store: CategoryRepository, ref: str | None) -> str | None:
    """Accept a category id or a case-insensitive name."""
    if not ref:
        return None
    try:
        categories = store.fetch_categories(active_only=True)
    except StoreError as e:
        _fail(f"Could not load task types: {e}")
    match = _match_category(categories, ref)
    if match is None:
        _fail(f"No active task type matching {ref!r}")
    return match.id


def _sort_key(config: Config, sort_by: str | None = None) -> SortKey:
    try:
        return SortKey(sort_by or config.default_sort)
    except ValueError:
        return SortKey.DUE


def serialize_task(t: Task, config: Config, now: datetime) -> dict:
    return {
        **t.to_record(),
        "state": classify(
            t,
            now,
            config.tzinfo,
            timedelta(hours=config.due_soon_hours),
            config.upcoming_days,
        ).value,
        "pending_sync": t.is_pending_sync,
    }


def format_task_line(t: Task, config: Config, now: datetime) -> str:
    check = "x" if t.is_done else ("-" if t.is_closed else " ")
    marker = PRIORITY_MARKERS.get(t.priority, "")
    state = classify(t, now, config.tzinfo, timedelta(hours=config.due_soon_hours), config.upcoming_days)
    flag = {TimeState.OVERDUE: " OVERDUE", TimeState.DUE_SOON: " due soon"}.get(state, "")
    due = f" ({format_due(t.due_at, config.tzinfo, now)})" if t.due_at else ""
    pending = " [not synced]" if t.is_pending_sync else ""
    return f"[{check}] {t.id[:8]} {marker:3} {t.title}{due}{flag}{pending}"


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Cadence - personal task dashboard."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== Auth ==============


@main.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Sign in with email and password."""
    try:
        session = SupabaseAuth(load_config()).sign_in(email, password)
    except AuthenticationError as e:
        _fail(str(e))
    session.save()
    click.echo(f"Welcome back, {session.first_name}.")


@main.command()
@click.option("--name", "full_name", prompt="Full name")
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def signup(full_name: str, email: str, password: str):
    """Create an account."""
    try:
        session = SupabaseAuth(load_config()).sign_up(email, password, full_name)
    except AuthenticationError as e:
        _fail(str(e))
    session.save()
    click.echo(f"Account created. Hello, {session.first_name}.")


@main.command()
def logout():
    """Sign out and forget the stored session."""
    session = Session.load()
    try:
        SupabaseAuth(load_config()).sign_out(session)
    except AuthenticationError as e:
        click.echo(f"Warning: {e}", err=True)
    Session.clear()
    click.echo("Signed out.")


@main.command()
def whoami():
    """Show the signed-in user."""
    session = Session.load()
    if not session.is_authenticated:
        _fail("Not signed in. Run 'cadence login' first.")
    click.echo(f"{session.display_name or session.email} <{session.email}>")


# ============== Tasks ==============


@main.command()
@click.option("--search", "-s", default="", help="Case-insensitive title search")
@click.option("--status", type=STATUS_CHOICES, default=None)
@click.option("--category", default=None, help="Task type id or name")
@click.option("--priority", type=PRIORITY_CHOICES, default=None)
@click.option("--sort", "sort_by", type=SORT_CHOICES, default=None, help="Sort key (default from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(search: str, status: str | None, category: str | None, priority: str | None,
          sort_by: str | None, as_json: bool):
    """List tasks grouped into Overdue, Today, Upcoming, Completed and Other."""
    config = load_config()
    board = _load_board(config)
    now = utcnow()

    criteria = TaskFilter(
        search=search,
        status=TaskStatus(status) if status else None,
        category_id=_resolve_category(board.repo, category) if category else None,
        priority=Priority(priority) if priority else None,
    )
    sections = board.sections(criteria, _sort_key(config, sort_by), now)

    if as_json:
        click.echo(
            json.dumps(
                {section.value: [serialize_task(t, config, now) for t in items] for section, items in sections},
                indent=2,
            )
        )
        return

    if not sections:
        click.echo("No tasks found." if board.tasks else "No tasks yet.")
        return

    for i, (section, items) in enumerate(sections):
        if i:
            click.echo()
        click.echo(f"### {section.value} ({len(items)})")
        for t in items:
            click.echo(f"  {format_task_line(t, config, now)}")


def _draft_from_options(
    title: str,
    category_id: str | None,
    description: str | None,
    priority: str,
    status: str,
    due: datetime | None,
    at: datetime | None,
    project: str | None,
    config: Config,
) -> TaskDraft:
    return TaskDraft(
        title=title,
        category_id=category_id,
        description=description,
        status=TaskStatus(status),
        priority=Priority(priority),
        due_at=build_due_at(due.date() if due else None, at.time() if at else None, config.tzinfo),
        project_id=project,
    )


@main.command()
@click.argument("title")
@click.option("--category", "-c", default=None, help="Task type id or name (required)")
@click.option("--description", "-d", default=None)
@click.option("--priority", "-p", type=PRIORITY_CHOICES, default=Priority.MEDIUM.value)
@click.option("--status", type=STATUS_CHOICES, default=TaskStatus.TODO.value)
@click.option("--due", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Due date (YYYY-MM-DD)")
@click.option("--at", type=click.DateTime(formats=["%H:%M"]), default=None, help="Due time (HH:MM), defaults to now")
@click.option("--project", default=None, help="Project id")
def add(title: str, category: str | None, description: str | None, priority: str, status: str,
        due: datetime | None, at: datetime | None, project: str | None):
    """Create a task."""
    config = load_config()
    draft = _draft_from_options(title, category, description, priority, status, due, at, project, config)
    try:
        draft.validate()
    except ValidationError as e:
        _fail(str(e))

    try:
        store = get_store(config)
        board = get_board(config, store)
        draft.category_id = _resolve_category(store, category)
        task, notice = board.create(draft)
    except AuthenticationError as e:
        _fail(str(e))
    _echo_notice(notice)
    click.echo(format_task_line(task, config, utcnow()))


@main.command()
@click.argument("ref")
@click.option("--title", default=None)
@click.option("--category", "-c", default=None, help="Task type id or name")
@click.option("--description", "-d", default=None)
@click.option("--priority", "-p", type=PRIORITY_CHOICES, default=None)
@click.option("--status", type=STATUS_CHOICES, default=None)
@click.option("--due", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--at", type=click.DateTime(formats=["%H:%M"]), default=None)
@click.option("--clear-due", is_flag=True, help="Remove the due date")
@click.option("--project", default=None)
def edit(ref: str, title: str | None, category: str | None, description: str | None,
         priority: str | None, status: str | None, due: datetime | None, at: datetime | None,
         clear_due: bool, project: str | None):
    """Edit a task's fields."""
    config = load_config()
    board = _load_board(config)
    try:
        task = board.find(ref)
    except KeyError:
        _fail(f"No single task matches {ref!r}")

    due_at = task.due_at
    if clear_due:
        due_at = None
    elif due or at:
        base_day = due.date() if due else (local_date(task.due_at, config.tzinfo) if task.due_at else date.today())
        due_at = build_due_at(base_day, at.time() if at else None, config.tzinfo)

    draft = TaskDraft(
        title=title if title is not None else task.title,
        category_id=_resolve_category(board.repo, category) if category else task.category_id,
        description=description if description is not None else task.description,
        status=TaskStatus(status) if status else task.status,
        priority=Priority(priority) if priority else task.priority,
        due_at=due_at,
        project_id=project if project is not None else task.project_id,
    )
    try:
        notice = board.edit(task.id, draft)
    except ValidationError as e:
        _fail(str(e))
    _echo_notice(notice)


def _single_task_action(ref: str, action) -> None:
    config = load_config()
    board = _load_board(config)
    try:
        task = board.find(ref)
    except KeyError:
        _fail(f"No single task matches {ref!r}")
    result = action(board, task)
    notice = result[1] if isinstance(result, tuple) else result
    _echo_notice(notice)
    if notice.is_error:
        sys.exit(1)


@main.command()
@click.argument("ref")
def done(ref: str):
    """Toggle a task between Done and To Do."""
    _single_task_action(ref, lambda board, t: board.toggle_complete(t.id))


@main.command("set-status")
@click.argument("ref")
@click.argument("status", type=STATUS_CHOICES)
def set_status(ref: str, status: str):
    """Change a task's status."""
    _single_task_action(ref, lambda board, t: board.set_status(t.id, TaskStatus(status)))


@main.command()
@click.argument("ref")
def dup(ref: str):
    """Duplicate a task as a new To Do."""
    _single_task_action(ref, lambda board, t: board.duplicate(t.id))


@main.command()
@click.argument("ref")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def rm(ref: str, yes: bool):
    """Delete a task permanently."""
    if not yes and not click.confirm(f"Delete task {ref}? This cannot be undone."):
        return
    _single_task_action(ref, lambda board, t: board.delete(t.id))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Summary counts across all tasks."""
    config = load_config()
    board = _load_board(config)
    summary = board.stats()

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    click.echo(f"Total:         {summary.total}")
    for status, count in summary.by_status.items():
        click.echo(f"  {status.value + ':':13}{count}")
    click.echo(f"Overdue:       {summary.overdue}")
    click.echo(f"Due today:     {summary.due_today}")
    click.echo(f"High priority: {summary.high_priority_open}")
    click.echo(f"Completion:    {summary.completion_rate}%")


@main.command()
@click.argument("ref")
def show(ref: str):
    """Show one task in full."""
    config = load_config()
    board = _load_board(config)
    try:
        t = board.find(ref)
    except KeyError:
        _fail(f"No single task matches {ref!r}")
    now = utcnow()
    tz = config.tzinfo

    def stamp(value: datetime | None) -> str:
        if value is None:
            return PLACEHOLDER
        return f"{format_timestamp(value, tz, now)} ({relative_time(value, now)})"

    click.echo(t.title + (" [not synced]" if t.is_pending_sync else ""))
    click.echo(f"  Status:    {t.status.value}")
    click.echo(f"  Priority:  {t.priority.value}")
    due = format_due(t.due_at, tz, now)
    click.echo(f"  Due:       {due}" + (f" ({relative_time(t.due_at, now)})" if t.due_at else ""))
    click.echo(f"  Type:      {t.category_id or PLACEHOLDER}")
    click.echo(f"  Project:   {t.project_id or PLACEHOLDER}")
    click.echo(f"  Created:   {stamp(t.created_at)}")
    click.echo(f"  Updated:   {stamp(t.updated_at)}")
    if t.completed_at:
        click.echo(f"  Completed: {stamp(t.completed_at)}")
    if t.description:
        click.echo()
        click.echo(t.description)


# ============== Browse ==============

BROWSE_HELP = (
    "m REF: row menu | d: done | e: edit | x: delete | c: close menu | "
    "n: new task | f: filters | / TEXT: search | q: quit"
)
ROW_MENU = "[d] done  [e] edit  [x] delete  [c] close"


def _render_board(board: TaskBoard, config: Config, state: ViewState, criteria: TaskFilter) -> None:
    now = utcnow()
    if state.show_filters:
        click.echo(f"Filters: search={criteria.search!r} (/ TEXT to change, f to hide)")
    sections = board.sections(criteria, _sort_key(config), now)
    if not sections:
        click.echo("No tasks.")
    for section, items in sections:
        click.echo(f"### {section.value} ({len(items)})")
        for t in items:
            click.echo(f"  {format_task_line(t, config, now)}")
            if state.actions.is_open(t.id):
                click.echo(f"      {ROW_MENU}")


def _run_editor(board: TaskBoard, state: ViewState) -> None:
    """Prompt for fields of the record the editor is open on, or a new one."""
    if state.editing_id is None:
        title = click.prompt("Title")
        ref = click.prompt("Task type")
        try:
            categories = board.repo.fetch_categories(active_only=True)
        except StoreError as e:
            click.echo(f"Could not load task types: {e}", err=True)
            return
        match = _match_category(categories, ref)
        draft = TaskDraft(title=title, category_id=match.id if match else None)
        try:
            _, notice = board.create(draft)
        except ValidationError as e:
            click.echo(f"Error: {e}", err=True)
            return
        _echo_notice(notice)
        return

    task = board.find(state.editing_id)
    title = click.prompt("Title", default=task.title)
    priority = click.prompt("Priority", type=PRIORITY_CHOICES, default=task.priority.value)
    draft = TaskDraft(
        title=title,
        category_id=task.category_id,
        description=task.description,
        status=task.status,
        priority=Priority(priority),
        due_at=task.due_at,
        project_id=task.project_id,
    )
    try:
        _echo_notice(board.edit(task.id, draft))
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)


def _browse_step(
    board: TaskBoard,
    state: ViewState,
    criteria: TaskFilter,
    command: str,
    arg: str,
) -> tuple[ViewState, TaskFilter]:
    """Apply one browse command and return the next view state and filter."""
    open_id = state.actions.open_id
    match command:
        case "f":
            return state.toggle_filters(), criteria
        case "/":
            if not state.show_filters:
                click.echo("Open the filters with f first.")
                return state, criteria
            return state, replace(criteria, search=arg)
        case "m":
            try:
                task = board.find(arg)
            except KeyError:
                click.echo(f"No single task matches {arg!r}")
                return state, criteria
            return replace(state, actions=state.actions.toggle(task.id)), criteria
        case "c":
            return replace(state, actions=state.actions.close()), criteria
        case "d" | "x" | "e" if open_id is None:
            click.echo("Open a row menu with m REF first.")
            return state, criteria
        case "d":
            _echo_notice(board.toggle_complete(open_id))
            return replace(state, actions=state.actions.close()), criteria
        case "x":
            if click.confirm("Delete this task? This cannot be undone."):
                _echo_notice(board.delete(open_id))
            return replace(state, actions=state.actions.close()), criteria
        case "e":
            state = state.open_editor(open_id)
        case "n":
            state = state.open_editor()
        case _:
            click.echo(BROWSE_HELP)
            return state, criteria

    _run_editor(board, state)
    return state.close_editor(), criteria


@main.command()
def browse():
    """Interactive task list with row menus, filters and an editor."""
    config = load_config()
    board = _load_board(config)
    state = ViewState()
    criteria = TaskFilter()
    click.echo(BROWSE_HELP)
    while True:
        _render_board(board, config, state, criteria)
        command, _, arg = click.prompt(">", default="q", show_default=False).strip().partition(" ")
        if command == "q":
            return
        state, criteria = _browse_step(board, state, criteria, command, arg.strip())


# ============== Calendar ==============


@main.group(invoke_without_command=True)
@click.pass_context
def calendar(ctx):
    """Show tasks on a calendar."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(calendar_month)


def _calendar_tasks() -> tuple[Config, list[Task]]:
    config = load_config()
    board = _load_board(config)
    return config, list(board.tasks)


def _show_day(config: Config, all_tasks: list[Task], day: date, now: datetime) -> None:
    click.echo(f"### {day.strftime('%A, %B')} {day.day}")
    agenda = cal.day_agenda(all_tasks, day, config.tzinfo)
    if not agenda:
        click.echo("  No tasks.")
    for t in agenda:
        mark = {"overdue": " !", "due-soon": " ~"}.get(
            cal.badge(t, now, timedelta(hours=config.due_soon_hours)), ""
        )
        click.echo(f"  {format_time(t.due_at, config.tzinfo):>8}  {t.title}{mark}")


@calendar.command("month")
@click.option("--month", "month_str", default=None, help="Month to show (YYYY-MM)")
@click.option("--offset", default=0, help="Months before (negative) or after the shown month")
def calendar_month(month_str: str | None = None, offset: int = 0):
    """Month grid with task counts per day."""
    config, all_tasks = _calendar_tasks()
    today = local_date(utcnow(), config.tzinfo)
    first = datetime.strptime(month_str, "%Y-%m").date() if month_str else today.replace(day=1)
    first = cal.shift_month(first, offset)

    click.echo(f"{first.strftime('%B')} {first.year}".center(35))
    click.echo("".join(f"{h:>5}" for h in cal.WEEKDAY_HEADERS))
    row = ""
    for i, cell in enumerate(cal.month_grid(first.year, first.month)):
        if cell is None:
            row += " " * 5
        else:
            count = len(cal.tasks_on(all_tasks, cell, config.tzinfo))
            label = f"{cell.day}{'*' if cell == today else ''}"
            row += f"{label + ('+' + str(count) if count else ''):>5}"
        if i % 7 == 6:
            click.echo(row)
            row = ""
    if row:
        click.echo(row)


@calendar.command("week")
@click.option("--date", "-d", "target_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def calendar_week(target_date: datetime | None = None):
    """Tasks for each day of the week (Monday to Sunday)."""
    config, all_tasks = _calendar_tasks()
    now = utcnow()
    day = target_date.date() if target_date else local_date(now, config.tzinfo)
    for i, d in enumerate(cal.week_of(day)):
        if i:
            click.echo()
        _show_day(config, all_tasks, d, now)


@calendar.command("day")
@click.option("--date", "-d", "target_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def calendar_day(target_date: datetime | None = None):
    """Tasks due on one day, earliest first."""
    config, all_tasks = _calendar_tasks()
    now = utcnow()
    day = target_date.date() if target_date else local_date(now, config.tzinfo)
    _show_day(config, all_tasks, day, now)


# ============== Categories ==============


@main.group(invoke_without_command=True)
@click.pass_context
def categories(ctx):
    """Manage task types."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(categories_list)


def _find_category(items: list[Category], ref: str) -> Category:
    match = _match_category(items, ref)
    if match is not None:
        return match
    _fail(f"No task type matching {ref!r}")


@categories.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive types")
def categories_list(show_all: bool = False):
    """List task types."""
    try:
        items = get_store(load_config()).fetch_categories(active_only=False)
    except (AuthenticationError, StoreError) as e:
        _fail(str(e))
    if not show_all:
        items = active_only(items)
    if not items:
        click.echo("No task types yet.")
        return
    for c in items:
        state = "" if c.is_active else " (inactive)"
        click.echo(f"{c.id[:8]} {c.color} {c.name}{state}")


@categories.command("add")
@click.argument("name")
@click.option("--color", default=DEFAULT_COLORS[0], show_default=True)
@click.option("--description", "-d", default=None)
def categories_add(name: str, color: str, description: str | None):
    """Create a task type."""
    try:
        category = get_store(load_config()).create_category(category_payload(name, color, description))
    except ValidationError as e:
        _fail(str(e))
    except (AuthenticationError, StoreError) as e:
        _fail(f"Failed to save task type: {e}")
    click.echo(f"Task type created: {category.name}")


@categories.command("toggle")
@click.argument("ref")
def categories_toggle(ref: str):
    """Activate or deactivate a task type."""
    try:
        store = get_store(load_config())
        category = toggle_status(_find_category(store.fetch_categories(active_only=False), ref))
        store.update_category(category.id, {"status": category.status.value})
    except (AuthenticationError, StoreError) as e:
        _fail(f"Failed to update status: {e}")
    click.echo(f"Type {'activated' if category.is_active else 'deactivated'}.")


# ============== Projects ==============


@main.group(invoke_without_command=True)
@click.pass_context
def projects(ctx):
    """Manage projects."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(projects_list)


@projects.command("list")
@click.option("--search", "-s", default="")
@click.option("--status", type=PROJECT_STATUS_CHOICES, default=None, help="Archived are hidden unless selected")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def projects_list(search: str = "", status: str | None = None, as_json: bool = False):
    """List projects with progress."""
    try:
        items = get_store(load_config()).fetch_projects()
    except (AuthenticationError, StoreError) as e:
        _fail(str(e))
    items = filter_projects(items, search, ProjectStatus(status) if status else None)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "id": p.id,
                        "name": p.name,
                        "status": p.status.value,
                        "start_date": p.start_date.isoformat() if p.start_date else None,
                        "target_end_date": p.target_end_date.isoformat() if p.target_end_date else None,
                        "completed": p.completed_count,
                        "total": p.task_count,
                        "progress": p.progress,
                    }
                    for p in items
                ],
                indent=2,
            )
        )
        return

    if not items:
        click.echo("No projects found.")
        return
    for p in items:
        plural = "s" if p.task_count != 1 else ""
        click.echo(f"{p.id[:8]} {p.name} [{p.status.value}] {p.progress}% "
                   f"({p.completed_count} of {p.task_count} task{plural} completed)")


@projects.command("add")
@click.argument("name")
@click.option("--category", "-c", default=None, help="Task type id or name (required)")
@click.option("--description", "-d", default=None)
@click.option("--status", type=PROJECT_STATUS_CHOICES, default=ProjectStatus.ACTIVE.value)
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--target-end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def projects_add(name: str, category: str | None, description: str | None, status: str,
                 start: datetime | None, target_end: datetime | None):
    """Create a project."""
    try:
        payload = project_payload(
            name,
            category,
            description,
            ProjectStatus(status),
            start.date() if start else None,
            target_end.date() if target_end else None,
        )
    except ValidationError as e:
        _fail(str(e))

    try:
        store = get_store(load_config())
        payload["type_id"] = _resolve_category(store, category)
        project = store.create_project(payload)
    except (AuthenticationError, StoreError) as e:
        _fail(f"Failed to create project: {e}")
    click.echo(f"Project created: {project.name}")


@projects.command("set-status")
@click.argument("project_id")
@click.argument("status", type=PROJECT_STATUS_CHOICES)
def projects_set_status(project_id: str, status: str):
    """Change a project's status."""
    try:
        get_store(load_config()).update_project(project_id, {"status": ProjectStatus(status).value})
    except (AuthenticationError, StoreError) as e:
        _fail(f"Failed to update project status: {e}")
    click.echo("Project status updated")


@projects.command("rm")
@click.argument("project_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def projects_rm(project_id: str, yes: bool):
    """Delete a project."""
    if not yes and not click.confirm("Are you sure you want to delete this project?"):
        return
    try:
        get_store(load_config()).delete_project(project_id)
    except (AuthenticationError, StoreError) as e:
        _fail(f"Failed to delete project: {e}")
    click.echo("Project deleted")


if __name__ == "__main__":
    main()
