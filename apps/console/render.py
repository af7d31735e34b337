"""Rich rendering of the console view-model."""
from datetime import datetime

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .state import FILTERS, TaskConsole

FILTER_LABELS = {
    "all": "All",
    "pending": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
}

STATUS_STYLES = {
    "pending": "yellow",
    "in-progress": "blue",
    "completed": "green",
}

THEMES = {
    "light": {"border": "grey50", "accent": "bold magenta"},
    "dark": {"border": "grey35", "accent": "bold cyan"},
}


def format_date(value: str) -> str:
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%d %b %Y")


def _form_panel(console: TaskConsole, theme: dict) -> Panel:
    state = console.state
    form = state.form
    editing = state.mode == "edit"

    body = Table.grid(padding=(0, 2))
    body.add_column(style="bold")
    body.add_column()
    body.add_row("Title *", Text(form.title) if form.title else Text("e.g. Prepare weekly status report", style="dim"))
    body.add_row("Description", Text(form.description) if form.description else Text("Add context, links, and expectations...", style="dim"))
    body.add_row("Status", Text(FILTER_LABELS[form.status], style=STATUS_STYLES[form.status]))

    if state.saving:
        action = "Saving..."
    else:
        action = "save -> Update Task" if editing else "save -> Add Task"
    parts = [body, Text(action, style="dim")]
    if state.error:
        parts.append(Text(state.error, style="bold white on red"))

    title = "Update Task" if editing else "Add New Task"
    return Panel(Group(*parts), title=f"[{theme['accent']}]{title}[/]", border_style=theme["border"])


def _filter_bar(console: TaskConsole) -> Text:
    counts = console.counts()
    bar = Text()
    for status in FILTERS:
        label = FILTER_LABELS[status]
        if status != "all":
            label = f"{label} ({counts[status]})"
        style = "reverse bold" if console.state.filter_status == status else ""
        bar.append(f" {label} ", style=style)
        bar.append(" ")
    if console.state.search:
        bar.append(f"search: {console.state.search!r}", style="italic")
    return bar


def _task_table(console: TaskConsole) -> Table:
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Description")
    table.add_column("Created", no_wrap=True)

    for index, task in enumerate(console.visible_tasks(), start=1):
        status = task.get("status", "")
        marker = "* " if task.get("id") == console.state.editing_id else ""
        table.add_row(
            str(index),
            Text(f"{marker}{task.get('title', '')}"),
            Text(status.replace("-", " "), style=STATUS_STYLES.get(status, "")),
            Text(task.get("description") or ""),
            format_date(task.get("createdAt")),
        )
    return table


def _empty_state(console: TaskConsole) -> Text:
    if console.state.initial_loading:
        return Text("Connecting to your API...\nMake sure the backend server is running.", style="dim")
    return Text(
        "Nothing to show yet\nTry adjusting filters or create a new task.",
        style="dim",
    )


def render(console: TaskConsole) -> Group:
    """Build the full screen for the current state."""
    state = console.state
    theme = THEMES[state.theme]

    header = Text()
    header.append("Taskora", style=theme["accent"])
    header.append(f"   {len(state.tasks)} tasks", style="dim")

    if state.initial_loading or not console.visible_tasks():
        listing = _empty_state(console)
    else:
        listing = _task_table(console)

    tasks_panel = Panel(
        Group(Text(console.summary(), style="dim"), _filter_bar(console), listing),
        title=f"[{theme['accent']}]Tasks[/]",
        border_style=theme["border"],
    )

    parts = [header, _form_panel(console, theme), tasks_panel]
    notice = console.current_notice()
    if notice:
        parts.append(Text(f"* {notice}", style="bold green"))
    return Group(*parts)
