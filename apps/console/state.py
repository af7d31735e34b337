"""
View-model for the task console.

TaskConsole owns everything the screen shows: the fetched tasks, the active
filter and search text, the shared create/edit form, the error banner and
the transient notice. Callers change it only through its methods; filtering
never touches the network, mutations always re-fetch the whole list.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .client import ApiError, TaskApiClient

logger = logging.getLogger(__name__)

STATUSES = ("pending", "in-progress", "completed")
FILTERS = ("all",) + STATUSES

NOTICE_SECONDS = 2.2

LOAD_ERROR = "Unable to load tasks. Ensure the API server is reachable."
TITLE_REQUIRED = "Title is required."
DUPLICATE_TITLE = "A task with this title already exists."


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    status: str = "pending"


@dataclass
class ConsoleState:
    tasks: List[dict] = field(default_factory=list)
    loading: bool = False
    initial_loading: bool = True
    saving: bool = False
    error: str = ""
    filter_status: str = "all"
    search: str = ""
    form: TaskForm = field(default_factory=TaskForm)
    editing_id: Optional[str] = None
    theme: str = "light"
    notice: str = ""
    notice_expires_at: float = 0.0

    @property
    def mode(self) -> str:
        return "edit" if self.editing_id else "create"


def _normalize(title: str) -> str:
    return (title or "").strip().lower()


def filter_tasks(tasks: List[dict], status: str = "all", search: str = "") -> List[dict]:
    """Apply the status filter and the search text together."""
    needle = (search or "").strip().lower()
    visible = []
    for task in tasks:
        if status != "all" and task.get("status") != status:
            continue
        if needle:
            title = (task.get("title") or "").lower()
            description = (task.get("description") or "").lower()
            if needle not in title and needle not in description:
                continue
        visible.append(task)
    return visible


class TaskConsole:
    def __init__(self, api: TaskApiClient, clock: Callable[[], float] = time.monotonic):
        self.api = api
        self.clock = clock
        self.state = ConsoleState()

    # -- collection ---------------------------------------------------------

    def load(self) -> bool:
        """Fetch the full list. Returns False and sets the banner on failure."""
        state = self.state
        state.loading = True
        state.error = ""
        try:
            state.tasks = self.api.list_tasks()
            return True
        except ApiError as e:
            logger.warning(f"Loading tasks failed: {e.message}")
            state.error = LOAD_ERROR
            return False
        finally:
            state.loading = False
            state.initial_loading = False

    def visible_tasks(self) -> List[dict]:
        return filter_tasks(self.state.tasks, self.state.filter_status, self.state.search)

    def counts(self) -> dict:
        counts = {status: 0 for status in STATUSES}
        for task in self.state.tasks:
            if task.get("status") in counts:
                counts[task["status"]] += 1
        return counts

    def summary(self) -> str:
        total = len(self.state.tasks)
        if self.state.initial_loading or self.state.loading:
            return "Loading tasks from API..."
        if total == 0:
            return "No tasks yet. Start by adding one."
        return f"Showing {len(self.visible_tasks())} of {total} tasks."

    def find_task(self, task_id: str) -> Optional[dict]:
        for task in self.state.tasks:
            if task.get("id") == task_id:
                return task
        return None

    # -- filters ------------------------------------------------------------

    def set_filter(self, status: str) -> None:
        if status not in FILTERS:
            raise ValueError(f"Unknown filter '{status}'. Choose from: {', '.join(FILTERS)}")
        self.state.filter_status = status

    def set_search(self, text: str) -> None:
        self.state.search = text or ""

    def toggle_theme(self) -> str:
        self.state.theme = "dark" if self.state.theme == "light" else "light"
        return self.state.theme

    # -- form ---------------------------------------------------------------

    def update_form(self, title: str = None, description: str = None, status: str = None) -> None:
        form = self.state.form
        if title is not None:
            form.title = title
        if description is not None:
            form.description = description
        if status is not None:
            if status not in STATUSES:
                raise ValueError(f"Unknown status '{status}'. Choose from: {', '.join(STATUSES)}")
            form.status = status

    def start_edit(self, task: dict) -> None:
        self.state.editing_id = task["id"]
        self.state.form = TaskForm(
            title=task.get("title") or "",
            description=task.get("description") or "",
            status=task.get("status") or "pending",
        )

    def reset_form(self) -> None:
        self.state.form = TaskForm()
        self.state.editing_id = None

    def has_duplicate_title(self, title: str) -> bool:
        """Advisory check against the loaded list; the server has the final say."""
        wanted = _normalize(title)
        for task in self.state.tasks:
            if self.state.editing_id and task.get("id") == self.state.editing_id:
                continue
            if _normalize(task.get("title")) == wanted:
                return True
        return False

    # -- mutations ----------------------------------------------------------

    def submit(self) -> bool:
        """
        Save the form: update in edit mode, create otherwise.

        Returns True when the save went through. Refuses to start while a
        previous save is still in flight.
        """
        state = self.state
        if state.saving or state.initial_loading:
            return False

        form = state.form
        if not form.title.strip():
            state.error = TITLE_REQUIRED
            return False
        if self.has_duplicate_title(form.title):
            state.error = DUPLICATE_TITLE
            return False

        editing = state.mode == "edit"
        payload = {
            "title": form.title.strip(),
            "description": form.description.strip(),
            "status": form.status,
        }

        state.saving = True
        state.error = ""
        try:
            if editing:
                self.api.update_task(state.editing_id, **payload)
            else:
                self.api.create_task(**payload)
            self.load()
            self._notify("Task updated" if editing else "Task created")
            self.reset_form()
            return True
        except ApiError as e:
            state.error = e.message or "Failed to save task"
            return False
        finally:
            state.saving = False

    def delete(self, task: dict) -> bool:
        state = self.state
        if state.saving:
            return False

        state.saving = True
        state.error = ""
        try:
            self.api.delete_task(task["id"])
            self.load()
            self._notify("Task deleted")
            if state.editing_id == task["id"]:
                self.reset_form()
            return True
        except ApiError as e:
            state.error = e.message or "Failed to delete task"
            return False
        finally:
            state.saving = False

    # -- notices ------------------------------------------------------------

    def _notify(self, message: str) -> None:
        self.state.notice = message
        self.state.notice_expires_at = self.clock() + NOTICE_SECONDS

    def current_notice(self) -> str:
        """The notice text, or "" once its display window has passed."""
        if self.state.notice and self.clock() >= self.state.notice_expires_at:
            self.state.notice = ""
        return self.state.notice
