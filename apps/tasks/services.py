"""
Task store services.

All title and status rules live here so the API handlers and the seed
command share them. Every function raises a TaskError subclass on failure.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional
from uuid import UUID

from django.db import DatabaseError, IntegrityError, transaction

from .errors import (
    TaskConflictError,
    TaskNotFoundError,
    TaskStoreError,
    TaskValidationError,
)
from .models import Task, TaskStatus, title_key_for

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('title', 'description', 'status')
TITLE_MAX_LENGTH = Task._meta.get_field('title').max_length


@contextmanager
def _store_errors(action: str):
    """Translate database failures into TaskStoreError for `action`."""
    try:
        yield
    except IntegrityError:
        # Only the unique title_key can fire here
        logger.warning(f"Title constraint rejected write while {action}")
        raise TaskConflictError()
    except DatabaseError as e:
        logger.exception(f"Error {action}: {e}")
        raise TaskStoreError(f"Server error while {action}")


def normalize_title(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise TaskValidationError("Title is required")
    title = value.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise TaskValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def normalize_status(value, default=TaskStatus.PENDING.value) -> str:
    if (value is None or value == "") and default is not None:
        return default
    if value not in TaskStatus.values:
        allowed = ", ".join(TaskStatus.values)
        raise TaskValidationError(f"Invalid status '{value}'. Allowed: {allowed}")
    return value


def _parse_id(task_id) -> Optional[UUID]:
    if isinstance(task_id, UUID):
        return task_id
    try:
        return UUID(str(task_id))
    except ValueError:
        return None


def title_taken(title: str, exclude_id: Optional[UUID] = None) -> bool:
    """Case-insensitive check for another task using `title`."""
    queryset = Task.objects.filter(title_key=title_key_for(title))
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def list_tasks() -> List[Task]:
    """All tasks, newest first."""
    with _store_errors("fetching tasks"):
        return list(Task.objects.order_by('-created_at'))


def get_task(task_id) -> Task:
    pk = _parse_id(task_id)
    if pk is None:
        raise TaskNotFoundError()

    with _store_errors("fetching task"):
        try:
            return Task.objects.get(id=pk)
        except Task.DoesNotExist:
            raise TaskNotFoundError()


def create_task(title, description=None, status=None) -> Task:
    """
    Create a task from raw request values.

    The title is required and trimmed, the description defaults to an empty
    string and the status to pending.
    """
    clean_title = normalize_title(title)
    clean_status = normalize_status(status)
    clean_description = description.strip() if isinstance(description, str) else ""

    with _store_errors("creating task"):
        with transaction.atomic():
            if title_taken(clean_title):
                raise TaskConflictError()
            task = Task.objects.create(
                title=clean_title,
                description=clean_description,
                status=clean_status,
            )

    logger.info(f"Created task {task.id} '{task.title}'")
    return task


def update_task(task_id, changes: dict) -> Task:
    """
    Apply a partial update.

    Only title, description and status keys holding strings are applied;
    anything else in `changes` is ignored. A new title is checked against
    every other task.
    """
    updates = {
        field: value
        for field, value in (changes or {}).items()
        if field in UPDATABLE_FIELDS and isinstance(value, str)
    }

    pk = _parse_id(task_id)
    if pk is None:
        raise TaskNotFoundError()

    with _store_errors("updating task"):
        with transaction.atomic():
            try:
                task = Task.objects.select_for_update().get(id=pk)
            except Task.DoesNotExist:
                raise TaskNotFoundError()

            # An unknown id is reported before any field errors
            if 'title' in updates:
                updates['title'] = normalize_title(updates['title'])
            if 'description' in updates:
                updates['description'] = updates['description'].strip()
            if 'status' in updates:
                updates['status'] = normalize_status(updates['status'], default=None)

            if 'title' in updates and title_taken(updates['title'], exclude_id=task.id):
                raise TaskConflictError()

            for attr, value in updates.items():
                setattr(task, attr, value)
            # updated_at is refreshed even when nothing changed
            task.save()

    logger.info(f"Updated task {task.id} fields={sorted(updates)}")
    return task


def delete_task(task_id) -> None:
    pk = _parse_id(task_id)
    if pk is None:
        raise TaskNotFoundError()

    with _store_errors("deleting task"):
        deleted, _ = Task.objects.filter(id=pk).delete()

    if not deleted:
        raise TaskNotFoundError()
    logger.info(f"Deleted task {pk}")
