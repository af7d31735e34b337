"""
Task API endpoints.

Provides CRUD operations for tasks. Request bodies are read as raw JSON so
the services can apply the title and status rules themselves.
"""
import json
from typing import List

from django.http import HttpRequest
from ninja import Router

from .dtos import TaskOut, MessageOut
from .errors import TaskValidationError
from .services import list_tasks, get_task, create_task, update_task, delete_task

router = Router(tags=["Tasks"])


def _json_body(request: HttpRequest) -> dict:
    """Decode the request body as a JSON object. An empty body is `{}`."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise TaskValidationError("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise TaskValidationError("Request body must be a JSON object")
    return data


@router.get("", response=List[TaskOut])
def list_tasks_api(request: HttpRequest):
    """
    List all tasks, newest first.

    Filtering and search are left to the client.
    """
    return list_tasks()


@router.get("/{task_id}", response={200: TaskOut, 404: MessageOut})
def get_task_api(request: HttpRequest, task_id: str):
    return get_task(task_id)


@router.post("", response={201: TaskOut, 400: MessageOut})
def create_task_api(request: HttpRequest):
    """
    Create a task.

    - title is required and must be unique, ignoring case
    - description defaults to an empty string
    - status defaults to pending
    """
    payload = _json_body(request)
    task = create_task(
        payload.get("title"),
        description=payload.get("description"),
        status=payload.get("status"),
    )
    return 201, task


@router.put("/{task_id}", response={200: TaskOut, 400: MessageOut, 404: MessageOut})
def update_task_api(request: HttpRequest, task_id: str):
    """
    Partially update a task.

    Fields that are absent or not strings are ignored.
    """
    return update_task(task_id, _json_body(request))


@router.delete("/{task_id}", response={200: MessageOut, 404: MessageOut})
def delete_task_api(request: HttpRequest, task_id: str):
    delete_task(task_id)
    return {"message": "Task deleted successfully"}
