"""HTTP client for the task API."""
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Cannot reach the task API. Check that the server is running."


class ApiError(Exception):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiUnavailableError(ApiError):
    """The request never got an answer (connection refused, timeout)."""

    def __init__(self, message: str = UNREACHABLE_MESSAGE):
        super().__init__(message)


class TaskApiClient:
    """
    Thin wrapper over the /api endpoints.

    Task payloads are returned as the plain dicts the API sends. Every
    failure is raised as ApiError carrying the server's `message` field.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def health(self) -> dict:
        return self._request("GET", "/health", fallback="Health check failed")

    def list_tasks(self) -> list:
        return self._request("GET", "/tasks", fallback="Failed to load tasks")

    def get_task(self, task_id: str) -> dict:
        return self._request("GET", f"/tasks/{task_id}", fallback="Failed to load task")

    def create_task(self, title: str, description: str = "", status: str = "pending") -> dict:
        payload = {"title": title, "description": description, "status": status}
        return self._request("POST", "/tasks", json=payload, fallback="Request failed")

    def update_task(self, task_id: str, **changes) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=changes, fallback="Request failed")

    def delete_task(self, task_id: str) -> dict:
        return self._request("DELETE", f"/tasks/{task_id}", fallback="Delete failed")

    def _request(self, method: str, path: str, fallback: str, json: Any = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {path} unreachable: {e}")
            raise ApiUnavailableError()
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiUnavailableError()

        if response.is_success:
            try:
                return response.json()
            except ValueError:
                logger.warning(f"{method} {path} -> {response.status_code}: body is not JSON")
                raise ApiError(fallback, status_code=response.status_code)

        message = _error_message(response) or fallback
        logger.info(f"{method} {path} -> {response.status_code}: {message}")
        raise ApiError(message, status_code=response.status_code)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
