"""
URL configuration for Taskora project.
"""
import logging

from django.contrib import admin
from django.http import Http404
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError as NinjaValidationError

from apps.tasks.dtos import HealthOut
from apps.tasks.errors import TaskError

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="Taskora API",
    version="1.0.0",
    description="Task tracking API",
    docs_url="/docs",
)


# =============================================================================
# Error responses
# =============================================================================
# Every failure is rendered as {"message": ...} so clients read one field.

@api.exception_handler(TaskError)
def handle_task_error(request, exc: TaskError):
    return api.create_response(request, {"message": exc.message}, status=exc.status_code)


@api.exception_handler(HttpError)
def handle_http_error(request, exc: HttpError):
    return api.create_response(request, {"message": str(exc)}, status=exc.status_code)


@api.exception_handler(Http404)
def handle_not_found(request, exc: Http404):
    return api.create_response(request, {"message": "Not found"}, status=404)


@api.exception_handler(NinjaValidationError)
def handle_validation_error(request, exc: NinjaValidationError):
    return api.create_response(request, {"message": "Invalid request"}, status=400)


@api.exception_handler(Exception)
def handle_unexpected_error(request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.path}: {exc}")
    return api.create_response(request, {"message": "Internal server error"}, status=500)


@api.get("/health", response=HealthOut, tags=["Health"])
def health(request):
    return {"status": "ok"}


from apps.tasks.api import router as tasks_router

api.add_router("/tasks", tasks_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
