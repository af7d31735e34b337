"""
Tests for TaskApiClient.

ClientErrorHandlingTest stubs the HTTP layer with httpx.MockTransport.
ClientAgainstAPITest routes the client's requests through Django's test
client so the console talks to the real endpoints and database.
"""
import json

import httpx
from django.test import Client, SimpleTestCase, TestCase

from apps.console.client import ApiError, ApiUnavailableError, TaskApiClient
from apps.console.state import TaskConsole


def stub_client(handler):
    return TaskApiClient("http://api.test/api", transport=httpx.MockTransport(handler))


class ClientErrorHandlingTest(SimpleTestCase):

    def test_message_extracted_from_error_body(self):
        def handler(request):
            return httpx.Response(400, json={"message": "A task with this title already exists."})

        with stub_client(handler) as api:
            with self.assertRaises(ApiError) as ctx:
                api.create_task("Dup")
        self.assertEqual(ctx.exception.message, "A task with this title already exists.")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_fallback_message_when_body_is_not_json(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        with stub_client(handler) as api:
            with self.assertRaises(ApiError) as ctx:
                api.delete_task("abc")
        self.assertEqual(ctx.exception.message, "Delete failed")

    def test_success_status_with_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>Maintenance</html>")

        with stub_client(handler) as api:
            with self.assertRaises(ApiError) as ctx:
                api.list_tasks()
            with self.assertRaises(ApiError) as ctx_create:
                api.create_task("Plan")
        self.assertEqual(ctx.exception.message, "Failed to load tasks")
        self.assertEqual(ctx.exception.status_code, 200)
        self.assertEqual(ctx_create.exception.message, "Request failed")

    def test_connection_failure_is_distinguished(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with stub_client(handler) as api:
            with self.assertRaises(ApiUnavailableError) as ctx:
                api.list_tasks()
        self.assertIn("Cannot reach", ctx.exception.message)

    def test_requests_shape(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, request.content))
            return httpx.Response(200, json={"id": "1"})

        with stub_client(handler) as api:
            api.update_task("1", status="completed")

        method, path, body = seen[0]
        self.assertEqual(method, "PUT")
        self.assertEqual(path, "/api/tasks/1")
        self.assertEqual(json.loads(body), {"status": "completed"})


class ClientAgainstAPITest(TestCase):

    def setUp(self):
        self.django_client = Client()
        self.api = TaskApiClient(
            "http://testserver/api",
            transport=httpx.MockTransport(self._forward),
        )

    def tearDown(self):
        self.api.close()

    def _forward(self, request: httpx.Request) -> httpx.Response:
        response = self.django_client.generic(
            request.method,
            request.url.raw_path.decode(),
            data=request.content,
            content_type="application/json",
        )
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers={"Content-Type": response.get("Content-Type", "application/json")},
        )

    def test_health(self):
        self.assertEqual(self.api.health(), {"status": "ok"})

    def test_console_round_trip(self):
        console = TaskConsole(self.api)
        self.assertTrue(console.load())
        self.assertEqual(console.state.tasks, [])

        console.update_form(title="Write report")
        self.assertTrue(console.submit())
        self.assertEqual(len(console.state.tasks), 1)
        task = console.state.tasks[0]
        self.assertEqual(task["status"], "pending")
        self.assertEqual(task["description"], "")

        console.start_edit(task)
        console.update_form(status="completed")
        self.assertTrue(console.submit())
        self.assertEqual(console.state.tasks[0]["status"], "completed")
        self.assertEqual(console.state.tasks[0]["title"], "Write report")

        self.assertTrue(console.delete(console.state.tasks[0]))
        self.assertEqual(console.state.tasks, [])

        with self.assertRaises(ApiError) as ctx:
            self.api.get_task(task["id"])
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "Task not found")

    def test_server_conflict_reaches_console(self):
        self.api.create_task("Write report")
        console = TaskConsole(self.api)
        console.state.initial_loading = False

        # Local list was never loaded, so only the server can catch it
        console.update_form(title="write REPORT")
        self.assertFalse(console.submit())
        self.assertEqual(console.state.error, "A task with this title already exists.")
