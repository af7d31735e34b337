"""
Integration tests for task API endpoints.
Tests status codes, response shapes and the end-to-end CRUD flow.
"""
import json
from datetime import timedelta
from unittest import mock
from uuid import uuid4

from django.db import DatabaseError
from django.test import TestCase, Client
from django.utils import timezone

from apps.tasks.models import Task


class TaskAPITest(TestCase):
    """Test the /api/tasks endpoints."""

    def setUp(self):
        self.client = Client()

    def _post(self, payload):
        return self.client.post(
            '/api/tasks',
            data=json.dumps(payload),
            content_type='application/json',
        )

    def _put(self, task_id, payload):
        return self.client.put(
            f'/api/tasks/{task_id}',
            data=json.dumps(payload),
            content_type='application/json',
        )

    def test_health(self):
        response = self.client.get('/api/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_crud_scenario(self):
        """Create, reject duplicate, update status, delete, then 404."""
        response = self._post({"title": "Write report"})
        self.assertEqual(response.status_code, 201)
        created = response.json()
        self.assertEqual(created['title'], "Write report")
        self.assertEqual(created['status'], "pending")
        self.assertEqual(created['description'], "")
        self.assertEqual(
            set(created),
            {"id", "title", "description", "status", "createdAt", "updatedAt"},
        )

        response = self._post({"title": "write report"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "A task with this title already exists."})
        self.assertEqual(Task.objects.count(), 1)

        response = self._put(created['id'], {"status": "completed"})
        self.assertEqual(response.status_code, 200)
        updated = response.json()
        self.assertEqual(updated['title'], "Write report")
        self.assertEqual(updated['status'], "completed")
        self.assertEqual(updated['createdAt'], created['createdAt'])

        response = self.client.delete(f"/api/tasks/{created['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertIn('message', response.json())

        response = self.client.get(f"/api/tasks/{created['id']}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Task not found"})

    def test_list_tasks_newest_first(self):
        ids = [self._post({"title": title}).json()["id"] for title in ("One", "Two", "Three")]
        now = timezone.now()
        # Oldest first in ids; spread them out so ordering is unambiguous
        for minutes_ago, task_id in zip((5, 3, 1), ids):
            Task.objects.filter(id=task_id).update(created_at=now - timedelta(minutes=minutes_ago))

        response = self.client.get('/api/tasks')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([task["title"] for task in data], ["Three", "Two", "One"])
        self.assertEqual([task["id"] for task in data], list(reversed(ids)))

    def test_create_requires_title(self):
        for payload in ({}, {"title": ""}, {"title": "   "}, {"title": 7}):
            response = self._post(payload)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {"message": "Title is required"})
        self.assertEqual(Task.objects.count(), 0)

    def test_create_rejects_unknown_status(self):
        response = self._post({"title": "Plan", "status": "blocked"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid status", response.json()['message'])

    def test_create_rejects_non_object_body(self):
        response = self.client.post('/api/tasks', data='["Plan"]', content_type='application/json')
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/api/tasks', data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Request body must be valid JSON"})

    def test_get_malformed_id_is_not_found(self):
        response = self.client.get('/api/tasks/not-a-real-id')
        self.assertEqual(response.status_code, 404)

    def test_update_ignores_wrong_types(self):
        task_id = self._post({"title": "Plan", "description": "keep"}).json()['id']
        response = self._put(task_id, {"title": None, "description": 5, "status": "in-progress"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['title'], "Plan")
        self.assertEqual(data['description'], "keep")
        self.assertEqual(data['status'], "in-progress")

    def test_update_duplicate_title(self):
        first = self._post({"title": "Alpha"}).json()
        self._post({"title": "Beta"})

        response = self._put(first['id'], {"title": "BETA"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], "A task with this title already exists.")

    def test_update_missing_task(self):
        response = self._put(uuid4(), {"status": "completed"})
        self.assertEqual(response.status_code, 404)

    def test_delete_missing_task(self):
        response = self.client.delete(f'/api/tasks/{uuid4()}')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Task not found"})

    def test_store_failure_returns_generic_message(self):
        with mock.patch.object(Task.objects, 'order_by', side_effect=DatabaseError("disk I/O error")):
            response = self.client.get('/api/tasks')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Server error while fetching tasks"})
        self.assertNotIn("disk", response.content.decode())

    def test_update_unknown_task_with_bad_fields_is_not_found(self):
        response = self._put(uuid4(), {"title": "", "status": "bogus"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Task not found"})
