"""
Tasks app - the task store.

Owns the Task model, the service functions that enforce the title rules,
and the REST endpoints mounted under /api/tasks.
"""
