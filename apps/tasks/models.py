import uuid
from django.db import models


class TaskStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETED = 'completed', 'Completed'


def title_key_for(title: str) -> str:
    """Comparison key for titles: trimmed and lower-cased in Python, not SQL."""
    return (title or '').strip().lower()


class Task(models.Model):
    """
    A unit of work tracked by the console.
    Titles are unique regardless of case. SQLite's LOWER() and LIKE only fold
    ASCII, so uniqueness is enforced on title_key instead of the title itself.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    # Lower-casing can lengthen a string ('İ' -> 'i̇')
    title_key = models.CharField(max_length=510, unique=True, editable=False)
    description = models.TextField(blank=True, default='')
    status = models.CharField(
        max_length=20,
        choices=TaskStatus.choices,
        default=TaskStatus.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        self.title_key = title_key_for(self.title)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title
