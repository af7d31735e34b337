from django.core.management.base import BaseCommand
from apps.tasks.errors import TaskConflictError
from apps.tasks.models import Task, TaskStatus
from apps.tasks.services import create_task

SAMPLE_TASKS = [
    ("Prepare weekly status report", "Summarize progress, risks and next steps.", TaskStatus.PENDING),
    ("Review open pull requests", "Focus on anything older than two days.", TaskStatus.IN_PROGRESS),
    ("Update onboarding checklist", "", TaskStatus.PENDING),
    ("Rotate staging credentials", "Coordinate with ops before the release window.", TaskStatus.COMPLETED),
    ("Plan sprint retrospective", "Collect topics from the team board.", TaskStatus.IN_PROGRESS),
]


class Command(BaseCommand):
    help = 'Seeds the database with sample tasks.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing tasks before seeding',
        )

    def handle(self, *args, **options):
        if options['clean']:
            self.stdout.write(self.style.WARNING('Deleting existing tasks...'))
            deleted, _ = Task.objects.all().delete()
            self.stdout.write(f'Deleted {deleted} tasks.')

        created = 0
        for title, description, status in SAMPLE_TASKS:
            try:
                create_task(title, description=description, status=status.value)
                created += 1
            except TaskConflictError:
                self.stdout.write(f'Skipping existing task: {title}')

        self.stdout.write(self.style.SUCCESS(f'Seeded {created} tasks.'))
