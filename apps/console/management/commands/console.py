from django.conf import settings
from django.core.management.base import BaseCommand
from rich.console import Console

from apps.console.client import TaskApiClient
from apps.console.commands import HELP_TEXT, CommandError, execute
from apps.console.render import render
from apps.console.state import TaskConsole


class Command(BaseCommand):
    help = 'Interactive task console backed by the task API.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--api-url',
            default=settings.TASKORA_API_URL,
            help='Base URL of the task API (default: TASKORA_API_URL)',
        )
        parser.add_argument(
            '--timeout',
            type=float,
            default=settings.TASKORA_API_TIMEOUT,
            help='HTTP timeout in seconds',
        )

    def handle(self, *args, **options):
        screen = Console()

        with TaskApiClient(options['api_url'], timeout=options['timeout']) as api:
            console = TaskConsole(api)
            console.load()

            running = True
            while running:
                screen.clear()
                screen.print(render(console))
                try:
                    line = screen.input("[bold]> [/bold]")
                    if line.strip().lower() in ('help', '?'):
                        screen.print(HELP_TEXT)
                        screen.input("[dim]Press Enter to continue[/dim]")
                        continue
                except (EOFError, KeyboardInterrupt):
                    break

                try:
                    running = execute(console, line)
                except CommandError as e:
                    console.state.error = str(e)

        self.stdout.write(self.style.SUCCESS('Bye.'))
