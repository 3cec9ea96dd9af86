from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.tasks import services
from apps.tasks.models import TaskStatus
from apps.tasks.schemas import TaskIn


SAMPLE_TITLES = [
    'Write project brief',
    'Review pull requests',
    'Plan sprint backlog',
    'Update dependencies',
    'Prepare release notes',
]


class Command(BaseCommand):
    help = 'Seeds the tasks table with sample data.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing tasks before seeding',
        )
        parser.add_argument(
            '--count',
            type=int,
            default=len(SAMPLE_TITLES),
            help='Number of tasks to create',
        )

    def handle(self, *args, **options):
        if options['clean']:
            self.stdout.write(self.style.WARNING('Deleting existing tasks...'))
            services.delete_all_tasks()

        statuses = TaskStatus.values
        now = timezone.now().replace(microsecond=0)

        for i in range(options['count']):
            title = SAMPLE_TITLES[i % len(SAMPLE_TITLES)]
            if i >= len(SAMPLE_TITLES):
                title = f"{title} #{i // len(SAMPLE_TITLES) + 1}"

            task = services.create_task(TaskIn(
                title=title,
                description=f"Sample task {i + 1}",
                status=statuses[i % len(statuses)],
                dueDateTime=(now + timedelta(days=i + 1)).isoformat(),
            ))
            self.stdout.write(self.style.SUCCESS(f'Created task {task.id}: {task.title} ({task.status})'))

        self.stdout.write(self.style.SUCCESS(f"Seeded {options['count']} tasks."))
