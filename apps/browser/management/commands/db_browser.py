import json

from django.core.management.base import BaseCommand, CommandError

from apps.browser import services
from apps.browser.gate import QueryRejected
from apps.core.exceptions import OperationNotPermitted, QueryExecutionError


class Command(BaseCommand):
    help = 'Inspect the tasks database: schema, stats, table rows, read-only queries, clear.'

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group(required=True)
        group.add_argument(
            '--schema',
            action='store_true',
            help='Print tables with their columns and indexes',
        )
        group.add_argument(
            '--stats',
            action='store_true',
            help='Print the row count of every table',
        )
        group.add_argument(
            '--table',
            metavar='NAME',
            help='Print every row of a table',
        )
        group.add_argument(
            '--query',
            metavar='SQL',
            help='Run a SELECT or PRAGMA statement',
        )
        group.add_argument(
            '--clear',
            action='store_true',
            help='Delete all rows from every table (not available in production)',
        )

    def handle(self, *args, **options):
        if options['schema']:
            schema = services.get_schema()
            self._dump({
                'tables': schema.tables,
                'schema': {
                    name: {'columns': table.columns, 'indexes': table.indexes}
                    for name, table in schema.schema.items()
                },
            })

        elif options['stats']:
            stats = services.get_stats()
            self._dump({
                'tableCount': stats.table_count,
                'tables': {name: {'rowCount': count} for name, count in stats.tables.items()},
            })

        elif options['table']:
            data = services.get_table_data(options['table'])
            if data is None:
                raise CommandError(f"Table not found: {options['table']}")
            self._dump({'table': data.table, 'rowCount': data.row_count, 'data': data.rows})

        elif options['query']:
            try:
                result = services.run_query(options['query'])
            except QueryRejected as e:
                raise CommandError(e.reason)
            except QueryExecutionError as e:
                raise CommandError(f"Query execution failed: {e.message}")
            self._dump({'rowCount': result.row_count, 'data': result.rows})

        elif options['clear']:
            try:
                cleared = services.clear_database()
            except OperationNotPermitted as e:
                raise CommandError(str(e))
            self.stdout.write(self.style.SUCCESS(
                f"Database cleared successfully: {', '.join(cleared) or 'no tables'}"
            ))

    def _dump(self, payload):
        self.stdout.write(json.dumps(payload, indent=2, default=str))
