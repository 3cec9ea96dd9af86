"""
Tests for the embedded (in-memory SQLite) backend.

Each test builds its own backend instance so the process-wide one is left
alone.
"""
import threading

from django.test import SimpleTestCase

from apps.core.backends.embedded_backend import EmbeddedDatabaseBackend
from apps.core.exceptions import DatabaseNotInitialized, QueryExecutionError

INSERT_TASK = (
    "INSERT INTO tasks (title, description, status, dueDateTime, createdAt, updatedAt) "
    "VALUES (?, ?, ?, ?, datetime('now'), datetime('now'))"
)


class EmbeddedBackendLifecycleTest(SimpleTestCase):

    def test_execute_before_initialize_raises(self):
        backend = EmbeddedDatabaseBackend()
        with self.assertRaises(DatabaseNotInitialized):
            backend.execute("SELECT 1")

    def test_execute_after_shutdown_raises(self):
        backend = EmbeddedDatabaseBackend()
        backend.initialize()
        backend.shutdown()
        with self.assertRaises(DatabaseNotInitialized):
            backend.execute("SELECT 1")

    def test_execute_waiting_on_shutdown_sees_not_initialized(self):
        backend = EmbeddedDatabaseBackend()
        backend.initialize()
        errors = []

        def run_query():
            try:
                backend.execute("SELECT 1")
            except Exception as e:
                errors.append(e)

        # Hold the lock so the query queues up behind a shutdown in progress
        with backend._lock:
            worker = threading.Thread(target=run_query)
            worker.start()
            worker.join(0.1)
            backend._connection.close()
            backend._connection = None
        worker.join(5)

        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], DatabaseNotInitialized)

    def test_initialize_creates_table_and_indexes(self):
        backend = EmbeddedDatabaseBackend()
        backend.initialize()
        self.addCleanup(backend.shutdown)

        self.assertEqual(backend.list_tables(), ['tasks'])
        description = backend.describe_table('tasks')
        index_names = [index['name'] for index in description['indexes']]
        self.assertIn('idx_tasks_status', index_names)
        self.assertIn('idx_tasks_dueDateTime', index_names)

    def test_each_instance_is_private(self):
        first = EmbeddedDatabaseBackend()
        second = EmbeddedDatabaseBackend()
        first.initialize()
        second.initialize()
        self.addCleanup(first.shutdown)
        self.addCleanup(second.shutdown)

        first.execute(INSERT_TASK, ['A', None, 'TODO', '2025-01-01T00:00:00Z'])

        self.assertEqual(first.execute("SELECT * FROM tasks").row_count, 1)
        self.assertEqual(second.execute("SELECT * FROM tasks").row_count, 0)


class EmbeddedBackendExecuteTest(SimpleTestCase):

    def setUp(self):
        self.backend = EmbeddedDatabaseBackend()
        self.backend.initialize()
        self.addCleanup(self.backend.shutdown)

    def test_insert_reports_last_insert_id(self):
        first = self.backend.execute(INSERT_TASK, ['A', None, 'TODO', '2025-01-01T00:00:00Z'])
        second = self.backend.execute(INSERT_TASK, ['B', 'desc', 'TODO', '2025-01-02T00:00:00Z'])

        self.assertEqual(first.row_count, 1)
        self.assertEqual(first.rows, [])
        self.assertIsNotNone(first.last_insert_id)
        self.assertEqual(second.last_insert_id, first.last_insert_id + 1)

        lookup = self.backend.execute("SELECT title FROM tasks WHERE id = ?", [second.last_insert_id])
        self.assertEqual(lookup.rows, [{'title': 'B'}])

    def test_lowercase_insert_is_classified(self):
        result = self.backend.execute(
            "  insert into tasks (title, status, dueDateTime) values (?, ?, ?)",
            ['A', 'TODO', '2025-01-01T00:00:00Z'],
        )
        self.assertIsNotNone(result.last_insert_id)

    def test_select_keeps_column_and_row_order(self):
        for title in ('first', 'second', 'third'):
            self.backend.execute(INSERT_TASK, [title, None, 'TODO', '2025-01-01T00:00:00Z'])

        result = self.backend.execute("SELECT status, title, id FROM tasks ORDER BY id DESC")

        self.assertEqual(result.row_count, 3)
        self.assertEqual([row['title'] for row in result.rows], ['third', 'second', 'first'])
        self.assertEqual(list(result.rows[0].keys()), ['status', 'title', 'id'])
        self.assertIsNone(result.last_insert_id)

    def test_update_and_delete_report_affected_rows(self):
        self.backend.execute(INSERT_TASK, ['A', None, 'TODO', '2025-01-01T00:00:00Z'])
        self.backend.execute(INSERT_TASK, ['B', None, 'TODO', '2025-01-01T00:00:00Z'])

        updated = self.backend.execute("UPDATE tasks SET status = ?", ['COMPLETED'])
        self.assertEqual(updated.row_count, 2)

        deleted = self.backend.execute("DELETE FROM tasks WHERE title = ?", ['A'])
        self.assertEqual(deleted.row_count, 1)

        missing = self.backend.execute("DELETE FROM tasks WHERE id = ?", [9999])
        self.assertEqual(missing.row_count, 0)

    def test_pragma_is_row_producing(self):
        result = self.backend.execute("PRAGMA table_info(tasks)")
        names = [row['name'] for row in result.rows]
        self.assertEqual(
            names,
            ['id', 'title', 'description', 'status', 'dueDateTime', 'createdAt', 'updatedAt'],
        )

    def test_syntax_error_passes_backend_message(self):
        with self.assertRaises(QueryExecutionError) as ctx:
            self.backend.execute("SELEC * FROM tasks")
        self.assertIn('syntax error', ctx.exception.message)

    def test_unknown_table_passes_backend_message(self):
        with self.assertRaises(QueryExecutionError) as ctx:
            self.backend.execute("SELECT * FROM nope")
        self.assertIn('no such table', ctx.exception.message)

    def test_check_constraint_violation(self):
        with self.assertRaises(QueryExecutionError) as ctx:
            self.backend.execute(INSERT_TASK, ['A', None, 'BOGUS', '2025-01-01T00:00:00Z'])
        self.assertIn('CHECK constraint failed', ctx.exception.message)

    def test_multiple_statements_are_refused(self):
        with self.assertRaises(QueryExecutionError):
            self.backend.execute("SELECT * FROM tasks; DROP TABLE tasks; --")
        self.assertEqual(self.backend.list_tables(), ['tasks'])

    def test_table_exists_is_exact_match(self):
        self.assertTrue(self.backend.table_exists('tasks'))
        self.assertFalse(self.backend.table_exists('TASKS'))
        self.assertFalse(self.backend.table_exists('nope'))
