import atexit

from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = 'apps.core'
    label = 'core'

    def ready(self):
        # Startup must fail if the backend cannot be initialized.
        from apps.core import db_service

        db_service.init_database()
        atexit.register(db_service.shutdown_database)
