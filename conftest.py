import pytest


@pytest.fixture(scope='session', autouse=True)
def database_backend():
    """Close the process-wide backend while pytest still captures its logging."""
    from apps.core import db_service

    yield db_service.wait_for_backend(timeout=5)
    # Leaves nothing for the atexit hook registered by CoreConfig.ready()
    db_service.shutdown_database()
