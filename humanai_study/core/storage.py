from humanai_study.core.settings import config_settings
from humanai_study.repositories.event_repo import EventLogRepository


def get_event_log():
    """
    Dependency that yields the event log repository for a single request.

    The repository holds no open handles; every append and read opens the
    file for the duration of that call only.
    """
    yield EventLogRepository(config_settings.EVENTS_FILE_PATH)
