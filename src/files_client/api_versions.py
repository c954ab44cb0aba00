"""Versioned API root paths."""
from files_client.config.settings import get_settings


def get_version_number() -> str:
    """Return the configured API version segment, e.g. ``v62.0``."""
    return get_settings().api_version


def get_base_path() -> str:
    """Return the versioned API root, e.g. ``/services/data/v62.0``."""
    settings = get_settings()
    return f"{settings.services_path}/{settings.api_version}"


def get_base_sobject_path() -> str:
    """Return the sObject collection root, with a trailing slash."""
    return f"{get_base_path()}/sobjects/"


def get_base_connect_path() -> str:
    return f"{get_base_path()}/connect"
