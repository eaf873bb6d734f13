from pathlib import Path

from platformdirs import user_config_path


def user_config_file(app_name: str, filename: str) -> Path:
    """Return ``filename`` inside the per-user config directory of ``app_name``.

    The directory is not created; :func:`configfile.store` creates it on
    first write.

    Args:
        app_name: Application name used for the directory
            (e.g. ``~/.config/<app_name>`` on Linux).
        filename: File name including its extension, which selects the
            format.
    """
    return user_config_path(app_name, appauthor=False) / filename
