import os
from pathlib import Path
from typing import Optional, Tuple

DATA_DIR_ENV = "TASKAPP_DATA_DIR"
EMAIL_ENV = "TASKAPP_EMAIL"
PASSWORD_ENV = "TASKAPP_PASSWORD"

DEFAULT_DATA_DIR = ".taskapp"


def resolve_data_dir(cli_value: Optional[str] = None) -> Path:
    """
    Data directory holding users.json, tasks.json and logs.json:
      --dir option, else TASKAPP_DATA_DIR, else ./.taskapp
    """
    if cli_value:
        return Path(cli_value).expanduser()

    env = os.getenv(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()

    return Path(DEFAULT_DATA_DIR)


def resolve_credentials(
    email: Optional[str] = None,
    password: Optional[str] = None
) -> Tuple[str, str]:
    """Login credentials from CLI options, falling back to the environment"""
    return (
        email if email is not None else os.getenv(EMAIL_ENV, ""),
        password if password is not None else os.getenv(PASSWORD_ENV, ""),
    )
