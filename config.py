"""Shared constants and source configuration for the OEP index.

Values come from environment variables first, then the settings file
(~/.config/oep-index/settings.json), then the defaults below.
"""

import json
import logging
import os

from services.loader import Fixtures, LocalDirectory, RemoteRepository
from services.schema import CURRENT, REVISIONS

log = logging.getLogger(__name__)

_DEFAULT_SETTINGS_FILE = os.path.expanduser("~/.config/oep-index/settings.json")
_DEFAULT_OEP_DIR = os.path.join(os.path.dirname(__file__), "oeps")
_DEFAULT_OWNER = "opensciencearchive"
_DEFAULT_REPO = "oeps"


def _settings_file() -> str:
    return os.getenv("OEP_SETTINGS_FILE", _DEFAULT_SETTINGS_FILE)


def _read_setting(*keys, default=None):
    """Read a nested setting from the settings file."""
    try:
        with open(_settings_file()) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


def _setting(env_var: str, *keys, default=None):
    return os.getenv(env_var) or _read_setting(*keys, default=default)


def get_mode() -> str:
    """Source mode: "dev" (fixtures), "local" (directory) or "remote"."""
    return (_setting("OEP_ENV", "source", "mode", default="remote") or "remote").lower()


def get_backend():
    """Build the OEP backend for the configured mode."""
    mode = get_mode()
    if mode == "dev":
        return Fixtures()
    if mode == "local":
        return LocalDirectory(_setting("OEP_DIR", "source", "directory", default=_DEFAULT_OEP_DIR))
    return RemoteRepository(
        owner=_setting("OEP_REPO_OWNER", "source", "owner", default=_DEFAULT_OWNER),
        repo=_setting("OEP_REPO_NAME", "source", "repo", default=_DEFAULT_REPO),
        token=_setting("GITHUB_TOKEN", "source", "token"),
        path=_setting("OEP_REPO_PATH", "source", "path", default=""),
    )


def get_schema_revision():
    """Active schema revision; unknown names fall back to the current one."""
    name = _setting("OEP_SCHEMA", "schema", default=CURRENT.name)
    revision = REVISIONS.get(name)
    if revision is None:
        log.warning("Unknown OEP schema %r, using %r", name, CURRENT.name)
        return CURRENT
    return revision


PORT = int(os.getenv("PORT") or _read_setting("port", default=4250))
