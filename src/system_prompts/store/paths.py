"""Platform-standard location of the application config directory."""

import os
import sys
from collections.abc import Mapping
from pathlib import Path

APP_DIR_NAME = "system-prompts"
DEFAULT_FILE_NAME = "system_prompts.yaml"


def default_config_dir(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """
    Resolve the per-user config directory for this application.

    - Windows: ``%APPDATA%\\system-prompts``
    - macOS: ``~/Library/Application Support/system-prompts``
    - elsewhere: ``$XDG_CONFIG_HOME/system-prompts``, else ``~/.config/system-prompts``

    Args:
        platform: Override for ``sys.platform``
        environ: Override for ``os.environ``
        home: Override for the user's home directory

    Returns:
        Directory path (not created)
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = home or Path.home()

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
    elif platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        xdg = environ.get("XDG_CONFIG_HOME", "").strip()
        # Relative XDG_CONFIG_HOME values are invalid and ignored
        base = Path(xdg) if xdg and Path(xdg).is_absolute() else home / ".config"

    return base / APP_DIR_NAME
