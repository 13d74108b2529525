from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

CONFIG_FILENAME = "config.ini"
LOG_FILENAME = "strei.log"


def strei_home() -> Path:
    return Path.home() / ".strei"


@dataclass(frozen=True)
class HomeLayout:
    root: Path
    config_path: Path
    log_path: Path


def ensure_home(root: Optional[Path] = None) -> HomeLayout:
    """Ensure the application home directory exists.

    Layout (under root, ``~/.strei`` by default):
      config.ini
      config.ini.bak   (previous generation, after the first update)
      strei.log
    """
    root = Path(root).expanduser().resolve() if root is not None else strei_home()
    root.mkdir(parents=True, exist_ok=True)
    return HomeLayout(root=root, config_path=root / CONFIG_FILENAME, log_path=root / LOG_FILENAME)
