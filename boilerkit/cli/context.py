from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from boilerkit.core.config import CONFIG_FILENAME, Config, load_config
from boilerkit.core.result import Err
from boilerkit.output.console import ConsoleProtocol, RichConsole

PROJECT_ROOT_ENV = "BOILERKIT_PROJECT_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    project_root: Path
    config: Config
    console: ConsoleProtocol


def project_root() -> Path:
    env = os.environ.get(PROJECT_ROOT_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    root = project_root()
    console = RichConsole()

    config = Config()
    config_path = root / CONFIG_FILENAME
    if config_path.exists():
        loaded = load_config(config_path)
        if isinstance(loaded, Err):
            console.warning(f"{loaded.error.message} (using defaults)")
        else:
            config = loaded.value

    return CLIContext(project_root=root, config=config, console=console)
