"""kubefuzzy configuration and logging."""

import logging
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path

import structlog

from kubefuzzy.core.bash import split_command
from kubefuzzy.core.bindings import ACTIONS, DEFAULT_KEYS, check_keymap

USER_CONFIG = Path.home() / ".kubefuzzy" / "config"
ENV_CONFIG = "KUBEFUZZY_CONFIG"

# Settings whose value is a command line
COMMAND_SETTINGS = ("kubectl", "selector", "pager", "highlighter")

# Settings that take no value
FLAG_SETTINGS = ("verbose",)


@dataclass
class Config:
    """Parsed configuration."""

    keys: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_KEYS))
    """Action name -> selector key."""

    kubectl: list[str] = field(default_factory=lambda: ["kubectl"])
    selector: list[str] = field(default_factory=lambda: ["sk"])
    pager: list[str] = field(default_factory=lambda: ["less", "-e"])
    highlighter: list[str] = field(default_factory=lambda: ["bat"])
    verbose: bool = False
    log: Path | None = None  # None = no log file
    sources: list[str] = field(default_factory=list)
    """Config files applied, in load order."""


# === Config Loading ===


def _config_paths() -> list[Path]:
    """Config files to apply, lowest priority first."""
    paths = []
    if USER_CONFIG.is_file():
        paths.append(USER_CONFIG)
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        env_config_path = Path(env_path).expanduser()
        if env_config_path.is_file():
            paths.append(env_config_path)
    return paths


def load_config() -> Config:
    """Load ~/.kubefuzzy/config then $KUBEFUZZY_CONFIG. Later settings win.

    Raises ValueError naming the file and line on syntax errors.
    """
    config = Config()
    for path in _config_paths():
        try:
            config = parse_config(path.read_text(), base=config)
        except ValueError as e:
            raise ValueError(f"{path}: {e}") from None
        config.sources.append(str(path))
    return config


def parse_config(text: str, base: Config | None = None) -> Config:
    """Apply config text on top of base (defaults if None).

    Raises ValueError on syntax errors.
    """
    config = base if base is not None else Config()
    config = replace(config, keys=dict(config.keys), sources=list(config.sources))

    for lineno, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(None, 1)
        directive = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        try:
            if directive == "bind":
                _apply_binding(config, rest)
            elif directive == "set":
                _apply_setting(config, rest)
            else:
                raise ValueError(f"unknown directive '{directive}'")
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None

    try:
        check_keymap(config.keys)
    except ValueError as e:
        raise ValueError(f"bindings: {e}") from None
    return config


def _apply_binding(config: Config, rest: str) -> None:
    """Parse 'bind <action> <key>'."""
    parts = rest.split()
    if len(parts) != 2:
        raise ValueError("'bind' requires an action and a key")
    action, key = parts[0].lower(), parts[1]
    if action not in ACTIONS:
        raise ValueError(f"unknown action '{action}'")
    if "," in key or "(" in key or ")" in key:
        raise ValueError(f"invalid key '{key}'")
    config.keys[action] = key


def _apply_setting(config: Config, rest: str) -> None:
    """Parse and apply a 'set' directive."""
    if not rest:
        raise ValueError("'set' requires a setting name")

    parts = rest.split(None, 1)
    key = parts[0].lower().replace("-", "_")
    value = parts[1].strip() if len(parts) > 1 else None

    if key in FLAG_SETTINGS:
        if value is not None:
            raise ValueError(f"'{parts[0]}' takes no value")
        setattr(config, key, True)

    elif key in COMMAND_SETTINGS:
        if value is None:
            raise ValueError(f"'{parts[0]}' requires a command")
        setattr(config, key, split_command(value))

    elif key == "log":
        if value is None:
            raise ValueError("'log' requires a path")
        config.log = Path(value).expanduser()

    else:
        raise ValueError(f"unknown setting '{parts[0]}'")


# === Logging ===

_logger: structlog.BoundLogger | None = None


def configure_logging(config: Config) -> None:
    """Configure logging from config settings. Call once at startup.

    A log path gets JSON lines; verbose alone logs to stderr. With neither,
    log_event is a no-op.
    """
    global _logger
    if config.log is None and not config.verbose:
        _logger = None
        return

    level = logging.DEBUG if config.verbose else logging.INFO
    if config.log is not None:
        config.log.parent.mkdir(parents=True, exist_ok=True)
        processors = [
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ]
        factory = structlog.WriteLoggerFactory(file=config.log.open("a"))
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ]
        factory = structlog.PrintLoggerFactory(file=sys.stderr)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=factory,
        cache_logger_on_first_use=False,
    )
    _logger = structlog.get_logger().bind(pid=os.getpid())


def log_event(event: str, level: str = "info", **kw) -> None:
    """Log an event. No-op if logging not configured."""
    if _logger is None:
        return
    getattr(_logger, level)(event, **kw)
