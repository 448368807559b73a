import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAME = "mdviewer.config.json"

_DEFAULTS = {
    "root": ".",
    "port": 8080,
    "host": "127.0.0.1",
    "debug": False,
}


@dataclass(frozen=True)
class Settings:
    root: Path
    port: int
    host: str
    debug: bool


def resolve_root(raw_root) -> Path:
    try:
        root = Path(raw_root).expanduser().resolve()
    except (OSError, RuntimeError) as e:
        raise ConfigError(f"resolve root: {e}")
    if not root.exists():
        raise ConfigError(f"stat root: {root} does not exist")
    if not root.is_dir():
        raise ConfigError(f"root is not a directory: {root}")
    return root


def _load_config_file(path: Path) -> dict:
    if not path.is_file():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            user = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load %s: %s", path.name, e)
        return {}
    if not isinstance(user, dict):
        logger.warning("Ignoring %s: expected a JSON object", path.name)
        return {}
    known = {f.name for f in fields(Settings)}
    return {k: v for k, v in user.items() if k in known}


def _parse_port(value) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid port: {value!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"port out of range: {port}")
    return port


def load_settings(root=None, port=None, host=None, debug=None, config_path=None) -> Settings:
    """Merge CLI overrides, the optional config file and the defaults.

    The config file is looked up inside the root unless ``config_path`` is
    given, so ``root`` itself can only come from the command line or the
    default.
    """
    cfg = dict(_DEFAULTS)
    if root is not None:
        cfg["root"] = root
    resolved = resolve_root(cfg["root"])

    file_cfg = _load_config_file(Path(config_path) if config_path else resolved / CONFIG_NAME)
    file_cfg.pop("root", None)
    cfg.update(file_cfg)

    overrides = {"port": port, "host": host, "debug": debug}
    cfg.update({k: v for k, v in overrides.items() if v is not None})

    return Settings(
        root=resolved,
        port=_parse_port(cfg["port"]),
        host=str(cfg["host"]),
        debug=bool(cfg["debug"]),
    )
