"""Configuration management for ctxlog.

Three-layer config resolution (highest priority wins):
  1. Explicit overrides: CLI flags or keyword arguments
  2. Project config: .ctxlog.json in the working directory or a parent
  3. Global config: ~/.ctxlog/config.json

Recognized keys:
  log_level          stored preference integer 0-4 (0 = VERBOSE ... 4 = ERROR)
  log_to_file        persist log lines to rotating files
  log_dir            directory for persisted logs (default ~/.ctxlog/logs)
  filter_mode        "blacklist" or "whitelist"
  blacklist          context names or integers hidden from the console
  whitelist          context names or integers shown in whitelist mode
  record_assertions  record assertion failures instead of aborting
  debug              interactive debug deployment
  color              ANSI colours on the console
"""

import json
import os
from pathlib import Path


CONFIG_KEYS = [
    "log_level", "log_to_file", "log_dir", "filter_mode",
    "blacklist", "whitelist", "record_assertions", "debug", "color",
]

PROJECT_CONFIG_NAME = ".ctxlog.json"


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.ctxlog/)."""
    return Path.home() / ".ctxlog"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def get_default_log_dir():
    """Return the default directory for persisted log files."""
    return get_global_config_dir() / "logs"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .ctxlog.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON object file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config(path=None):
    """Load the global config file (or an explicit replacement path)."""
    return load_json(path or get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .ctxlog.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def load_logging_config(overrides=None, start_dir=None, global_path=None):
    """Resolve logging config using three-layer precedence.

    For each key in CONFIG_KEYS, checks (in order):
      1. overrides (dict; None values mean "not given")
      2. Project .ctxlog.json
      3. Global ~/.ctxlog/config.json (or global_path)

    JSON files may spell keys with dashes or underscores.

    Returns a dict containing only the keys that were set somewhere.
    """
    overrides = overrides or {}
    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config(global_path)

    resolved = {}
    for key in CONFIG_KEYS:
        dashed = key.replace("_", "-")

        # Layer 1: explicit
        if overrides.get(key) is not None:
            resolved[key] = overrides[key]
            continue

        # Layers 2 and 3
        for layer in (project_cfg, global_cfg):
            value = layer.get(key)
            if value is None:
                value = layer.get(dashed)
            if value is not None:
                resolved[key] = value
                break

    return resolved


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, project_dir=None):
    """Write .ctxlog.json to the project directory."""
    target = Path(project_dir or os.getcwd()) / PROJECT_CONFIG_NAME
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target


def save_global_config(data):
    """Write the global config file."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = get_global_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return config_path
