"""Read suite defaults from the repository's .env.defaults file.

The file keeps non-secret defaults (portal URL, fixture tenant data) next to
the code, while real credentials are supplied through the environment.
Values are plain KEY=VALUE lines; quotes around a value are stripped.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict

ENV_DEFAULTS_PATH = Path(__file__).resolve().parents[1] / ".env.defaults"


def parse_env_defaults(text: str) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not ENV_DEFAULTS_PATH.exists():
        return {}
    return parse_env_defaults(ENV_DEFAULTS_PATH.read_text(encoding="utf-8"))


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)
