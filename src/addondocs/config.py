"""Application configuration defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from addondocs.models import Mode

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "addondocs/0.1.0"
MODES: tuple[Mode, ...] = ("remote", "local")


def _get_default_index_path() -> Path:
    """Get the default knowledge base path for the current working context."""
    # Prefer a project-local build when running from a checkout
    local_index = Path("data/knowledge_base.json")
    if local_index.exists():
        return local_index

    return Path.home() / ".addondocs" / "knowledge_base.json"


def parse_mode(value: str | None, default: Mode = "remote") -> Mode:
    if not value:
        return default
    mode = value.strip().lower()
    if mode == "github":
        return "remote"
    if mode not in MODES:
        LOGGER.warning("Unknown knowledge source mode %r, using %s", value, default)
        return default
    return mode  # type: ignore[return-value]


@dataclass(slots=True)
class AppConfig:
    index_path: Path | None = None
    mode: Mode = "remote"
    github_token: str | None = None
    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.index_path is None:
            self.index_path = _get_default_index_path()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        index_path = env.get("ADDONDOCS_INDEX_PATH")
        return cls(
            index_path=Path(index_path) if index_path else None,
            mode=parse_mode(env.get("ADDONDOCS_MODE")),
            github_token=env.get("ADDONDOCS_GITHUB_TOKEN") or env.get("GITHUB_TOKEN") or None,
            api_url=env.get("ADDONDOCS_API_URL") or DEFAULT_API_URL,
        )

    def resolve_index_path(self, base_dir: Path | None = None) -> Path:
        if self.index_path is None:
            self.index_path = _get_default_index_path()
        if Path(self.index_path).is_absolute() or base_dir is None:
            return Path(self.index_path)
        return base_dir / self.index_path
