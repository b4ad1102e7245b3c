"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class OllamaConfig:
    endpoint: str = "http://localhost:11434/api/generate"
    model: str = "gemma3"
    temperature: float = 0.0
    timeout: float | None = None  # None = wait however long the model takes

    def __post_init__(self) -> None:
        if not self.endpoint.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got {self.endpoint!r}")
        if not 0 <= self.temperature <= 2:
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive or null, got {self.timeout}")


@dataclass(frozen=True)
class WatcherConfig:
    marker_attribute: str = "data-reply-suggester"
    button_label: str = "✍️"
    loading_label: str = "Loading..."

    def __post_init__(self) -> None:
        if not self.marker_attribute.startswith("data-"):
            raise ValueError(
                f"marker_attribute must be a data-* attribute, got {self.marker_attribute!r}"
            )


@dataclass(frozen=True)
class BrowserConfig:
    headless: bool = False
    user_data_dir: str = "~/.reply-suggester/profile"

    @property
    def resolved_user_data_dir(self) -> Path:
        return Path(self.user_data_dir).expanduser()


@dataclass(frozen=True)
class AppConfig:
    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    watcher: WatcherConfig = field(default_factory=WatcherConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path("~/.reply-suggester/config.yaml").expanduser(),
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        ollama=OllamaConfig(**raw.get("ollama", {})),
        watcher=WatcherConfig(**raw.get("watcher", {})),
        browser=BrowserConfig(**raw.get("browser", {})),
    )
