"""Configuration loading and validation."""

import os
import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "digicard"
DEFAULT_SESSION_PATH = Path.home() / ".config" / "digicard" / "session.json"


class StoreConfig(BaseModel):
    """Where cards, users and plans are persisted."""

    backend: Literal["local", "rest"] = "local"
    """"local" keeps everything in one JSON file, "rest" talks to an HTTP backend."""

    path: Path = DEFAULT_DATA_DIR / "store.json"
    """JSON file used by the local backend."""

    url: str = "http://localhost:8000/api"
    """Base URL of the REST backend (no trailing slash)."""

    timeout: float = 10.0
    """Request timeout in seconds for the REST backend."""


class GeneratorConfig(BaseModel):
    """Bio generation service settings."""

    api_key: str | None = Field(default_factory=lambda: os.environ.get("GEMINI_API_KEY"))
    """API key for the Gemini API. Falls back to the GEMINI_API_KEY environment variable."""

    model: str = "gemini-2.0-flash"
    """Model used for bio drafts."""

    endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    """Gemini REST endpoint."""

    timeout: float = 30.0
    """Request timeout in seconds."""


class PublicConfig(BaseModel):
    """Public viewer settings."""

    base_url: str = "http://localhost:8000/"
    """Base URL share links are built on (the card ref goes in the #/card/ fragment)."""


class SessionConfig(BaseModel):
    """Login session persistence."""

    path: Path = DEFAULT_SESSION_PATH


class AdminConfig(BaseModel):
    """Seed administrator account, provisioned explicitly with `digicard provision-admin`."""

    email: str | None = None
    password: str | None = None
    name: str = "Administrator"


class Config(BaseModel):
    """Root configuration. Every table is optional."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    public: PublicConfig = Field(default_factory=PublicConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, looks for config.toml in the
            current directory and uses defaults when it is absent.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "config.toml"
        if not config_path.exists():
            return Config()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.toml.example to config.toml and adjust it."
        )

    with open(config_path, "rb") as f:
        try:
            config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        config = Config(**config_dict)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    # Relative paths are relative to the config file, not the working directory
    base = config_path.parent
    store_path = config.store.path.expanduser()
    config.store.path = store_path if store_path.is_absolute() else base / store_path
    session_path = config.session.path.expanduser()
    config.session.path = session_path if session_path.is_absolute() else base / session_path

    return config


def export_filename(full_name: str, extension: str = "pdf") -> str:
    """
    Build an output filename for an exported card.

    Args:
        full_name: Name shown on the card.
        extension: File extension without the dot.

    Returns:
        Sanitized filename, e.g. "Jane Doe - card.pdf".
    """
    safe_name = sanitize_filename(full_name) or "card"
    return f"{safe_name} - card.{extension}"


def sanitize_filename(name: str) -> str:
    """
    Sanitize string for use in filename.

    Args:
        name: String to sanitize.

    Returns:
        Sanitized string safe for filenames.
    """
    # Replace invalid filename characters
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        name = name.replace(char, "_")

    # Remove leading/trailing whitespace and dots
    name = name.strip(". ")

    return name
