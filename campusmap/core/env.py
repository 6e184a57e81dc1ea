import os
from pathlib import Path

from dotenv import load_dotenv


def load_env(path: str | Path | None = None) -> bool:
    """Load ``.env`` (or ``path``) without overriding variables already set."""
    return load_dotenv(dotenv_path=path, override=False)


def get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def get_openai_api_key() -> str:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise EnvironmentError("OPENAI_API_KEY is not set")
    return api_key
