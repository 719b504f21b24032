from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


def env_flag(key: str) -> bool | None:
    """Read a true/false switch; None when the variable is unset."""
    value = os.getenv(key)
    if value is None:
        return None
    return value.strip().lower() == "true"
