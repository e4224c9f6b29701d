from pathlib import Path


def get_app_dir() -> Path:
    """Return the courier configuration directory under the user's home."""
    return Path.home() / '.courier'
