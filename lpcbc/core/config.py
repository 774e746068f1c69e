import os

DEFAULT_CBC_PATH = "cbc"


def cbc_path() -> str:
    """Path of the CBC executable. A bare name is looked up on PATH."""
    return os.environ.get("CBC_PATH", DEFAULT_CBC_PATH)
