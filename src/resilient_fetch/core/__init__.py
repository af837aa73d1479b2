"""Core module initialization - loads environment variables."""

from pathlib import Path

from dotenv import load_dotenv

# Settings are read from the environment at import time, so the .env file
# must be loaded before core.config is imported.
for _path in [Path.cwd() / ".env"] + [p / ".env" for p in Path.cwd().parents]:
    if _path.exists():
        load_dotenv(_path, override=False)
        break
