import os
import sys
from pathlib import Path

# Ensure the backend packages are importable when running tests from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the app's default engine off disk; tests override the session anyway.
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Register models for metadata creation in tests.
from app import models  # noqa: E402,F401
