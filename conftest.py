"""Global pytest configuration."""

import os

# Set before any backend import: the module-level app reads settings at import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "true")
