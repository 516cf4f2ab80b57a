"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
