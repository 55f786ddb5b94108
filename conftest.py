"""Global pytest configuration."""

import os

# Keep tests offline and away from the local development database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LLM_PROVIDER", "stub")
