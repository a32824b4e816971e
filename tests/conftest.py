"""Global test fixtures."""

import os

# Keep tests off the user's database and away from the in-process scheduler.
# This must happen at module load time, before any test module imports Config
os.environ.setdefault("FACTGRID_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("FACTGRID_TRIGGERS__ENABLED", "false")
