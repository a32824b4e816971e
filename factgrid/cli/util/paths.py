"""Manages factgrid directory structure following XDG Base Directory spec.

Directory layout:
    ~/.config/factgrid/
        config.yaml         # User configuration

    ~/.local/share/factgrid/
        factgrid.db         # SQLite database

    ~/.local/state/factgrid/
        logs/
            server.log      # Server logs

``FACTGRID_DATA_DIR`` relocates the data directory, e.g. to a container volume.
"""

import os
from pathlib import Path


class FactGridPaths:
    """Manages factgrid paths following XDG Base Directory specification.

    Supports overriding individual directories for testing.
    """

    def __init__(
        self,
        *,
        config_dir: Path | None = None,
        data_dir: Path | None = None,
        state_dir: Path | None = None,
    ) -> None:
        home = Path.home()
        env_data_dir = os.environ.get("FACTGRID_DATA_DIR")
        self._config_dir = config_dir or home / ".config" / "factgrid"
        self._data_dir = data_dir or (
            Path(env_data_dir).expanduser() if env_data_dir else home / ".local" / "share" / "factgrid"
        )
        self._state_dir = state_dir or home / ".local" / "state" / "factgrid"

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def state_dir(self) -> Path:
        return self._state_dir

    @property
    def config_file(self) -> Path:
        """Main config file."""
        return self._config_dir / "config.yaml"

    @property
    def database_file(self) -> Path:
        """SQLite database file."""
        return self._data_dir / "factgrid.db"

    @property
    def logs_dir(self) -> Path:
        return self._state_dir / "logs"

    @property
    def server_log(self) -> Path:
        return self.logs_dir / "server.log"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
