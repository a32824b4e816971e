"""Run the HTTP server in the foreground."""

import cyclopts
import uvicorn

from factgrid.cli.console import get_console
from factgrid.cli.util.runtime import load_config, prepare_database

app = cyclopts.App(name="serve", help="Run the HTTP server")


@app.default
def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """Migrate the database, then serve the API and scheduled triggers.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    console = get_console()
    config = load_config()

    if config.database.auto_migrate:
        with console.status("Running database migrations..."):
            prepare_database(config)
        console.success("Migrations complete")

    console.print(f"Serving {config.server.name} on http://{host}:{port}")
    uvicorn.run(
        "factgrid.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        access_log=True,
    )
