"""Main CLI application using Cyclopts.

Commands run the services in-process against the configured database;
``serve`` starts the HTTP API with its scheduled triggers.
"""

import cyclopts

from factgrid.cli.commands import datasets, db, refresh, server, watchdog

app = cyclopts.App(
    name="factgrid",
    help="FactGrid - world-data ingestion and change tracking",
)

app.command(server.app, name="serve")
app.command(db.migrate, name="migrate")
app.command(db.seed, name="seed")
app.command(refresh.app, name="refresh")
app.command(watchdog.app, name="watchdog")
app.command(datasets.app, name="datasets")
app.command(datasets.set_year, name="set-year")
