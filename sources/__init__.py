"""Built-in factgrid source adapters and watchdog probes, one package per upstream provider."""
