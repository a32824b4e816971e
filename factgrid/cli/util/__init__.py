from factgrid.cli.util.paths import FactGridPaths

__all__ = ["FactGridPaths"]
