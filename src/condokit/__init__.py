"""condokit: condominium spreadsheet importer."""

__version__ = "0.1.0"

__all__ = ["main", "__version__"]


def __getattr__(name):
    # The CLI pulls in click and the record stores; load it on first use only.
    if name == "main":
        from condokit.cli.main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
