"""Module entrypoint for ``python -m taskboard``."""

from taskboard.cli import app

if __name__ == "__main__":
    app()
