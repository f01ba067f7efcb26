"""Entry point for ``python -m src.tasks``."""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
