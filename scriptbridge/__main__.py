"""Module entrypoint for ``python -m scriptbridge``."""

from .cli import main


if __name__ == "__main__":
    main()
