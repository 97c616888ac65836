"""Module entrypoint: ``python -m fdenum``."""

from fdenum.cli import main

if __name__ == "__main__":
    main()
