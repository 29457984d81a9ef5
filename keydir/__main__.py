"""Module entrypoint for ``python -m keydir``.

All argument parsing and runtime setup happen in ``keydir.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
