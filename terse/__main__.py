"""Module entrypoint for ``python -m terse``.

All argument parsing and runtime setup happen in ``terse.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
