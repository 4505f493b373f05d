"""Module entrypoint for ``python -m ddir``.

Argument parsing, logging setup and exit codes live in ``ddir.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
