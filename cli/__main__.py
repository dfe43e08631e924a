"""
Run the Book Author CLI with ``python -m cli``.

The installed ``book-author`` script calls the same ``main`` function.
"""

import sys


def _main() -> None:
    # Deferred so ``python -m cli`` reports a bad invocation before loading the exporters.
    from . import main

    main()


if __name__ == "__main__":
    if not __package__:
        print("Error: run Book Author as `python -m cli` or `book-author`.", file=sys.stderr)
        raise SystemExit(2)

    _main()
