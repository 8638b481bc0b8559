"""Entry point wrapper for ``python -m random_melody``.

Execution is forwarded to :func:`random_melody.main` so the behaviour is
identical whether the user runs ``python -m random_melody`` or the installed
``random-melody`` console script.

Example
-------
    python -m random_melody --measures 8 --tempo 120 --seed hello
"""

from . import main

if __name__ == "__main__":
    main()
