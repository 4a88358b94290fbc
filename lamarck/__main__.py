"""Package entry point for ``python -m lamarck``.

Delegates to the CLI's main(); the installed ``lamarck`` console script
points at the same function.
"""

from lamarck.cli import main

if __name__ == "__main__":
    main()
