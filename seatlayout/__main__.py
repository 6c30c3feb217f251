"""Run the seatlayout CLI with ``python -m seatlayout``."""

from seatlayout.bootstrap.entrypoints import main

if __name__ == "__main__":
    main()
