"""Entry point for ``python -m algraph``."""

from algraph.cli import main

if __name__ == "__main__":
    main()
