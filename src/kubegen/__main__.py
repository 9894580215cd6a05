"""Main entry point for ``python -m kubegen``."""

from kubegen.cli.main import main


if __name__ == "__main__":
    main()
