"""Allow ``python -m dagweave``."""

from dagweave.cli.main import main

if __name__ == "__main__":
    main()
