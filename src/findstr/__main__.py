"""Allow ``python -m findstr``."""

from findstr.cli.typer_app import main

if __name__ == "__main__":
    main()
