"""Entry point for 'python -m webtoolkit' command."""

from webtoolkit.cli import main

if __name__ == "__main__":
    main()
