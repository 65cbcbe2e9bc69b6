"""Allow running capps as ``python -m capps``."""

from capps.cli import main

if __name__ == "__main__":
    main()
