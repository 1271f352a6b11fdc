"""Allows ``python -m tracebuild``."""

from tracebuild.main import main

if __name__ == "__main__":
    main()
