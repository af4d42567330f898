"""Entry point for ``python -m ipammigrate``."""

from ipammigrate.cli import main

if __name__ == "__main__":
    main()
