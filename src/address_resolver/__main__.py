"""Entry point for running the address_resolver package as a module."""

import sys

from address_resolver.cli import main

if __name__ == "__main__":
    sys.exit(main())
