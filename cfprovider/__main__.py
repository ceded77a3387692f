"""Main entry point when executing cfprovider as a package.

This allows running the package using python -m cfprovider.
"""

from cfprovider.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
