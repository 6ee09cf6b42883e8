"""Command line entry point for tfcodegen."""

import sys

from .codegen.cli_integration import run_cli


def main() -> None:
    """Run the CLI and exit with its status code."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
