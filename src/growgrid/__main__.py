"""Allow ``python -m growgrid``."""

from growgrid.cli.main import cli

if __name__ == "__main__":
    cli()
