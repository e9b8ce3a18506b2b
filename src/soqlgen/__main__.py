"""Entry point for `python -m soqlgen`."""

from soqlgen import cli


if __name__ == "__main__":
    cli.main()
