"""Entry point for ``python -m tagger_backend``."""

from .cli import cli

if __name__ == "__main__":
    cli()
