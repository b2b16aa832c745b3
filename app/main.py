"""
Console Frontend for Personal Ledger

Run with:

    python -m app.main
    python -m app.main --storage my_records.json

The same commands are installed as the `personal-ledger` script.
"""

from src.cli import cli


def main():
    """Main application entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
