"""Entry point for `python -m atelier`."""

import sys


def main():
    from atelier.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
