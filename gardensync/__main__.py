"""Entry point for `python -m gardensync`."""

import sys


def main():
    from gardensync.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
