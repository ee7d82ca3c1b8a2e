#!/usr/bin/env python3
"""
Unified entry point for all Yatzy interfaces.

Usage:
    python yatzy.py                      # Default: web server
    python yatzy.py --ui tui             # Terminal (Textual)
    python yatzy.py --ui web --port 8080 # Web on custom port
    python yatzy.py --ui tui --seed 42   # Reproducible dice

Individual entry points (web.py, tui.py) still work independently.
"""
import argparse
import sys


def main():
    # Pre-parse just the --ui flag, pass everything else through
    parser = argparse.ArgumentParser(
        description="Yatzy — play in the browser or the terminal",
        add_help=False,
    )
    parser.add_argument("--ui", choices=["web", "tui"], default="web",
                        help="Interface: web (default, JSON API), tui (terminal)")
    args, remaining = parser.parse_known_args()

    if args.ui == "web":
        from web import main as run_web
        run_web(remaining)

    elif args.ui == "tui":
        from tui import main as run_tui
        run_tui(remaining)


if __name__ == "__main__":
    sys.exit(main())
