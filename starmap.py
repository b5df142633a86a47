#!/usr/bin/env python3
"""
starmap.py

Launcher for the star map viewer. Looks for `data/universe.json` next to
this script and starts the viewer with it; without that file the built-in
defaults (one galaxy, seed "hello universe") are used.

Usage:
    python starmap.py
    python starmap.py path/to/universe.json
"""
import os
import sys

import orbit_viewer


def find_universe_json():
    here = os.path.dirname(os.path.abspath(__file__))
    candidates = [
        os.path.join(here, "data", "universe.json"),
        os.path.join(os.getcwd(), "data", "universe.json"),
    ]
    for c in candidates:
        if os.path.exists(c):
            return c
    return None


def main():
    argv = sys.argv[1:]
    if not argv or argv[0].startswith("-"):
        path = find_universe_json()
        if path:
            argv = [path] + argv
    orbit_viewer.main(argv)


if __name__ == "__main__":
    main()
