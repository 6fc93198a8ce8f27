#!/usr/bin/env python3
"""Cron entry point; see ``leaderboard.cli`` for the options."""

import sys

from leaderboard.cli import main

if __name__ == "__main__":
    sys.exit(main())
