#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--size N] [--mines N] [--seed N] [--log-level LEVEL]
"""
import sys

from src.minefield.console import main


if __name__ == "__main__":
    sys.exit(main())
