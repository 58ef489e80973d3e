#!/usr/bin/env python
"""Command line entry point for listing NDCs by drug name or ATC class."""
import sys

from ndc_lookup.cli import main

if __name__ == "__main__":
    sys.exit(main())
