#!/usr/bin/env python3
"""Run the Playwright-based Google Messages export."""
from messagekit.connectors.gmessages.scraper import run_main

if __name__ == "__main__":
    run_main()
