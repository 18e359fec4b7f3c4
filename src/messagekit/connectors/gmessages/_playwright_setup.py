"""
This file is used to ensure that the Chromium runtime is installed for Playwright.
"""
import sys
import subprocess

from playwright.sync_api import sync_playwright
from playwright.sync_api import Error as PlaywrightError

from messagekit.utils.style import ansi
from messagekit.utils.logs import report

logger = report.settings(__file__)


def chromium_available() -> bool:
    """Return True when a headless Chromium can be launched."""
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True)
            browser.close()
        return True
    except PlaywrightError as e:
        logger.warning("Chromium launch failed: %s", e)
        return False


def ensure_chromium_installed() -> None:
    """
    Install the Playwright Chromium runtime if it cannot be launched.
    """
    if chromium_available():
        return
    print(f"🔄 {ansi.cyan}Installing Playwright Chromium runtime…{ansi.reset}", file=sys.stderr)
    logger.info("Installing Playwright Chromium runtime")
    subprocess.run(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        check=True
    )
