#!/usr/bin/env python3
"""
Google Messages conversation extractor using Playwright.
"""

import sys
import json
import time
import asyncio
import argparse
from pathlib import Path
from typing import Dict, List, Optional

from playwright.async_api import Page

from messagekit.utils.cfg import engine
from messagekit.utils.style import ansi
from messagekit.utils.logs import report
from messagekit.utils.cfg.schema import Config
from messagekit.connectors.gmessages.login import login
from messagekit.connectors.gmessages.session import BrowserSession
from messagekit.connectors.gmessages.conversations import Conversation, get_conversations
from messagekit.connectors.gmessages.messages import Message, get_messages_for_conversation
from messagekit.connectors.gmessages._playwright_setup import ensure_chromium_installed

# Initialize logging
logger = report.settings(__file__)

ResultSet = Dict[str, List[Message]]


# ---------------- Timing Helper -------------------------------------------
class Stopwatch:
    """Tiny helper for ad-hoc performance tracing (seconds precision)."""
    def __init__(self, prefix: str = "") -> None:
        self.t0 = time.perf_counter()
        self.prefix = prefix

    def lap(self, label: str) -> float:
        """Log the elapsed time since the stopwatch was created."""
        elapsed = time.perf_counter() - self.t0
        logger.debug("%s%s: %.2fs", self.prefix, label, elapsed)
        return elapsed


# ---------------- Orchestrator --------------------------------------------
class MessagesScraper:
    """Runs one login-then-scrape pass over a single browser session."""
    def __init__(self, config: Optional[Config] = None, session: Optional[BrowserSession] = None):
        self.config = config or Config()
        self.session = session or BrowserSession(self.config.browser)

    @property
    def page(self) -> Page:
        """The session's page; only valid after the session has started."""
        return self.session.page

    async def login(self) -> None:
        """Pair the browser with the phone via QR code."""
        await login(self.page, self.config)

    async def get_conversations(self) -> List[Conversation]:
        """Scrape the conversation list."""
        return await get_conversations(self.page)

    async def get_messages_for_conversation(self, conversation: Conversation) -> List[Message]:
        """Open *conversation* and scrape its messages."""
        return await get_messages_for_conversation(self.page, conversation, self.config)

    async def scrape_messages(self) -> ResultSet:
        """Log in, then collect every conversation's messages keyed by name.

        The browser session is closed exactly once, whether or not a phase fails.
        """
        sw = Stopwatch("scrape ")
        delays = self.config.delays
        try:
            await self.session.start()
            sw.lap("browser_start")
            await self.login()
            sw.lap("login")

            await self.page.wait_for_timeout(delays.after_login_ms)

            conversations = await self.get_conversations()
            print(f"🔍 Found {ansi.green}{len(conversations)}{ansi.reset} conversations", file=sys.stderr)
            sw.lap("conversation_list")

            all_messages: ResultSet = {}
            for conversation in conversations:
                print(f"📥 Scraping messages for {ansi.cyan}{conversation.name}{ansi.reset}", file=sys.stderr)
                logger.info("Scraping messages for %s", conversation.name)
                if conversation.name in all_messages:
                    logger.warning("Duplicate conversation name %s; earlier messages are replaced",
                                   conversation.name)
                all_messages[conversation.name] = await self.get_messages_for_conversation(conversation)
                await self.page.wait_for_timeout(delays.between_conversations_ms)
            sw.lap("messages")

            return all_messages
        except Exception as e:
            logger.error("Error occurred while scraping: %s", e, exc_info=True)
            raise
        finally:
            await self.session.close()
            sw.lap("shutdown")


def to_json(results: ResultSet, indent: int = 2) -> str:
    """Render the result set with the web client's field names."""
    payload = {name: [m.to_dict() for m in messages] for name, messages in results.items()}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


# -------------- Main Script -------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scrape conversations from Google Messages for web.")
    p.add_argument("--headless", action="store_true", help="Run browser headless (QR login still needs a visible page)")
    p.add_argument("--config", type=Path, default=None, help="Path to an INI config file (default: package config.ini)")
    return p.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Run one scrape and print the result set as JSON; returns the exit status."""
    args = _parse_args(argv)
    config = engine.load(args.config)
    if args.headless:
        config.browser.headless = True

    print(f"🚀 {ansi.cyan}Playwright-based Google Messages scraper{ansi.reset}", file=sys.stderr)
    print(f"📝 Detailed logs: {ansi.grey}{report.log_dir()}{ansi.reset}", file=sys.stderr)
    logger.info("Scraper started for %s", config.target.url)

    scraper = MessagesScraper(config)
    try:
        results = await scraper.scrape_messages()
    except Exception as e:
        print(f"❌ Failed to scrape messages: {e}", file=sys.stderr)
        logger.error("Failed to scrape messages: %s", e)
        return 1

    print(to_json(results, config.output.indent))
    total = sum(len(messages) for messages in results.values())
    logger.info("Scraped %d messages from %d conversations", total, len(results))
    return 0


def run_main():
    """Console entry point."""
    ensure_chromium_installed()
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        logger.warning("Script interrupted by user")
        status = 130
    sys.exit(status)


if __name__ == "__main__":
    run_main()
