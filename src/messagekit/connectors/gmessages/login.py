"""QR-code login to the Google Messages web client."""
import sys

from playwright.async_api import Page, Error, TimeoutError

from messagekit.utils.style import ansi
from messagekit.utils.logs import report
from messagekit.utils.cfg.schema import Config
from messagekit.connectors.gmessages import dom
from messagekit.connectors.gmessages.waiter import wait_for_element, wait_until

logger = report.settings(__file__)


async def wait_for_login(page: Page, config: Config) -> None:
    """Block until the QR code is gone, the app is mounted and the loader is hidden."""
    await wait_until(
        page,
        dom.LOGGED_IN_JS,
        arg=dom.LOGIN_MARKERS,
        timeout_ms=config.timeouts.login_ms,
        polling_ms=config.timeouts.login_poll_ms,
    )


async def login(page: Page, config: Config) -> None:
    """Open the web client and wait for the user to pair by scanning the QR code.

    Raises whatever the automation layer raises when navigation, the login
    poll or the conversation-list wait runs out of time.
    """
    timeouts = config.timeouts
    try:
        print(f"🌐 Navigating to {ansi.cyan}{config.target.url}{ansi.reset}", file=sys.stderr)
        logger.info("Navigating to %s", config.target.url)
        await page.goto(config.target.url, wait_until="networkidle", timeout=timeouts.navigation_ms)

        # A missing QR code may mean an existing session, or a page that never rendered
        if not await wait_for_element(page, dom.QR_CODE, timeouts.element_ms):
            logger.warning("QR code never appeared; continuing to the login poll")
        print(f"📱 {ansi.yellow}Please scan the QR code to login...{ansi.reset}", file=sys.stderr)

        print("⏳ Waiting for login...", file=sys.stderr)
        logger.info("Waiting up to %d ms for login", timeouts.login_ms)
        await wait_for_login(page, config)
        print(f"✅ {ansi.green}Successfully logged in!{ansi.reset}", file=sys.stderr)
        logger.info("Logged in")

        await page.wait_for_timeout(config.delays.after_login_ms)
        await page.wait_for_selector(dom.CONVERSATION_LIST, timeout=timeouts.conversation_list_ms)
    except (TimeoutError, Error) as e:
        print(f"❌ Login failed: {e}", file=sys.stderr)
        logger.error("Login failed: %s", e)
        raise
