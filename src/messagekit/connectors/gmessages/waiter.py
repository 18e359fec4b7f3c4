"""Poll the live document until an element or readiness predicate holds."""
from typing import Any

from playwright.async_api import Page, Error, TimeoutError

from messagekit.utils.logs import report
from messagekit.connectors.gmessages import dom

logger = report.settings(__file__)


async def wait_for_element(page: Page, selector: str, timeout_ms: int = 60000) -> bool:
    """Return True once *selector* matches a node, False if *timeout_ms* elapses first."""
    try:
        await page.wait_for_function(dom.ELEMENT_PRESENT_JS, arg=selector, timeout=timeout_ms)
        return True
    except (TimeoutError, Error) as e:
        logger.error("Timeout waiting for element: %s (%s)", selector, e)
        return False


async def wait_until(page: Page, predicate_js: str, arg: Any = None,
                     timeout_ms: int = 60000, polling_ms: int = 1000) -> None:
    """Poll *predicate_js* every *polling_ms* until truthy; raises TimeoutError on expiry."""
    await page.wait_for_function(predicate_js, arg=arg, timeout=timeout_ms, polling=polling_ms)
