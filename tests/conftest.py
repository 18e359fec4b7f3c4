"""
Shared fixtures for the Google Messages connector tests.

`FakePage` stands in for a Playwright page: it answers the page-context
functions from `dom` with canned rows and raises Playwright's own
`TimeoutError` wherever the real page would time out.
"""
import pytest
from playwright.async_api import TimeoutError

from messagekit.utils.cfg.schema import Config
from messagekit.connectors.gmessages import dom


class FakePage:
    """In-memory page recording every call made against it."""
    def __init__(self, conversation_rows=None, message_rows=None, present=(dom.QR_CODE,),
                 logged_in=True, missing_selectors=(), fail=None):
        self.conversation_rows = conversation_rows
        self.message_rows = message_rows or {}
        self.present = set(present)
        self.logged_in = logged_in
        self.missing_selectors = set(missing_selectors)
        self.fail = fail or {}
        self.current = None
        self.calls = []

    def _maybe_fail(self, name):
        if name in self.fail:
            raise self.fail[name]

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url, wait_until, timeout))
        self._maybe_fail("goto")

    async def wait_for_function(self, expression, arg=None, timeout=None, polling=None):
        self.calls.append(("wait_for_function", expression, arg, timeout, polling))
        if expression == dom.ELEMENT_PRESENT_JS and arg in self.present:
            return True
        if expression == dom.LOGGED_IN_JS and self.logged_in:
            return True
        raise TimeoutError(f"Timeout {timeout}ms exceeded")

    async def wait_for_selector(self, selector, timeout=None):
        self.calls.append(("wait_for_selector", selector, timeout))
        if selector in self.missing_selectors:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
        return object()

    async def wait_for_timeout(self, ms):
        self.calls.append(("wait_for_timeout", ms))

    async def click(self, selector, timeout=None):
        self.calls.append(("click", selector, timeout))
        for conversation_id in self.message_rows:
            if dom.conversation_link(conversation_id) == selector:
                self.current = conversation_id
                return
        raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def evaluate(self, expression, arg=None):
        self.calls.append(("evaluate", expression, arg))
        if expression == dom.CONVERSATION_ROWS_JS:
            rows = self.conversation_rows
        elif expression == dom.MESSAGE_ROWS_JS:
            rows = self.message_rows.get(self.current, [])
        else:
            raise AssertionError(f"unexpected expression: {expression}")
        if isinstance(rows, Exception):
            raise rows
        return rows

    def names(self):
        """Method names in call order."""
        return [call[0] for call in self.calls]


class FakeSession:
    """BrowserSession stand-in that hands out a FakePage."""
    def __init__(self, page, start_error=None):
        self._page = page
        self.page = None
        self.start_error = start_error
        self.start_count = 0
        self.close_count = 0

    async def start(self):
        self.start_count += 1
        if self.start_error is not None:
            raise self.start_error
        self.page = self._page
        return self.page

    async def close(self):
        self.close_count += 1


def conversation_row(name, conversation_id, snippet="", timestamp="", unread=False):
    """Raw row as returned by the conversation-list page function."""
    return {
        "name": name,
        "lastMessage": snippet,
        "timestamp": timestamp,
        "href": f"/web/conversations/{conversation_id}" if conversation_id else None,
        "isUnread": unread,
    }


def message_row(text, label="", has_part=True, outgoing=False, unread=False):
    """Raw row as returned by the message-thread page function."""
    return {
        "text": text,
        "hasPart": has_part,
        "ariaLabel": label,
        "isOutgoing": outgoing,
        "isUnread": unread,
    }


@pytest.fixture
def config():
    """Default configuration; waits are recorded by FakePage, never slept."""
    return Config()
