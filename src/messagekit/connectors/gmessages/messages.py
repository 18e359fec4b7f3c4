"""Open a conversation and extract its rendered messages."""
import re
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from playwright.async_api import Page

from messagekit.utils.logs import report
from messagekit.utils.cfg.schema import Config
from messagekit.connectors.gmessages import dom
from messagekit.connectors.gmessages.conversations import Conversation

logger = report.settings(__file__)

# "<sender> said: <text>. Received on <date> at <time>."
RECEIVED_RE = re.compile(r"Received on (.*?) at (.*?)\.")


@dataclass(frozen=True)
class Message:
    """One message bubble; position in its thread is its only identity."""
    text: str
    date: str = ""
    time: str = ""
    is_outgoing: bool = False
    is_unread: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the web client's camelCase field names."""
        return {
            "text": self.text,
            "date": self.date,
            "time": self.time,
            "isOutgoing": self.is_outgoing,
            "isUnread": self.is_unread,
        }


def parse_received_label(label: Optional[str]) -> Tuple[str, str]:
    """Pull (date, time) out of an aria-label; ('', '') when it has none."""
    match = RECEIVED_RE.search(label or "")
    if not match:
        return "", ""
    return match.group(1), match.group(2)


def build_messages(rows: Optional[List[Dict[str, Any]]]) -> List[Message]:
    """Turn raw wrapper rows into Messages, in document order.

    Rows missing the text node or the message part are skipped, as are rows
    whose text is blank.
    """
    messages = []
    for row in rows or []:
        raw_text = row.get("text")
        if raw_text is None or not row.get("hasPart"):
            continue
        text = raw_text.strip()
        if not text:
            continue
        date, time = parse_received_label(row.get("ariaLabel"))
        messages.append(Message(
            text=text,
            date=date,
            time=time,
            is_outgoing=bool(row.get("isOutgoing")),
            is_unread=bool(row.get("isUnread")),
        ))
    return messages


async def open_conversation(page: Page, conversation: Conversation, config: Config) -> None:
    """Click the conversation's link and wait for its thread to render."""
    await page.click(dom.conversation_link(conversation.id), timeout=config.timeouts.click_ms)
    await page.wait_for_selector(dom.MESSAGE_LIST, timeout=config.timeouts.message_list_ms)
    await page.wait_for_timeout(config.delays.after_open_ms)


async def get_messages_for_conversation(page: Page, conversation: Conversation,
                                        config: Config) -> List[Message]:
    """Extract the thread of *conversation*; any failure is logged and yields []."""
    try:
        logger.info("Opening conversation: %s", conversation.name)
        if not conversation.id:
            logger.warning("Conversation %s has no link; skipping", conversation.name)
            return []

        await open_conversation(page, conversation, config)
        rows = await page.evaluate(dom.MESSAGE_ROWS_JS, dom.MESSAGE_SELECTORS)
        messages = build_messages(rows)

        logger.info("Found %d messages in conversation %s", len(messages), conversation.name)
        return messages
    except Exception as e:
        logger.error("Error getting messages for %s: %s", conversation.name, e, exc_info=True)
        return []
