"""List the conversations shown in the sidebar."""
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from playwright.async_api import Page

from messagekit.utils.logs import report
from messagekit.connectors.gmessages import dom

logger = report.settings(__file__)


@dataclass(frozen=True)
class Conversation:
    """A named thread in the conversation list; identity is `id`."""
    name: str
    last_message: str = ""
    timestamp: str = ""
    id: str = ""
    is_unread: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the web client's camelCase field names."""
        return {
            "name": self.name,
            "lastMessage": self.last_message,
            "timestamp": self.timestamp,
            "id": self.id,
            "isUnread": self.is_unread,
        }


def _text(value: Optional[str]) -> str:
    return value.strip() if value else ""


def conversation_id(href: Optional[str]) -> str:
    """Last path segment of a `/web/conversations/<id>` link, or ''."""
    if not href:
        return ""
    return href.split("/")[-1]


def build_conversations(rows: Optional[List[Dict[str, Any]]]) -> List[Conversation]:
    """Turn raw page rows into Conversations, dropping rows without a name."""
    conversations = []
    for row in rows or []:
        name = _text(row.get("name"))
        if not name:
            continue
        conversations.append(Conversation(
            name=name,
            last_message=_text(row.get("lastMessage")),
            timestamp=_text(row.get("timestamp")),
            id=conversation_id(row.get("href")),
            is_unread=bool(row.get("isUnread")),
        ))
    return conversations


async def get_conversations(page: Page) -> List[Conversation]:
    """Scrape the conversation list; any failure is logged and yields []."""
    try:
        logger.info("Getting conversations")
        rows = await page.evaluate(dom.CONVERSATION_ROWS_JS, dom.CONVERSATION_SELECTORS)
        if rows is None:
            logger.warning("No conversations container found")
            return []

        conversations = build_conversations(rows)
        logger.info("Found %d conversations (%d list items)", len(conversations), len(rows))
        logger.debug("Conversations: %s", conversations)
        return conversations
    except Exception as e:
        logger.error("Error getting conversations: %s", e, exc_info=True)
        return []
