"""
Selectors and page-context functions for the Google Messages web client.

The JavaScript below runs inside the browser via `page.evaluate` /
`page.wait_for_function`. Each function takes everything it needs as its
argument and returns plain JSON, so nothing from the host leaks in. The
markup is an undocumented contract with a third-party UI: when it changes,
extraction degrades to empty results rather than errors.
"""

# -------------- Markers ------------------------------------------------------
QR_CODE = "mw-qr-code"
APP_ROOT = "mw-app"
LOADER = "#loader"

# -------------- Conversation list --------------------------------------------
CONVERSATION_LIST = 'div[role="listbox"][aria-label*="Conversations"]'
CONVERSATION_LINK_PATH = "/web/conversations/"

CONVERSATION_SELECTORS = {
    "container": CONVERSATION_LIST,
    "item": "mws-conversation-list-item",
    "name": "[data-e2e-conversation-name]",
    "snippet": "[data-e2e-conversation-snippet] span",
    "timestamp": "mws-relative-timestamp",
    "link": f'a[href*="{CONVERSATION_LINK_PATH}"]',
    "unread": ".text-content.unread",
}

# -------------- Message thread -----------------------------------------------
MESSAGE_LIST = "div[data-e2e-messages-list-content]"

MESSAGE_SELECTORS = {
    "wrapper": "mws-message-wrapper",
    "text": "[data-e2e-text-message-content] .text-msg-content",
    "part": "mws-text-message-part",
}


def conversation_link(conversation_id: str) -> str:
    """Selector for the anchor that opens *conversation_id*."""
    return f'a[href*="{CONVERSATION_LINK_PATH}{conversation_id}"]'


# -------------- Page-context functions ---------------------------------------
ELEMENT_PRESENT_JS = "(selector) => document.querySelector(selector) !== null"

LOGGED_IN_JS = """
(markers) => {
    if (document.querySelector(markers.qr)) return false;
    if (!document.querySelector(markers.app)) return false;
    const loader = document.querySelector(markers.loader);
    if (loader && loader.style.display !== 'none') return false;
    return true;
}
"""

LOGIN_MARKERS = {"qr": QR_CODE, "app": APP_ROOT, "loader": LOADER}

CONVERSATION_ROWS_JS = """
(sel) => {
    const container = document.querySelector(sel.container);
    if (!container) {
        console.log('No conversations container found');
        return null;
    }
    const items = Array.from(container.querySelectorAll(sel.item));
    console.log(`Found ${items.length} conversation items`);
    const text = (item, s) => {
        const el = item.querySelector(s);
        return el ? el.textContent : null;
    };
    return items.map(item => {
        const link = item.querySelector(sel.link);
        return {
            name: text(item, sel.name),
            lastMessage: text(item, sel.snippet),
            timestamp: text(item, sel.timestamp),
            href: link ? link.getAttribute('href') : null,
            isUnread: item.querySelector(sel.unread) !== null,
        };
    });
}
"""

MESSAGE_ROWS_JS = """
(sel) => {
    return Array.from(document.querySelectorAll(sel.wrapper)).map(msg => {
        const textEl = msg.querySelector(sel.text);
        const partEl = msg.querySelector(sel.part);
        return {
            text: textEl ? textEl.textContent : null,
            hasPart: partEl !== null,
            ariaLabel: partEl ? (partEl.getAttribute('aria-label') || '') : '',
            isOutgoing: msg.hasAttribute('is-outgoing')
                || msg.getAttribute('data-e2e-message-outgoing') === 'true',
            isUnread: msg.getAttribute('is-unread') === 'true',
        };
    });
}
"""
