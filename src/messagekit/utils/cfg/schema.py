"""
This file is used to define the schema for the config file.
"""
from dataclasses import dataclass, field


@dataclass
class Target:
    """Web client being automated."""
    url: str = "https://messages.google.com/web"


@dataclass
class Browser:
    """Chromium launch options."""
    headless:        bool = False
    start_maximized: bool = True
    viewport_width:  int  = 1366
    viewport_height: int  = 768
    log_console:     bool = True


@dataclass
class Timeouts:
    """Upper bounds (milliseconds) on each wait."""
    navigation_ms:        int = 60000
    element_ms:           int = 60000
    login_ms:             int = 300000
    login_poll_ms:        int = 1000
    conversation_list_ms: int = 30000
    click_ms:             int = 5000
    message_list_ms:      int = 5000


@dataclass
class Delays:
    """Fixed settle delays (milliseconds)."""
    after_login_ms:           int = 5000
    after_open_ms:            int = 2000
    between_conversations_ms: int = 1000


@dataclass
class Output:
    """How the scraped result set is printed."""
    indent: int = 2


@dataclass
class Config:
    """Main configuration container aggregating all sections."""
    target:   Target   = field(default_factory=Target)
    browser:  Browser  = field(default_factory=Browser)
    timeouts: Timeouts = field(default_factory=Timeouts)
    delays:   Delays   = field(default_factory=Delays)
    output:   Output   = field(default_factory=Output)
