"""
View-state helpers for the site's presentation components.

Each helper is a pure function of the inputs a component reacts to
(scroll position, current path, elapsed time), so the state can be
computed server-side or checked in tests without a browser.
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from academy.site.content import NAV_LINKS, Link

SCROLL_THRESHOLD = 20


class NavItem(BaseModel):
    label: str
    href: str
    active: bool


class NavbarState(BaseModel):
    scrolled: bool
    links: List[NavItem]
    mobileMenuOpen: bool = False


def navbar_state(scroll_y: float, path: str, links: Sequence[Link] = NAV_LINKS) -> NavbarState:
    """
    Navbar look for a scroll offset and route.

    The bar switches to its compact style past 20px of scrolling; the link
    whose href equals the path is active. Navigating always closes the
    mobile menu, so a freshly computed state has it closed.
    """
    return NavbarState(
        scrolled=scroll_y > SCROLL_THRESHOLD,
        links=[NavItem(label=link.label, href=link.href, active=link.href == path) for link in links],
    )


def rotating_label_index(elapsed_seconds: float, count: int, interval_seconds: float) -> int:
    """Index of the label showing after elapsed_seconds of rotation."""
    if count <= 0:
        raise ValueError("count must be positive")
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")
    if elapsed_seconds < 0:
        return 0
    return int(elapsed_seconds // interval_seconds) % count


def format_duration(seconds: int) -> str:
    """Short video length label: "1h 5m" from an hour up, otherwise "4m 10s"."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


def plan_selection_target(user: Optional[Dict[str, Any]]) -> Optional[str]:
    """Where choosing a plan leads: registration for visitors, nowhere yet for members."""
    if not user:
        return "/academy/register"
    return None
