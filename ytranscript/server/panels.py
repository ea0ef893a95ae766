"""In-memory store of open transcript panels.

WHY: Each open panel shows one video. The panel must remember which URL
it shows so it can be refreshed, and closing one panel must forget
exactly that panel's URL. Keying by list position breaks as soon as
panels are closed out of order, so every panel gets its own id.

HOW: Panel is a small dataclass; PanelStore is a lock-protected dict
keyed by a UUID4 hex id generated when the panel opens.

RULES:
- All store mutations are protected by threading.Lock
- open_panel() generates the id; ids are never reused
- close_panel() removes only the given panel; others keep their URLs
- get_panel() returns None for unknown ids (no exceptions)
- Only the URL is stored; blocks are recomputed on every view
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_PANELS = 50


@dataclass
class Panel:
    """One open panel and the URL it displays."""

    id: str
    url: str
    opened_at: float
    updated_at: float


class PanelStore:
    """Thread-safe in-memory mapping of panel id to URL."""

    def __init__(self, max_panels: int = DEFAULT_MAX_PANELS) -> None:
        self._panels: Dict[str, Panel] = {}
        self._lock = threading.Lock()
        self.max_panels = max_panels

    def open_panel(self, url: str) -> Panel:
        """Open a new panel showing ``url``.

        Raises:
            ValueError: If max_panels panels are already open.
        """
        with self._lock:
            if len(self._panels) >= self.max_panels:
                raise ValueError(
                    "Maximum number of open panels ({}) reached".format(self.max_panels)
                )

            panel_id = uuid.uuid4().hex
            now = time.time()
            panel = Panel(id=panel_id, url=url, opened_at=now, updated_at=now)
            self._panels[panel_id] = panel

        logger.info("Opened panel %s for %s", panel_id, url)
        return panel

    def get_panel(self, panel_id: str) -> Optional[Panel]:
        with self._lock:
            return self._panels.get(panel_id)

    def list_panels(self) -> List[Panel]:
        """Return all panels, oldest first (a new list)."""
        with self._lock:
            return sorted(self._panels.values(), key=lambda p: p.opened_at)

    def set_url(self, panel_id: str, url: str) -> Optional[Panel]:
        """Point an open panel at a new URL; None if the panel is unknown."""
        with self._lock:
            panel = self._panels.get(panel_id)
            if panel is None:
                return None
            panel.url = url
            panel.updated_at = time.time()
            return panel

    def close_panel(self, panel_id: str) -> bool:
        """Forget a panel. Returns False if it was not open."""
        with self._lock:
            panel = self._panels.pop(panel_id, None)

        if panel is None:
            return False

        logger.info("Closed panel %s", panel_id)
        return True
