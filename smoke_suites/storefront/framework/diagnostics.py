"""
================================================================================
Diagnostic Capture
================================================================================

Passive listeners attached to every page object:
    - ConsoleCapture: browser console messages and uncaught page errors
    - ResponseCapture: failed document/API responses (status >= 400)

Both keep a bounded buffer and are dumped into the Allure report when a
scenario fails.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List

from playwright.async_api import ConsoleMessage, Page, Response


MAX_ENTRIES = 50


class ConsoleCapture:
    """Buffers console messages emitted by a page."""

    def __init__(self, page: Page, max_entries: int = MAX_ENTRIES):
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=max_entries)
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)

    def _on_console(self, message: ConsoleMessage) -> None:
        self._entries.append({
            "timestamp": datetime.now().isoformat(),
            "type": message.type,
            "text": message.text,
        })

    def _on_page_error(self, error: Any) -> None:
        self._entries.append({
            "timestamp": datetime.now().isoformat(),
            "type": "pageerror",
            "text": str(error),
        })

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def errors(self) -> List[str]:
        """Text of console errors and uncaught exceptions."""
        return [e["text"] for e in self._entries if e["type"] in ("error", "pageerror")]

    def clear(self) -> None:
        self._entries.clear()

    def to_text(self) -> str:
        return "\n".join(f"[{e['type']}] {e['text']}" for e in self._entries)


class ResponseCapture:
    """Buffers failed responses for documents and API calls."""

    TRACKED_RESOURCES = ("document", "fetch", "xhr")

    def __init__(self, page: Page, max_entries: int = MAX_ENTRIES):
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=max_entries)
        page.on("response", self._on_response)

    def _on_response(self, response: Response) -> None:
        if response.status < 400:
            return
        if response.request.resource_type not in self.TRACKED_RESOURCES:
            return
        self._entries.append({
            "timestamp": datetime.now().isoformat(),
            "url": response.url,
            "status": response.status,
            "resource_type": response.request.resource_type,
        })

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def to_json(self) -> str:
        return json.dumps(self.entries, indent=2)


__all__ = [
    "ConsoleCapture",
    "ResponseCapture",
]
