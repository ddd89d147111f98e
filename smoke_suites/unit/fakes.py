"""
In-memory stand-ins for Playwright pages, used by the browser-free tests.

A FakePage maps selector strings to FakeElement lists. Locators are lazy,
so elements added after a locator was created are still found.
"""

from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class DummyConfig:
    """Flat key lookup with short timeouts."""

    DEFAULTS = {
        "storefront.base_url": "http://localhost:3000",
        "timeouts.action": 100,
        "timeouts.navigation": 100,
        "timeouts.exists": 50,
        "timeouts.expect": 100,
        "timeouts.add_to_cart_ready": 100,
        "timeouts.cart_badge": 50,
        "timeouts.success_indicator": 50,
        "smoke.strict": False,
    }

    def __init__(self, data: Optional[Dict] = None):
        self.data = {**self.DEFAULTS, **(data or {})}

    def get(self, key, default=None):
        return self.data.get(key, default)

    def timeout(self, name, default):
        return int(self.data.get(f"timeouts.{name}", default))


class FakeElement:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        attributes: Optional[Dict[str, str]] = None,
        children: Optional[Dict[str, List["FakeElement"]]] = None,
        click_error: Optional[Exception] = None,
    ):
        self.text = text
        self.visible = visible
        self.attributes = dict(attributes or {})
        self.children = children or {}
        self.click_error = click_error
        self.clicks: List[Dict] = []
        self.value: Optional[str] = None

    @property
    def clicked(self) -> bool:
        return bool(self.clicks)


class FakeLocator:
    def __init__(self, resolve: Callable[[], List[FakeElement]], selector: str, broken: bool = False):
        self._resolve = resolve
        self.selector = selector
        self.broken = broken

    def _nodes(self) -> List[FakeElement]:
        if self.broken:
            raise PlaywrightError(f"Unexpected token in selector: {self.selector}")
        return self._resolve()

    def _single(self) -> FakeElement:
        nodes = self._nodes()
        if not nodes:
            raise PlaywrightTimeoutError(f"Timeout exceeded waiting for {self.selector}")
        return nodes[0]

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(
            lambda: self._nodes()[index:index + 1],
            f"{self.selector} >> nth={index}",
            self.broken,
        )

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(
            lambda: [child for node in self._nodes() for child in node.children.get(selector, [])],
            f"{self.selector} >> {selector}",
        )

    async def count(self) -> int:
        return len(self._nodes())

    async def is_visible(self) -> bool:
        nodes = self._nodes()
        return bool(nodes) and nodes[0].visible

    async def text_content(self, timeout=None) -> str:
        return self._single().text

    async def get_attribute(self, name: str, timeout=None) -> Optional[str]:
        return self._single().attributes.get(name)

    async def click(self, timeout=None, force: bool = False, **kwargs) -> None:
        node = self._single()
        if node.click_error is not None and not force:
            raise node.click_error
        node.clicks.append({"force": force, **kwargs})

    async def fill(self, value: str, timeout=None) -> None:
        self._single().value = value

    async def wait_for(self, state: str = "visible", timeout=None) -> None:
        nodes = self._nodes()
        if nodes and (state == "attached" or nodes[0].visible):
            return
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector} ({state})")


class FakeResponse:
    def __init__(self, url: str, status: int = 200):
        self.url = url
        self.status = status


class FakeKeyboard:
    def __init__(self):
        self.pressed: List[str] = []

    async def press(self, key: str) -> None:
        self.pressed.append(key)


class FakePage:
    def __init__(self, url: str = "http://localhost:3000/"):
        self.url = url
        self.elements: Dict[str, List[FakeElement]] = {}
        self.broken_selectors = set()
        self.statuses: Dict[str, int] = {}
        self.listeners = defaultdict(list)
        self.visited: List[str] = []
        self.load_states: List[str] = []
        self.screenshots: List[str] = []
        self.keyboard = FakeKeyboard()

    def add(self, selector: str, *elements: FakeElement) -> FakeElement:
        """Register elements under a selector; returns the first one."""
        elements = elements or (FakeElement(),)
        self.elements.setdefault(selector, []).extend(elements)
        return elements[0]

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(
            lambda: list(self.elements.get(selector, [])),
            selector,
            broken=selector in self.broken_selectors,
        )

    def on(self, event: str, handler) -> None:
        self.listeners[event].append(handler)

    def emit(self, event: str, payload) -> None:
        for handler in self.listeners[event]:
            handler(payload)

    async def goto(self, url: str, wait_until=None, timeout=None) -> FakeResponse:
        self.url = url
        self.visited.append(url)
        return FakeResponse(url, self.statuses.get(url, 200))

    async def wait_for_load_state(self, state: str = "load", timeout=None) -> None:
        self.load_states.append(state)

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if path:
            Path(path).write_bytes(b"\x89PNG\r\n\x1a\n")
            self.screenshots.append(path)
        return b""

    async def title(self) -> str:
        return "Storefront"
