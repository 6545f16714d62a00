"""Headless backend: plain HTTP requests plus an lxml document."""

import os
import contextlib
from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests
import lxml.html
from lxml import etree

from ..constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from ..errors import ActionError, DriverError, InvalidLocator, NotSupportedError
from ..node import Node
from .base import Driver

import logging
logger = logging.getLogger(__name__)

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"
_UNSETTABLE_INPUT_TYPES = ("checkbox", "radio", "submit", "button", "image", "reset")


class HttpNode(Node):
    """Handle on an element of the document the driver last loaded."""

    def __init__(self, driver: "HttpDriver", native, generation: int):
        super().__init__(driver, native)
        self.generation = generation

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def tag_name(self) -> str:
        return self.native.tag

    @property
    def text(self) -> str:
        return " ".join(self.native.text_content().split())

    @property
    def value(self) -> Optional[str]:
        el = self.native
        if el.tag in ("textarea", "select"):
            return el.value
        return el.get("value")

    @property
    def input_type(self) -> str:
        return (self.native.get("type") or "text").lower()

    def attribute(self, name: str) -> Optional[str]:
        return self.native.get(name)

    def is_stale(self) -> bool:
        return self.generation != self.driver.generation

    def is_checked(self) -> bool:
        return "checked" in self.native.attrib

    def is_selected(self) -> bool:
        return "selected" in self.native.attrib

    def _is_disabled(self) -> bool:
        el = self.native
        if "disabled" in el.attrib:
            return True
        if el.tag == "option":
            select = self._enclosing("select")
            return select is not None and "disabled" in select.attrib
        return False

    def _is_submit(self) -> bool:
        el = self.native
        if el.tag == "input":
            return self.input_type in ("submit", "image")
        if el.tag == "button":
            return (el.get("type") or "submit").lower() == "submit"
        return False

    def _enclosing(self, tag: str):
        return next(self.native.iterancestors(tag), None)

    def form(self):
        """The form this control submits with, if any."""
        form_id = self.native.get("form")
        if form_id:
            found = self.native.getroottree().getroot().xpath("//form[@id=$id]", id=form_id)
            if found:
                return found[0]
        return self._enclosing("form")

    def _check_enabled(self, action: str) -> None:
        self._ensure_fresh()
        if self._is_disabled():
            raise ActionError(f"Cannot {action} disabled element {self!r}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def click(self) -> None:
        self._check_enabled("click")
        el = self.native
        link = el if el.tag == "a" else self._enclosing("a")

        if link is not None and link.get("href") is not None:
            self.driver.follow(link.get("href"))
        elif self._is_submit():
            form = self.form()
            if form is not None:
                self.driver.submit(form, button=self)
        elif el.tag == "input" and self.input_type == "checkbox":
            if self.is_checked():
                self.unselect()
            else:
                self.select()
        elif el.tag == "input" and self.input_type == "radio":
            self.select()

    def set_value(self, value: str) -> None:
        self._check_enabled("set value of")
        el = self.native
        if "readonly" in el.attrib:
            raise ActionError(f"Cannot set value of read-only element {self!r}")

        if el.tag == "textarea":
            for child in list(el):
                el.remove(child)
            el.text = value
            return

        if el.tag != "input":
            raise ActionError(f"Cannot set value on <{el.tag}>")

        kind = self.input_type
        if kind in _UNSETTABLE_INPUT_TYPES:
            raise ActionError(f"Cannot set value of input type {kind!r}")
        if kind == "file":
            value = os.path.abspath(value)
            if not os.path.isfile(value):
                raise ActionError(f"File not found: {value}")
        el.set("value", value)

    def select(self) -> None:
        self._check_enabled("select")
        el = self.native

        if el.tag == "option":
            select = self._enclosing("select")
            if select is not None and "multiple" not in select.attrib:
                for option in select.iter("option"):
                    option.attrib.pop("selected", None)
            el.set("selected", "selected")
        elif el.tag == "input" and self.input_type == "radio":
            name = el.get("name")
            if name:
                form = self.form()
                group_root = form if form is not None else el.getroottree().getroot()
                for radio in group_root.xpath(".//input[@type='radio' and @name=$name]", name=name):
                    radio.attrib.pop("checked", None)
            el.set("checked", "checked")
        elif el.tag == "input" and self.input_type == "checkbox":
            el.set("checked", "checked")
        else:
            raise ActionError(f"Cannot select {self!r}")

    def unselect(self) -> None:
        self._check_enabled("unselect")
        el = self.native

        if el.tag == "input" and self.input_type == "checkbox":
            el.attrib.pop("checked", None)
        elif el.tag == "option":
            select = self._enclosing("select")
            if select is None or "multiple" not in select.attrib:
                raise ActionError("Cannot unselect an option of a single-choice select")
            el.attrib.pop("selected", None)
        else:
            raise ActionError(f"Cannot unselect {self!r}")


class HttpDriver(Driver):
    """
    Headless backend built on ``requests`` and ``lxml.html``.

    Form state (typed values, checked boxes, selected options, attached files)
    lives in the parsed document and is sent when a submit control is clicked.
    No JavaScript runs.
    """

    name = "http"

    def __init__(
        self,
        app_host: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[dict] = None,
        http: Optional[requests.Session] = None,
    ):
        super().__init__(app_host=app_host)
        self.timeout = DEFAULT_HTTP_TIMEOUT if timeout is None else timeout
        if http is None:
            http = requests.Session()
            http.headers["User-Agent"] = DEFAULT_USER_AGENT
        self.http = http
        if headers:
            self.http.headers.update(headers)

        self.generation = 0
        self._response = None
        self._document = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs) -> None:
        logger.debug(f"{method} {url}")
        try:
            response = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise DriverError(f"{method} {url} failed: {e}") from e
        self._load(response)

    def _load(self, response) -> None:
        content = response.content or b""
        try:
            document = lxml.html.document_fromstring(content, base_url=response.url) if content.strip() else None
        except etree.ParserError:
            document = None
        if document is None:
            document = lxml.html.document_fromstring(_EMPTY_DOCUMENT, base_url=response.url)

        self._response = response
        self._document = document
        self.generation += 1

    def _absolute(self, url: str) -> str:
        base = self.current_url() or self.app_host
        if base:
            return urljoin(base, url)
        return url

    def follow(self, href: str) -> None:
        """Navigate the way following a link does."""
        if href.startswith("#"):
            return
        if href.lower().startswith("javascript:"):
            raise ActionError("JavaScript links need a script-capable backend")
        self._request("GET", self._absolute(href))

    def submit(self, form, button: Optional[HttpNode] = None) -> None:
        """Submit ``form`` with its current control state."""
        values = list(form.form_values())
        if button is not None and button.native.get("name"):
            values.append((button.native.get("name"), button.native.get("value") or ""))

        method = (form.get("method") or "GET").upper()
        action = self._absolute(form.get("action") or self.current_url())

        if method != "POST":
            # The form values replace any query string already on the action URL.
            action = urlunsplit(urlsplit(action)._replace(query="", fragment=""))
            self._request("GET", action, params=values)
            return

        uploads = [
            (el.get("name"), el.get("value"))
            for el in form.xpath(".//input[@type='file']")
            if el.get("name") and el.get("value") and "disabled" not in el.attrib
        ]
        with contextlib.ExitStack() as stack:
            files = {
                name: (os.path.basename(path), stack.enter_context(open(path, "rb")))
                for name, path in uploads
            }
            self._request("POST", action, data=values, files=files or None)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, url: str) -> None:
        self._request("GET", self._absolute(self.resolve_url(url)))

    def current_url(self) -> str:
        return self._response.url if self._response is not None else ""

    @property
    def status_code(self) -> Optional[int]:
        return self._response.status_code if self._response is not None else None

    @property
    def response_headers(self) -> dict:
        return dict(self._response.headers) if self._response is not None else {}

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    def title(self) -> str:
        if self._document is None:
            return ""
        return (self._document.findtext(".//title") or "").strip()

    def source(self) -> str:
        return self._response.text if self._response is not None else ""

    def screenshot(self, path: str) -> None:
        raise NotSupportedError("The http driver cannot take screenshots")

    def run_script(self, code: str) -> None:
        raise NotSupportedError("The http driver does not run JavaScript")

    def evaluate_script(self, code: str):
        raise NotSupportedError("The http driver does not run JavaScript")

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    def find_one(self, query: str, scope: Optional[HttpNode] = None) -> Optional[HttpNode]:
        found = self.find_all(query, scope=scope)
        return found[0] if found else None

    def find_all(self, query: str, scope: Optional[HttpNode] = None) -> List[HttpNode]:
        if scope is not None:
            scope._ensure_fresh()
            context = scope.native
            query = self.relative_query(query)
        elif self._document is None:
            return []
        else:
            context = self._document

        try:
            results = context.xpath(query)
        except etree.XPathError as e:
            raise InvalidLocator(f"Invalid XPath {query!r}: {e}") from e

        if not isinstance(results, list):
            return []
        return [
            HttpNode(self, el, self.generation)
            for el in results
            if isinstance(el, etree._Element) and isinstance(el.tag, str)
        ]

    def _shutdown(self) -> None:
        self.http.close()
        self._document = None


__all__ = ["HttpDriver", "HttpNode"]
