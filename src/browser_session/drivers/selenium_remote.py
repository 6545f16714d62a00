"""Remote browser backend: a Selenium server or Grid reached over WebDriver."""

import os
import contextlib
from typing import Any, List, Optional

import urllib3
from selenium import webdriver
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.common.exceptions import (
    ElementClickInterceptedException,
    InvalidElementStateException,
    InvalidSelectorException,
    InvalidSessionIdException,
    JavascriptException,
    MoveTargetOutOfBoundsException,
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
    WebDriverException,
)

from ..config.environment import get_remote_config
from ..constants import SELENIUM_CONNECT_RETRIES
from ..errors import (
    ActionError,
    BrowserSessionError,
    ConfigurationError,
    DriverError,
    InvalidLocator,
    StaleNodeError,
)
from ..node import Node
from ..utils.retry import retry_op
from .base import Driver

import logging
logger = logging.getLogger(__name__)

# ElementNotInteractableException derives from InvalidElementStateException.
_ELEMENT_FAULTS = (
    ElementClickInterceptedException,
    InvalidElementStateException,
    MoveTargetOutOfBoundsException,
    NoSuchElementException,
)
_TRANSPORT_FAULTS = (InvalidSessionIdException, NoSuchWindowException, urllib3.exceptions.HTTPError, ConnectionError)

_BROWSER_OPTIONS = {
    "firefox": webdriver.FirefoxOptions,
    "chrome": webdriver.ChromeOptions,
    "edge": webdriver.EdgeOptions,
    "safari": webdriver.SafariOptions,
}


@contextlib.contextmanager
def _translate_faults():
    """Map Selenium exceptions onto the session's error taxonomy."""
    try:
        yield
    except StaleElementReferenceException as e:
        raise StaleNodeError(e.msg or "stale element reference") from e
    except _ELEMENT_FAULTS as e:
        raise ActionError(e.msg or e.__class__.__name__) from e
    except _TRANSPORT_FAULTS as e:
        raise DriverError(f"{e.__class__.__name__}: {e}") from e
    except JavascriptException:
        raise
    except WebDriverException as e:
        # Anything unclassified (browser unreachable, session deleted) is fatal.
        raise DriverError(f"{e.__class__.__name__}: {e.msg or e}") from e


class SeleniumNode(Node):
    """Handle on a live WebElement."""

    @property
    def tag_name(self) -> str:
        with _translate_faults():
            return self.native.tag_name.lower()

    @property
    def text(self) -> str:
        with _translate_faults():
            return self.native.text

    def attribute(self, name: str) -> Optional[str]:
        with _translate_faults():
            return self.native.get_attribute(name)

    def is_stale(self) -> bool:
        try:
            with _translate_faults():
                self.native.is_enabled()
        except StaleNodeError:
            return True
        return False

    def click(self) -> None:
        with _translate_faults():
            self.native.click()

    def set_value(self, value: str) -> None:
        with _translate_faults():
            el = self.native
            if el.tag_name.lower() == "input" and (el.get_attribute("type") or "").lower() == "file":
                el.send_keys(os.path.abspath(value))
                return
            el.clear()
            el.send_keys(value)

    def select(self) -> None:
        with _translate_faults():
            if not self.native.is_selected():
                self.native.click()

    def unselect(self) -> None:
        with _translate_faults():
            el = self.native
            if el.tag_name.lower() == "option":
                select = el.find_element(By.XPATH, "./ancestor::select[1]")
                if not select.get_attribute("multiple"):
                    raise ActionError("Cannot unselect an option of a single-choice select")
            if el.is_selected():
                el.click()


class SeleniumRemoteDriver(Driver):
    """
    Backend driving a real browser through a running Selenium server.

    Unset connection parameters come from the environment (see
    ``config.environment.get_remote_config``). The WebDriver session is opened
    on first use and closed by ``quit()``.
    """

    name = "selenium"

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        browser_name: Optional[str] = None,
        app_host: Optional[str] = None,
        command_path: Optional[str] = None,
        options=None,
        browser: Optional[webdriver.Remote] = None,
    ):
        super().__init__(app_host=app_host)
        config = get_remote_config()
        self.host = host or config["host"]
        self.port = int(port or config["port"])
        self.command_path = command_path if command_path is not None else config["path"]
        self.browser_name = (browser_name or config["browser_name"]).lower()
        self.options = options
        self._browser = browser

    @property
    def command_executor(self) -> str:
        return f"http://{self.host}:{self.port}{self.command_path}"

    def _make_options(self):
        if self.options is not None:
            return self.options
        factory = _BROWSER_OPTIONS.get(self.browser_name)
        if factory is None:
            raise ConfigurationError(
                f"Unsupported browser {self.browser_name!r}; expected one of {sorted(_BROWSER_OPTIONS)}"
            )
        return factory()

    def _connect(self) -> webdriver.Remote:
        options = self._make_options()
        logger.info(f"Connecting to Selenium at {self.command_executor} ({self.browser_name})")
        try:
            return retry_op(
                lambda: webdriver.Remote(command_executor=self.command_executor, options=options),
                retries=SELENIUM_CONNECT_RETRIES,
            )
        except (WebDriverException,) + _TRANSPORT_FAULTS as e:
            raise DriverError(f"Could not open a session on {self.command_executor}: {e}") from e

    @property
    def browser(self) -> webdriver.Remote:
        if self.closed:
            raise DriverError("The selenium driver has been shut down")
        if self._browser is None:
            self._browser = self._connect()
        return self._browser

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, WebElement):
            return SeleniumNode(self, value)
        if isinstance(value, list):
            return [self._wrap(v) for v in value]
        return value

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate(self, url: str) -> None:
        with _translate_faults():
            self.browser.get(self.resolve_url(url))

    def current_url(self) -> str:
        with _translate_faults():
            return self.browser.current_url

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    def title(self) -> str:
        with _translate_faults():
            return self.browser.title

    def source(self) -> str:
        with _translate_faults():
            return self.browser.page_source

    def screenshot(self, path: str) -> None:
        with _translate_faults():
            saved = self.browser.save_screenshot(path)
        if not saved:
            raise BrowserSessionError(f"Could not write screenshot to {path}")

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    def run_script(self, code: str) -> None:
        with _translate_faults():
            self.browser.execute_script(code)

    def evaluate_script(self, code: str) -> Any:
        with _translate_faults():
            return self._wrap(self.browser.execute_script(f"return {code}"))

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    def _context(self, query: str, scope: Optional[SeleniumNode]):
        if scope is None:
            return self.browser, query
        return scope.native, self.relative_query(query)

    def find_one(self, query: str, scope: Optional[SeleniumNode] = None) -> Optional[SeleniumNode]:
        context, query = self._context(query, scope)
        with _translate_faults():
            try:
                return SeleniumNode(self, context.find_element(By.XPATH, query))
            except NoSuchElementException:
                return None
            except InvalidSelectorException as e:
                raise InvalidLocator(f"Invalid XPath {query!r}: {e.msg}") from e

    def find_all(self, query: str, scope: Optional[SeleniumNode] = None) -> List[SeleniumNode]:
        context, query = self._context(query, scope)
        with _translate_faults():
            try:
                elements = context.find_elements(By.XPATH, query)
            except InvalidSelectorException as e:
                raise InvalidLocator(f"Invalid XPath {query!r}: {e.msg}") from e
        return [SeleniumNode(self, el) for el in elements]

    def _shutdown(self) -> None:
        browser, self._browser = self._browser, None
        if browser is None:
            return
        try:
            browser.quit()
        except (WebDriverException,) + _TRANSPORT_FAULTS as e:
            logger.warning(f"Error while closing the remote browser session: {e}")


__all__ = ["SeleniumRemoteDriver", "SeleniumNode"]
