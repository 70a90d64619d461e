"""LxmlPageElement implementation of the PageElement protocol.

This module provides the standard PageElement used by the engine. It wraps an
``lxml.html.HtmlElement`` and evaluates CSS selectors (via cssselect) against
the element's descendants. Malformed selectors are logged and treated as
matching nothing.
"""

from __future__ import annotations

import logging

from cssselect import SelectorError
from lxml import etree, html
from lxml.html import HtmlElement

from trawl.common.exceptions import DocumentParseException
from trawl.common.selector_utils import css_to_descendant_xpath

logger = logging.getLogger(__name__)

# Stand-in for bodies lxml refuses as empty; such a page has no records.
EMPTY_DOCUMENT = "<html></html>"


class LxmlPageElement:
    """Implementation of PageElement protocol wrapping an lxml element.

    Attributes:
        _element: The underlying lxml HtmlElement.
        _url: The URL of the page, used for resolving relative URLs.
    """

    def __init__(self, element: HtmlElement, url: str = ""):
        """Initialize LxmlPageElement.

        Args:
            element: The lxml element to wrap.
            url: URL of the page the element was parsed from.
        """
        self._element = element
        self._url = url

    @classmethod
    def from_html(
        cls, content: str | bytes, url: str = ""
    ) -> LxmlPageElement:
        """Parse a full HTML document and wrap its root ``<html>`` element.

        Bytes are preferred so lxml can honour the page's declared charset.
        An empty or whitespace-only body parses as an empty document.

        Args:
            content: Raw page body.
            url: URL the page was fetched from.

        Returns:
            LxmlPageElement wrapping the document root.

        Raises:
            DocumentParseException: If the content holds no parseable document.
        """
        if not content.strip():
            content = EMPTY_DOCUMENT

        try:
            root = html.document_fromstring(content)
        except ValueError:
            # str input carrying an XML encoding declaration
            if not isinstance(content, str):
                raise
            parser = html.HTMLParser(encoding="utf-8")
            try:
                root = html.document_fromstring(
                    content.encode("utf-8"), parser=parser
                )
            except etree.LxmlError as e:
                raise DocumentParseException(
                    f"Could not parse page: {e}", url
                ) from e
        except etree.LxmlError as e:
            raise DocumentParseException(
                f"Could not parse page: {e}", url
            ) from e

        return cls(root, url)

    @property
    def url(self) -> str:
        """URL of the page this element belongs to."""
        return self._url

    def query_css(
        self,
        selector: str,
        description: str = "",
    ) -> list[LxmlPageElement]:
        """Query descendant elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.

        Returns:
            Matching descendants wrapped in LxmlPageElement, in document order.
            Empty if nothing matches or the selector is malformed.
        """
        try:
            xpath = css_to_descendant_xpath(selector)
            results = self._element.xpath(xpath)
        except (SelectorError, etree.XPathError) as e:
            logger.debug(
                "Selector %r (%s) matched nothing: %s",
                selector,
                description or "unnamed",
                e,
            )
            return []

        return [
            LxmlPageElement(result, self._url)
            for result in results
            if isinstance(result, HtmlElement)
        ]

    def text_content(self) -> str:
        """Extract the text content of the element and its descendants.

        Returns:
            Text content as a plain str.
        """
        return str(self._element.text_content())

    def own_text(self) -> str:
        """Extract only the text nodes that are direct children of the element.

        Returns:
            The element's leading text plus the tails of its children.
        """
        parts = [self._element.text or ""]
        parts.extend(child.tail or "" for child in self._element)
        return "".join(parts)

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        return self._element.get(name)

    def tag_name(self) -> str:
        """Get the element's tag name.

        Returns:
            Tag name as a lowercase string (e.g., "div", "a", "table").
        """
        tag = self._element.tag
        return tag.lower() if isinstance(tag, str) else ""

    def __repr__(self) -> str:
        return f"<LxmlPageElement {self.tag_name()} at {self._url or '?'}>"
