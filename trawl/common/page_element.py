"""PageElement protocol for DOM access during extraction.

The engine never touches lxml directly. It talks to this protocol, which is
backed by static parsed HTML (see ``LxmlPageElement``). Queries fail soft:
a selector that matches nothing and a selector that does not parse both
produce an empty list.
"""

from __future__ import annotations

from typing import Protocol


class PageElement(Protocol):
    """Read-only access to one element of a parsed page."""

    @property
    def url(self) -> str:
        """URL of the page this element belongs to."""
        ...

    def query_css(
        self,
        selector: str,
        description: str = "",
    ) -> list[PageElement]:
        """Query descendant elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected,
                used in debug logging.

        Returns:
            Matching descendants in document order. Empty if nothing matches
            or the selector is malformed.
        """
        ...

    def text_content(self) -> str:
        """Extract the text content of the element and its descendants."""
        ...

    def own_text(self) -> str:
        """Extract only the text nodes directly under the element."""
        ...

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        ...

    def tag_name(self) -> str:
        """Get the element's tag name.

        Returns:
            Tag name as a lowercase string (e.g., "div", "a", "table").
        """
        ...
