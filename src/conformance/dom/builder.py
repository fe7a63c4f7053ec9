# src/conformance/dom/builder.py
import logging
from typing import Iterator, List, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .core import Node
from .style import StyleContext

logger = logging.getLogger(__name__)

# Elements whose character data is never rendered as text.
_OPAQUE_TEXT_TAGS = {"script", "style", "template", "noscript"}

DOCUMENT_TAG = "#document"


class DOMBuilder:
    """
    Builder responsible for turning raw HTML into the immutable Node tree
    consumed by the checks. It resolves a minimal computed style (inline
    colour, background, font size and weight, with inheritance).
    """

    def parse_doc(self, html: str) -> Node:
        """
        Parses raw HTML content into a Node tree.

        Args:
            html (str): The raw HTML string.

        Returns:
            Node: The <html> element when present, otherwise a synthetic
                  '#document' node wrapping the top-level elements.
        """
        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = (html or "").replace('\ufeff', '').strip()
        soup = BeautifulSoup(clean_html, 'html.parser')

        html_tag = soup.find('html')
        if isinstance(html_tag, Tag) and html_tag.parent is soup:
            root = self._build_tree(html_tag, StyleContext())
        else:
            context = StyleContext()
            children = [self._build_tree(child, context) for child in soup.children if isinstance(child, Tag)]
            runs = self._text_runs(soup)
            root = Node(tag=DOCUMENT_TAG, children=children, text=" ".join(runs), text_runs=runs)

        logger.debug("Built document tree rooted at <%s>", root.tag)
        return root

    def _build_tree(self, tag: Tag, inherited: StyleContext) -> Node:
        """
        Converts a BeautifulSoup Tag into a Node, bottom-up.

        Uses an explicit stack so nesting depth is not bounded by the
        interpreter's recursion limit.
        """
        # Frame: (tag, resolved style, finished child nodes, pending child tags)
        stack: List[Tuple[Tag, StyleContext, List[Node], Iterator[Tag]]] = [
            (tag, inherited.derive(tag.get('style')), [], self._element_children(tag))
        ]
        while True:
            current, context, built, pending = stack[-1]
            child = next(pending, None)
            if child is not None:
                stack.append((child, context.derive(child.get('style')), [], self._element_children(child)))
                continue

            stack.pop()
            runs = self._text_runs(current) if current.name not in _OPAQUE_TEXT_TAGS else ()
            node = Node(
                tag=current.name,
                attrs=list(current.attrs.items()),
                children=built,
                text=" ".join(runs),
                text_runs=runs,
                style=context.computed(),
            )
            if not stack:
                return node
            stack[-1][2].append(node)

    @staticmethod
    def _element_children(tag: Tag) -> Iterator[Tag]:
        if tag.name in _OPAQUE_TEXT_TAGS:
            return iter(())
        return (child for child in tag.children if isinstance(child, Tag))

    @staticmethod
    def _text_runs(tag) -> Tuple[str, ...]:
        """
        Direct character data of a tag, split at its child elements.
        Comments and doctypes are excluded.
        """
        runs: List[str] = []
        current: List[str] = []
        for child in tag.children:
            if isinstance(child, Tag):
                runs.append(" ".join(" ".join(current).split()))
                current = []
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                current.append(str(child))
        runs.append(" ".join(" ".join(current).split()))
        return tuple(runs)
