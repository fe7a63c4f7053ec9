# src/conformance/dom/models.py
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .core import Node
from ..errors import InvalidInputError


class DocumentTree:
    """
    Read-only arena over an immutable Node tree.

    Nodes are indexed by integer handle in pre-order (root is handle 0), so
    a handle doubles as the node's DOM-order position. Parent/child links,
    location paths and the id index are computed once at construction.
    """

    def __init__(self, root: Node):
        if root is None:
            raise InvalidInputError("A document root is required; got None.")

        self.root = root
        self._nodes: List[Node] = []
        self._parents: List[int] = []
        self._children: List[List[int]] = []
        self._paths: List[Tuple[int, ...]] = []
        self._ids: Dict[str, List[int]] = {}

        # Iterative pre-order walk: deep documents must not hit the recursion limit.
        stack: List[Tuple[Node, int, Tuple[int, ...]]] = [(root, -1, ())]
        while stack:
            node, parent, path = stack.pop()
            handle = len(self._nodes)
            self._nodes.append(node)
            self._parents.append(parent)
            self._children.append([])
            self._paths.append(path)
            if parent >= 0:
                self._children[parent].append(handle)

            node_id = node.attribute("id")
            if node_id:
                self._ids.setdefault(node_id, []).append(handle)

            for index in range(len(node.children) - 1, -1, -1):
                stack.append((node.children[index], handle, path + (index,)))

    def __len__(self) -> int:
        return len(self._nodes)

    # --- Navigation ---

    def handles(self) -> range:
        """All handles in document order."""
        return range(len(self._nodes))

    def node(self, handle: int) -> Node:
        return self._nodes[handle]

    def parent(self, handle: int) -> Optional[int]:
        parent = self._parents[handle]
        return parent if parent >= 0 else None

    def children(self, handle: int) -> Tuple[int, ...]:
        return tuple(self._children[handle])

    def ancestors(self, handle: int) -> Iterator[int]:
        """Yields the parent chain of a node, nearest first."""
        parent = self._parents[handle]
        while parent >= 0:
            yield parent
            parent = self._parents[parent]

    def descendants(self, handle: int) -> Iterator[int]:
        """Yields the subtree below a node in document order."""
        stack = list(reversed(self._children[handle]))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._children[current]))

    def path(self, handle: int) -> Tuple[int, ...]:
        return self._paths[handle]

    def resolve(self, path: Tuple[int, ...]) -> int:
        """Maps a location path back to its handle. Raises IndexError for paths outside the tree."""
        handle = 0
        for index in path:
            handle = self._children[handle][index]
        return handle

    # --- Queries ---

    def attribute(self, handle: int, name: str) -> Optional[str]:
        return self._nodes[handle].attribute(name)

    def find_by_id(self, node_id: str) -> Optional[int]:
        """First node (in document order) whose id equals `node_id`."""
        matches = self._ids.get(node_id)
        return matches[0] if matches else None

    def duplicate_ids(self) -> Dict[str, List[int]]:
        return {node_id: list(handles) for node_id, handles in self._ids.items() if len(handles) > 1}

    def text_content(self, handle: int, exclude: Optional[int] = None, alt_text: bool = False) -> str:
        """
        Concatenated text of a node and its descendants in document order,
        whitespace-normalised. The subtree rooted at `exclude` is left out;
        with `alt_text` the alt of each <img> stands in for the image.
        """
        parts: List[str] = []
        # Items are handles still to expand or text runs ready to emit.
        stack: List[Union[int, str]] = [handle]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                if item:
                    parts.append(item)
                continue
            if item == exclude:
                continue

            node = self._nodes[item]
            if alt_text and node.tag == "img":
                alt = " ".join((node.attribute("alt") or "").split())
                if alt:
                    parts.append(alt)

            runs = node.segments()
            ordered: List[Union[int, str]] = []
            for index, child in enumerate(self._children[item]):
                ordered.append(runs[index])
                ordered.append(child)
            ordered.append(runs[-1])
            stack.extend(reversed(ordered))
        return " ".join(parts)
