"""Quadtree implementation for efficient spatial partitioning and querying."""
from typing import Generic, List, Optional, TypeVar

from roadgrowth.citygen.dataclass import Bounds

T = TypeVar('T')


class QuadTree(Generic[T]):
    """Quadtree data structure for efficient spatial partitioning and querying.

    A quadtree recursively divides space into four quadrants to efficiently store and
    query spatial data. Items whose bounds straddle a split line are stored in every
    quadrant they touch, so retrieval may return the same item more than once.

    Attributes:
        bounds: The spatial bounds of this quadtree node.
        max_objects: Maximum number of objects before splitting.
        max_levels: Maximum depth of the quadtree.
        level: Current depth level of this node.
        objects: List of object bounds in this node.
        items: List of items corresponding to the bounds.
        nodes: Child nodes of this quadtree.
    """

    def __init__(self, bounds: Bounds, max_objects=10, max_levels=4, level=0):
        """Initialize a new quadtree node.

        Args:
            bounds: The spatial bounds of this quadtree node.
            max_objects: Maximum number of objects before splitting.
            max_levels: Maximum depth of the quadtree.
            level: Current depth level of this node.
        """
        self.bounds = bounds
        self.max_objects = max_objects
        self.max_levels = max_levels
        self.level = level
        self.objects: List[Bounds] = []
        self.items: List[T] = []
        self.nodes: List[Optional[QuadTree[T]]] = [None] * 4

    def split(self):
        """Split this node into four child nodes and push its objects down."""
        width = self.bounds.width / 2
        height = self.bounds.height / 2
        x = self.bounds.x
        y = self.bounds.y

        quadrants = [
            Bounds(x + width, y, width, height),
            Bounds(x, y, width, height),
            Bounds(x, y + height, width, height),
            Bounds(x + width, y + height, width, height),
        ]
        for i, quadrant in enumerate(quadrants):
            self.nodes[i] = QuadTree(quadrant, self.max_objects, self.max_levels, self.level + 1)

        objects, items = self.objects, self.items
        self.objects, self.items = [], []
        for rect, item in zip(objects, items):
            for node in self.get_relevant_nodes(rect):
                node.insert(rect, item)

    def get_relevant_nodes(self, rect: Bounds) -> List['QuadTree[T]']:
        """Get the child nodes that intersect with the given rectangle.

        Args:
            rect: The bounding rectangle to test intersection with.

        Returns:
            List of child nodes that intersect with the rectangle.
        """
        nodes = []
        mid_x = self.bounds.x + self.bounds.width / 2
        mid_y = self.bounds.y + self.bounds.height / 2

        low = rect.y <= mid_y
        high = rect.y + rect.height > mid_y

        if rect.x <= mid_x:
            if low:
                nodes.append(self.nodes[1])
            if high:
                nodes.append(self.nodes[2])
        if rect.x + rect.width > mid_x:
            if low:
                nodes.append(self.nodes[0])
            if high:
                nodes.append(self.nodes[3])
        return [n for n in nodes if n is not None]

    def insert(self, rect: Bounds, item: T):
        """Insert an item with its bounds into the quadtree.

        Args:
            rect: The bounding rectangle of the item.
            item: The item to insert.
        """
        if any(self.nodes):
            for node in self.get_relevant_nodes(rect):
                node.insert(rect, item)
            return
        self.objects.append(rect)
        self.items.append(item)

        if len(self.objects) > self.max_objects and self.level < self.max_levels:
            self.split()

    def retrieve_exact(self, rect: Bounds) -> List[T]:
        """Retrieve unique items whose own bounds intersect the given rectangle.

        Args:
            rect: The bounding rectangle to query.

        Returns:
            Items in insertion order of discovery, without duplicates.
        """
        result = []
        seen = set()
        for item, item_rect in self._retrieve_pairs(rect):
            if id(item) in seen or not rect.intersects(item_rect):
                continue
            seen.add(id(item))
            result.append(item)
        return result

    def _retrieve_pairs(self, rect: Bounds):
        if any(self.nodes):
            for node in self.get_relevant_nodes(rect):
                yield from node._retrieve_pairs(rect)
        else:
            yield from zip(self.items, self.objects)
