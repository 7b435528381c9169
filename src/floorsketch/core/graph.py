"""Transient planar graph used for split detection.

Vertices are keyed by quantized integer coordinates. A point that falls within
the merge tolerance of an existing vertex resolves to that vertex, so nearly
coincident vertices of different boundaries become one graph vertex. The first
point added for a vertex fixes its coordinates.

Edges are undirected and stored once, however many boundaries contribute them.
"""

from collections import Counter

from floorsketch.core.geometry import coordinate_key, distance
from floorsketch.domain import Point

VertexKey = tuple[int, int]


class PlanarGraph:
    """Undirected graph over merged boundary vertices.

    Example:
        >>> graph = PlanarGraph()
        >>> graph.add_cycle(rectangle)
        >>> graph.add_cycle(chord_cycle)
        >>> graph.is_two_cycle()
        True
    """

    def __init__(self, merge_tolerance: float = 5.0, quantum: float = 0.1) -> None:
        self.merge_tolerance = merge_tolerance
        self.quantum = quantum
        self._coordinates: dict[VertexKey, Point] = {}
        self._adjacency: dict[VertexKey, set[VertexKey]] = {}

    def resolve(self, point: Point) -> VertexKey | None:
        """Find the existing vertex a point merges into, if any."""
        key = coordinate_key(point, self.quantum)
        if key in self._coordinates:
            return key

        best: VertexKey | None = None
        best_distance = self.merge_tolerance
        for existing_key, existing in self._coordinates.items():
            d = distance(point, existing)
            if d < best_distance:
                best, best_distance = existing_key, d
        return best

    def add_vertex(self, point: Point) -> VertexKey:
        """Add a vertex, merging it into an existing one within tolerance.

        Returns:
            Key of the vertex the point resolved to
        """
        key = self.resolve(point)
        if key is not None:
            return key

        key = coordinate_key(point, self.quantum)
        self._coordinates[key] = Point(point.x, point.y)
        self._adjacency[key] = set()
        return key

    def add_edge(self, a: VertexKey, b: VertexKey) -> None:
        """Connect two vertices. Self loops are ignored."""
        if a == b:
            return
        self._adjacency[a].add(b)
        self._adjacency[b].add(a)

    def add_cycle(self, points: list[Point]) -> list[VertexKey]:
        """Add a closed boundary: every consecutive pair plus the closing edge.

        Args:
            points: Boundary vertices (implicitly closed)

        Returns:
            Resolved vertex keys in boundary order, consecutive duplicates
            removed
        """
        keys: list[VertexKey] = []
        for point in points:
            key = self.add_vertex(point)
            if not keys or keys[-1] != key:
                keys.append(key)
        if len(keys) > 1 and keys[0] == keys[-1]:
            keys.pop()

        for i in range(len(keys)):
            self.add_edge(keys[i], keys[(i + 1) % len(keys)])
        return keys

    @property
    def vertex_count(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self._adjacency.values()) // 2

    def vertices(self) -> list[VertexKey]:
        return list(self._adjacency)

    def neighbors(self, key: VertexKey) -> list[VertexKey]:
        return sorted(self._adjacency[key])

    def degree(self, key: VertexKey) -> int:
        return len(self._adjacency[key])

    def degree_histogram(self) -> dict[int, int]:
        """Number of vertices per degree."""
        return dict(Counter(len(neighbors) for neighbors in self._adjacency.values()))

    def is_two_cycle(self) -> bool:
        """Check for the "one area bisected by one chord" topology.

        True iff E == V + 1, exactly two vertices have degree 3 and every other
        vertex has degree 2.
        """
        if self.edge_count != self.vertex_count + 1:
            return False
        histogram = self.degree_histogram()
        return histogram.get(3) == 2 and set(histogram) <= {2, 3}

    def junctions(self) -> list[VertexKey]:
        """Degree-3 vertices, in sorted key order."""
        return sorted(key for key, neighbors in self._adjacency.items() if len(neighbors) == 3)

    def simple_paths(self, start: VertexKey, end: VertexKey) -> list[list[VertexKey]]:
        """Enumerate every simple path between two vertices by depth-first search.

        Args:
            start: First vertex
            end: Last vertex

        Returns:
            Paths as vertex key lists, each starting at start and ending at end
        """
        paths: list[list[VertexKey]] = []
        stack: list[tuple[VertexKey, list[VertexKey]]] = [(start, [start])]

        while stack:
            current, path = stack.pop()
            if current == end:
                paths.append(path)
                continue
            # Reversed so neighbors are explored in sorted order
            for neighbor in reversed(self.neighbors(current)):
                if neighbor not in path:
                    stack.append((neighbor, path + [neighbor]))

        return paths

    def coordinates(self, key: VertexKey) -> Point:
        """Coordinates of a vertex."""
        return self._coordinates[key]
