"""Flow-line extraction from a triangulated mesh.

The mesh is reduced to an adjacency graph whose nodes are triangle vertices
snapped to integer coordinates. Flow lines are then grown greedily: each walk
keeps turning as little as possible (or, in swirl mode, as consistently as
possible) and may reverse once to grow from its other end.

Key components:
- MeshGraph: Canonicalized node graph built from triangles
- find_path: Single greedy walk, modelled as a WalkPhase state machine
- find_paths: Repeated walks that consume the graph into disjoint paths
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from plotpaths.domain import round_half_up

logger = logging.getLogger(__name__)

Triangle = list[list[float]]


@dataclass(eq=False)
class MeshNode:
    """A canonical mesh vertex.

    Nodes compare and hash by identity; two triangle vertices that round to
    the same key share one node.

    Attributes:
        key: Canonical ``"<x>-<y>"`` key of rounded coordinates
        x: X of the first vertex seen with this key
        y: Y of the first vertex seen with this key
        adjacent: Nodes sharing at least one triangle with this node
    """

    key: str
    x: float
    y: float
    adjacent: list["MeshNode"] = field(default_factory=list, repr=False)

    def link(self, other: "MeshNode") -> None:
        """Add a symmetric adjacency edge."""
        if other is self:
            return
        if other not in self.adjacent:
            self.adjacent.append(other)
        if self not in other.adjacent:
            other.adjacent.append(self)


@dataclass
class PathSearchResult:
    """Outcome of a flow-line search.

    Attributes:
        paths: Extracted paths, each a list of nodes
        iterations: Number of start nodes popped from the queue
        hit_iteration_cap: True if the search stopped on its iteration cap
        used_count: Nodes consumed by the returned paths
        node_count: Nodes in the graph
    """

    paths: list[list[MeshNode]]
    iterations: int = 0
    hit_iteration_cap: bool = False
    used_count: int = 0
    node_count: int = 0

    @property
    def unused_count(self) -> int:
        return self.node_count - self.used_count


class WalkPhase(Enum):
    """States of a single greedy walk."""

    FORWARD = "forward"
    REVERSED = "reversed"
    TERMINATED = "terminated"


def mesh_key(x: float, y: float) -> str:
    """Canonical node key; vertices closer than the rounding step collapse."""
    return f"{round_half_up(x)}-{round_half_up(y)}"


def turn_angle(start: MeshNode, mid: MeshNode, end: MeshNode) -> float:
    """Signed turn at ``mid`` when walking start -> mid -> end, in radians."""
    dax = mid.x - start.x
    day = mid.y - start.y
    dbx = end.x - mid.x
    dby = end.y - mid.y
    return math.atan2(dax * dby - day * dbx, dax * dbx + day * dby)


def node_distance(a: MeshNode, b: MeshNode) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


class MeshGraph:
    """Adjacency graph over the vertices of a triangle mesh.

    Example:
        >>> graph = MeshGraph([[[0, 0], [1, 0], [1, 1]], [[0, 0], [1, 1], [0, 1]]])
        >>> len(graph)
        4
        >>> sorted(len(node.adjacent) for node in graph.nodes)
        [3, 3, 3, 3]
    """

    def __init__(self, triangles: list[Triangle]) -> None:
        """Build the graph.

        Args:
            triangles: Triangles as three ``[x, y]`` pairs each
        """
        self.triangles = sorted(triangles, key=lambda tri: tri[0][1])
        self._cache: dict[str, MeshNode] = {}
        self.nodes: list[MeshNode] = []

        for tri in self.triangles:
            corners = [self._node(vertex[0], vertex[1]) for vertex in tri]
            for node_a in corners:
                for node_b in corners:
                    node_a.link(node_b)

    def _node(self, x: float, y: float) -> MeshNode:
        key = mesh_key(x, y)
        node = self._cache.get(key)
        if node is None:
            node = MeshNode(key, float(x), float(y))
            self._cache[key] = node
            self.nodes.append(node)
        return node

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, key: str) -> MeshNode | None:
        """Look up a node by canonical key."""
        return self._cache.get(key)

    def find_path(
        self,
        start: MeshNode,
        next_node: MeshNode,
        angle_threshold: float = 0,
        length_threshold: float = 0,
        global_used: set[MeshNode] | None = None,
        swirl: bool = False,
    ) -> list[MeshNode]:
        return find_path(start, next_node, angle_threshold, length_threshold, global_used, swirl)

    def find_paths(
        self,
        angle_threshold: float = 15,
        length_threshold: float = 0,
        path_length_threshold: int = 5,
        swirl: bool = False,
        extend_ends: int = 0,
    ) -> PathSearchResult:
        return find_paths(
            self.nodes,
            angle_threshold,
            length_threshold,
            path_length_threshold,
            swirl,
            extend_ends,
        )


def _finish(phase: WalkPhase, path: list[MeshNode]) -> WalkPhase:
    if phase is WalkPhase.REVERSED:
        path.reverse()
    return WalkPhase.TERMINATED


def find_path(
    start: MeshNode,
    next_node: MeshNode,
    angle_threshold: float = 0,
    length_threshold: float = 0,
    global_used: set[MeshNode] | None = None,
    swirl: bool = False,
) -> list[MeshNode]:
    """Greedily walk the graph from the edge ``start -> next_node``.

    At each step the walk considers neighbours of the current node that are
    not the previous node, not used by this walk or ``global_used``, and not
    adjacent to the previous node (which would double back across the same
    triangle). The candidate with the smallest turn wins; in swirl mode the
    smallest change from the previous turn wins instead.

    A step that turns more than ``angle_threshold * 5`` or spans more than
    ``length_threshold`` ends the FORWARD phase: the path is reversed and the
    walk continues from its other end. The same condition in the REVERSED
    phase terminates the walk.

    Args:
        start: First node of the edge to follow
        next_node: Second node of the edge to follow
        angle_threshold: Turn threshold in degrees, 0 disables
        length_threshold: Step length threshold, 0 disables
        global_used: Nodes already consumed by other paths
        swirl: Prefer consistent turning over straight continuation

    Returns:
        The walked nodes in forward order, excluding ``start`` and ``next_node``
    """
    threshold = math.radians(angle_threshold)
    global_used = global_used if global_used is not None else set()

    path: list[MeshNode] = []
    used = {start, next_node}
    prev, current = start, next_node
    prev_turn: float | None = None
    phase = WalkPhase.FORWARD

    while phase is not WalkPhase.TERMINATED:
        best: MeshNode | None = None
        best_score = math.inf
        best_turn = 0.0

        for candidate in current.adjacent:
            if candidate is prev or candidate in used or candidate in global_used:
                continue
            if prev in candidate.adjacent:
                continue
            turn = turn_angle(prev, current, candidate)
            if swirl and prev_turn is not None:
                score = abs(prev_turn - turn)
            else:
                score = abs(turn)
            if score < best_score:
                best, best_score, best_turn = candidate, score, turn

        if best is None:
            phase = _finish(phase, path)
            continue

        violation = (threshold > 0 and best_score > threshold * 5) or (
            length_threshold > 0 and node_distance(prev, best) > length_threshold
        )

        if violation:
            if phase is WalkPhase.REVERSED or len(path) < 2:
                phase = _finish(phase, path)
                continue
            path.reverse()
            phase = WalkPhase.REVERSED
            prev, current = path[-2], path[-1]
            prev_turn = None
            continue

        prev_turn = best_turn
        used.add(best)
        path.append(best)
        prev, current = current, best

    return path


def _extend(path: list[MeshNode], used: set[MeshNode]) -> None:
    for at_start in (True, False):
        end = path[0] if at_start else path[-1]
        before = path[1] if at_start else path[-2]
        options = [node for node in end.adjacent if node not in used]
        if not options:
            continue
        pick = min(options, key=lambda node: abs(turn_angle(before, end, node)))
        if at_start:
            path.insert(0, pick)
        else:
            path.append(pick)
        used.add(pick)


def find_paths(
    nodes: list[MeshNode],
    angle_threshold: float = 15,
    length_threshold: float = 0,
    path_length_threshold: int = 5,
    swirl: bool = False,
    extend_ends: int = 0,
) -> PathSearchResult:
    """Consume the graph into disjoint flow lines.

    Start nodes are queued by ``x * y``. For each unused start, a walk is
    tried along every edge and the longest walk with more than
    ``max(1, path_length_threshold)`` nodes is kept; its nodes become used
    and the queue is re-sorted by distance to its last node so the next path
    starts nearby. Starts without a viable walk go to the back of the queue.
    Every pop counts toward a cap of ``3 * len(nodes)``; the cap is checked
    after each unused start, so already used starts are always drained.

    Args:
        nodes: Graph nodes to search
        angle_threshold: Turn threshold in degrees, 0 disables
        length_threshold: Step length threshold, 0 disables
        path_length_threshold: Minimum node count a path must exceed
        swirl: Prefer consistent turning over straight continuation
        extend_ends: Passes that grow each path by one unused node per end

    Returns:
        Search result with paths and iteration bookkeeping
    """
    queue = sorted(nodes, key=lambda node: node.x * node.y)
    min_length = max(1, path_length_threshold)
    max_tries = len(nodes) * 3

    used: set[MeshNode] = set()
    paths: list[list[MeshNode]] = []
    tries = 0
    hit_cap = False

    while queue:
        tries += 1
        start = queue.pop(0)

        if start in used:
            continue

        best_path: list[MeshNode] | None = None
        for neighbor in start.adjacent:
            path = find_path(start, neighbor, angle_threshold, length_threshold, used, swirl)
            if len(path) > min_length and (best_path is None or len(path) > len(best_path)):
                best_path = path

        if best_path is not None:
            paths.append(best_path)
            used.update(best_path)
            last = best_path[-1]
            queue.sort(key=lambda node: node_distance(last, node))
        else:
            queue.append(start)

        if tries > max_tries:
            hit_cap = True
            break

    for _ in range(extend_ends):
        for path in paths:
            _extend(path, used)

    if hit_cap:
        logger.warning(
            "Path search stopped at iteration cap (%d tries, %d of %d nodes used)",
            tries, len(used), len(nodes),
        )

    return PathSearchResult(
        paths=paths,
        iterations=tries,
        hit_iteration_cap=hit_cap,
        used_count=len(used),
        node_count=len(nodes),
    )
