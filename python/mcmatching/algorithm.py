"""
Algorithm for finding a maximum cardinality matching in general graphs.
"""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple, Optional

from .datastruct import EnumerableDisjointSet


def maximum_cardinality_matching(
        edges: list[tuple[int, int]],
        num_vertex: Optional[int] = None
        ) -> list[tuple[int, int]]:
    """Compute a maximum-cardinality matching in the general undirected
    graph given by "edges".

    The graph is specified as a list of edges, each edge specified as a tuple
    of its two vertices.
    Self-edges and multiple edges between the same pair of vertices are
    allowed. Self-edges are never matched.
    The graph may be non-connected (i.e. contain multiple components).

    Vertices are indexed by consecutive, non-negative integers, such that
    the first vertex has index 0 and the last vertex has index (n-1).

    This function takes time O(n * m * alpha(n)), where "n" is the number
    of vertices and "m" is the number of edges.
    This function uses O(n + m) memory.

    Parameters:
        edges: List of edges, each edge specified as a tuple "(x, y)"
            where "x" and "y" are vertex indices.
        num_vertex: Optional number of vertices. If not specified, the
            number of vertices is derived from the highest vertex index
            in "edges".

    Returns:
        List of pairs of matched vertex indices.
        This is a subset of the edges in the graph, in the same order
        as the edges appear in the input.

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
        MatchingError: If the matching algorithm fails.
            This can only happen if there is a bug in the algorithm.
    """

    # Check that the input meets all constraints.
    _check_input_types(edges, num_vertex)

    if num_vertex is None:
        if edges:
            num_vertex = 1 + max(max(x, y) for (x, y) in edges)
        else:
            num_vertex = 0

    # Initialize graph representation.
    graph = Graph(num_vertex, edges)

    # Find the matching. The result is stored in the graph.
    find_maximum_matching(graph)

    # Extract the final solution.
    return graph.pairs()


class MatchingError(Exception):
    """Raised when verification of the matching fails.

    This can only happen if there is a bug in the algorithm.
    """


def _check_input_types(
        edges: list[tuple[int, int]],
        num_vertex: Optional[int]
        ) -> None:
    """Check that the input consists of valid data types and valid
    numerical ranges.

    This function takes time O(m).

    Raises:
        ValueError: If the input does not satisfy the constraints.
        TypeError: If the input contains invalid data types.
    """

    if not isinstance(edges, list):
        raise TypeError('"edges" must be a list')

    if num_vertex is not None:
        if not isinstance(num_vertex, int):
            raise TypeError('"num_vertex" must be an integer')
        if num_vertex < 0:
            raise ValueError('"num_vertex" must be non-negative')

    for e in edges:
        if (not isinstance(e, tuple)) or (len(e) != 2):
            raise TypeError("Each edge must be specified as a 2-tuple")

        (x, y) = e

        if (not isinstance(x, int)) or (not isinstance(y, int)):
            raise TypeError("Edge endpoints must be integers")

        if (x < 0) or (y < 0):
            raise ValueError("Edge endpoints must be non-negative integers")

        if (num_vertex is not None) and max(x, y) >= num_vertex:
            raise ValueError(
                f"Edge ({x}, {y}) refers to a vertex outside the graph")


class Graph:
    """Representation of the input graph and the current matching.

    The structure of the graph remains unchanged while the algorithm runs.
    The matching is stored as a flag on each edge and is updated in place.
    """

    def __init__(
            self,
            num_vertex: int,
            edges: list[tuple[int, int]],
            matched: Optional[list[bool]] = None
            ) -> None:
        """Initialize the graph representation and prepare an adjacency list.

        This function takes time O(n + m).

        Parameters:
            num_vertex: Number of vertices.
            edges: List of edges, each edge specified as a tuple "(x, y)".
            matched: Optional list of initial matching flags, one per edge.
                The flagged edges must form a valid matching.

        Raises:
            ValueError: If an edge refers to a non-existing vertex,
                or if the initial matching is not valid.
        """

        for (x, y) in edges:
            if not ((0 <= x < num_vertex) and (0 <= y < num_vertex)):
                raise ValueError(
                    f"Edge ({x}, {y}) refers to a vertex outside the graph")

        # Vertices are indexed by integers in range 0 .. n-1.
        # Edges are indexed by integers in range 0 .. m-1.
        #
        # "edges[e] = (x, y)" where
        #     "e" is an edge index;
        #     "x" and "y" are vertex indices of the incident vertices.
        self.num_vertex: int = num_vertex
        self.edges: list[tuple[int, int]] = edges

        # "adjacent_edges[x]" is the list of edge indices of edges incident
        # to the vertex with index "x".
        #
        # A self-edge appears twice in the list of its vertex.
        self.adjacent_edges: list[list[int]] = [
            [] for x in range(num_vertex)]
        for (e, (x, y)) in enumerate(edges):
            self.adjacent_edges[x].append(e)
            self.adjacent_edges[y].append(e)

        # "edge_matched[e]" is True if edge "e" is part of the matching.
        if matched is None:
            self.edge_matched: list[bool] = len(edges) * [False]
        else:
            if len(matched) != len(edges):
                raise ValueError(
                    "Initial matching must have one flag per edge")
            self.edge_matched = [bool(flag) for flag in matched]

        # "vertex_matcher[x]" is the index of the matched edge incident
        # to vertex "x", or -1 if "x" is unmatched.
        self.vertex_matcher: list[int] = num_vertex * [-1]

        # "vertex_erased[x]" is True if vertex "x" has been proven
        # unmatchable, together with the alternating tree that proved it.
        # Erased vertices are ignored by all further searches.
        self.vertex_erased: list[bool] = num_vertex * [False]

        try:
            self.refresh_matchers()
        except MatchingError as exc:
            raise ValueError(f"Invalid initial matching: {exc}") from None

    def other_endpoint(self, e: int, x: int) -> int:
        """Return the endpoint of edge "e" that is not vertex "x"."""
        (p, q) = self.edges[e]
        assert x in (p, q)
        return q if p == x else p

    def edge_touches(self, e: int, x: int) -> bool:
        """Return True if edge "e" is incident to vertex "x"."""
        return x in self.edges[e]

    def set_matched(self, e: int, matched: bool) -> None:
        self.edge_matched[e] = matched

    def toggle(self, e: int) -> None:
        self.edge_matched[e] = not self.edge_matched[e]

    def refresh_matchers(self) -> None:
        """Recompute "vertex_matcher" from the matching flags of the edges.

        This function takes time O(n + m).

        Raises:
            MatchingError: If the flagged edges do not form a matching.
        """
        matcher = self.vertex_matcher
        for x in range(self.num_vertex):
            matcher[x] = -1

        for e in self.matched_edges():
            (x, y) = self.edges[e]
            if x == y:
                raise MatchingError(f"Self-edge ({x}, {y}) is matched")
            for z in (x, y):
                if matcher[z] != -1:
                    raise MatchingError(
                        f"Vertex {z} is matched by edges"
                        f" {matcher[z]} and {e}")
                matcher[z] = e

    def matched_edges(self) -> list[int]:
        """Return the indices of all matched edges, in increasing order."""
        return [e for (e, flag) in enumerate(self.edge_matched) if flag]

    def matching_size(self) -> int:
        return sum(self.edge_matched)

    def pairs(self) -> list[tuple[int, int]]:
        """Return the matched edges as vertex pairs, in input order."""
        return [self.edges[e] for e in self.matched_edges()]


def augment(graph: Graph, path: list[int]) -> None:
    """Flip the matching flag of every edge on the path.

    When applied to an augmenting path, this increases the number of
    matched edges by 1. Applying it twice restores the original flags.

    This function takes time O(k), where "k" is the length of the path.
    """
    for e in path:
        graph.toggle(e)


class MatchingStats(NamedTuple):
    """Counters collected while running the matching algorithm."""
    num_search: int = 0
    num_augment: int = 0
    num_blossom: int = 0
    num_erased: int = 0


# Each vertex (or contracted cycle) in the alternating tree is labeled
# OUTER (even distance to the root) or INNER (odd distance to the root).
# Vertices outside the tree are UNVISITED.
class _Label(enum.IntEnum):
    UNVISITED = 0
    OUTER = 1
    INNER = 2


class _Cycle:
    """Represents an odd alternating cycle that was contracted into
    a single node of the alternating tree.

    The members of the cycle are the nodes of the alternating tree at the
    time of contraction. Each member is either a single vertex, or
    a cycle that was contracted earlier in the same search.

    Cycle records are never modified between contraction and expansion,
    except for the link to the enclosing cycle and the entry vertex.
    """

    def __init__(
            self,
            members: list[int],
            subcycles: list[Optional[_Cycle]],
            edges: list[int],
            ends: list[tuple[int, int]],
            in_edge: int
            ) -> None:
        """Initialize a new cycle record."""

        # Sanity check.
        n = len(members)
        assert len(subcycles) == n
        assert len(edges) == n
        assert len(ends) == n
        assert n >= 3
        assert n % 2 == 1

        # "members[i]" is the representative of member "i" at the time
        # of contraction. "members[0]" contains the base of the cycle,
        # i.e. the member closest to the root of the alternating tree.
        self.members: list[int] = members

        # "subcycles[i]" is the cycle record of member "i",
        # or None if member "i" is a single vertex.
        self.subcycles: list[Optional[_Cycle]] = subcycles

        # "edges[i]" is the index of the edge between member "i" and
        # member "(i + 1) % n".
        #
        # "ends[i] = (x, y)" where "x" is the endpoint of "edges[i]" in
        # member "i", and "y" is the endpoint in member "(i + 1) % n".
        self.edges: list[int] = edges
        self.ends: list[tuple[int, int]] = ends

        # "in_edge" is the edge that attaches the base of the cycle to
        # its parent in the alternating tree, or -1 if the base is the root.
        self.in_edge: int = in_edge

        # If this cycle is a member of a larger cycle,
        # "parent" is the enclosing cycle and "parent_index" is the
        # position of this cycle in the member list of "parent".
        self.parent: Optional[_Cycle] = None
        self.parent_index: int = -1

        # "entry" is the vertex of this cycle that is matched to a vertex
        # outside the cycle after augmenting, or -1 if the matching around
        # this cycle did not change.
        self.entry: int = -1


class _AugmentingPath(NamedTuple):
    """Represents an augmenting path in the contracted graph.

    "edges[0]" touches the unmatched vertex "end_vertex".
    "edges[-1]" touches the (contracted) root of the alternating tree.
    """
    edges: list[int]
    end_vertex: int


class _SearchContext:
    """Holds all data used by a single search for an augmenting path.

    A search grows one alternating tree from an unmatched root vertex.
    Odd cycles discovered during the search are contracted into single
    nodes through a disjoint-set structure.

    A new context is created for each search and discarded afterwards.
    Only the matching flags in the graph survive the search.
    """

    def __init__(self, graph: Graph, root: int) -> None:
        """Set up an alternating tree that contains only the root."""

        num_vertex = graph.num_vertex

        # Reference to the graph.
        self.graph = graph
        self.root = root

        # Contracted cycles are represented as sets in this structure.
        # The value attached to the representative of a set is the cycle
        # record of the top-level cycle, or None for a single vertex.
        self.partition: EnumerableDisjointSet[_Cycle] = (
            EnumerableDisjointSet(num_vertex))

        # Tree labels, indexed by the representative of each node.
        #
        # "prec[x]" is the edge that links node "x" to its parent in the
        # alternating tree, or -1 for the root.
        # For an OUTER node, this is the matched edge of its base vertex.
        # For an INNER node, this is an unmatched edge.
        #
        # "depth[x]" is the distance from node "x" to the root before any
        # contraction. Depth strictly decreases along the path to the root.
        self.label: list[_Label] = num_vertex * [_Label.UNVISITED]
        self.prec: list[int] = num_vertex * [-1]
        self.depth: list[int] = num_vertex * [0]

        # "queue" is a FIFO list of edges waiting to be scanned.
        # Each edge is added once for each endpoint that becomes OUTER.
        self.queue: deque[int] = deque()

        # Contracted cycles, in order of creation.
        self.cycles: list[_Cycle] = []

        # For a vertex "x" that is a direct member of a cycle,
        # "vertex_cycle[x] = (cycle, i)" where "i" is its member index.
        self.vertex_cycle: dict[int, tuple[_Cycle, int]] = {}

        # All vertices that were added to the alternating tree.
        self.reached: list[int] = []

        self.assign_outer(root, -1, 0)

    def tree_parent(self, b: int) -> int:
        """Return the representative of the parent of tree node "b"."""
        e = self.prec[b]
        assert e != -1
        (x, y) = self.graph.edges[e]
        find = self.partition.find
        bx = find(x)
        return find(y) if bx == b else bx

    def assign_outer(self, x: int, e: int, depth: int) -> None:
        """Attach unvisited vertex "x" to the tree as an OUTER node and
        queue all its edges for scanning."""
        assert self.label[x] == _Label.UNVISITED
        self.label[x] = _Label.OUTER
        self.prec[x] = e
        self.depth[x] = depth
        self.reached.append(x)
        self.queue.extend(self.graph.adjacent_edges[x])

    def extend_tree(self, b: int, y: int, e: int) -> None:
        """Attach unvisited, matched vertex "y" as an INNER child of
        OUTER node "b" via edge "e", then attach the mate of "y" as an
        OUTER child of "y"."""

        m = self.graph.vertex_matcher[y]
        assert m != -1
        z = self.graph.other_endpoint(m, y)
        assert not self.graph.vertex_erased[z]

        d = self.depth[b] + 1
        self.label[y] = _Label.INNER
        self.prec[y] = e
        self.depth[y] = d
        self.reached.append(y)

        self.assign_outer(z, m, d + 1)

    def trace_augmenting_path(self, b: int, y: int, e: int) -> _AugmentingPath:
        """Trace back through the alternating tree from OUTER node "b",
        which is linked via edge "e" to unmatched vertex "y".

        This function takes time O(n).
        """
        edges = [e]
        while self.prec[b] != -1:
            edges.append(self.prec[b])
            b = self.tree_parent(b)

        assert b == self.partition.find(self.root)

        # An alternating path between OUTER nodes through unmatched
        # ends always has odd length.
        assert len(edges) % 2 == 1

        return _AugmentingPath(edges, y)

    def _step_up(self, nodes: list[int], edges: list[int]) -> None:
        b = nodes[-1]
        edges.append(self.prec[b])
        nodes.append(self.tree_parent(b))

    def make_cycle(self, bx: int, by: int, e: int) -> None:
        """Contract the odd cycle closed by edge "e" between
        OUTER nodes "bx" and "by".

        This function takes time O(k) to trace the cycle, where "k" is the
        number of members, plus time proportional to the number of vertices
        that change from INNER to OUTER.
        """

        # Walk up from both nodes until the branches meet.
        # Always step from the deepest node, so that neither branch can
        # pass the meeting point.
        xnodes = [bx]
        xedges: list[int] = []
        ynodes = [by]
        yedges: list[int] = []
        while xnodes[-1] != ynodes[-1]:
            if self.depth[xnodes[-1]] >= self.depth[ynodes[-1]]:
                self._step_up(xnodes, xedges)
            else:
                self._step_up(ynodes, yedges)

        base = xnodes[-1]
        assert self.label[base] == _Label.OUTER

        # Arrange the members in cycle order, starting at the base:
        #
        #   base --- ... --- bx ---(e)--- by --- ... --- (back to base)
        #
        members = xnodes[::-1] + ynodes[:-1]
        edges = xedges[::-1] + [e] + yedges

        num_members = len(members)
        find = self.partition.find
        ends: list[tuple[int, int]] = []
        for i in range(num_members):
            (x, y) = self.graph.edges[edges[i]]
            if find(x) != members[i]:
                (x, y) = (y, x)
            assert find(x) == members[i]
            assert find(y) == members[(i + 1) % num_members]
            ends.append((x, y))

        subcycles = [self.partition.value(b) for b in members]
        cycle = _Cycle(members, subcycles, edges, ends, self.prec[base])
        self.cycles.append(cycle)

        for (i, b) in enumerate(members):
            sub = subcycles[i]
            if sub is None:
                self.vertex_cycle[b] = (cycle, i)
            else:
                sub.parent = cycle
                sub.parent_index = i

        # Former INNER vertices become part of an OUTER node.
        # Their edges have not been scanned yet.
        # Collect them before merging the member sets.
        new_outer = [x
                     for b in members
                     if self.label[b] == _Label.INNER
                     for x in self.partition.members(b)]

        base_prec = self.prec[base]
        base_depth = self.depth[base]

        rep = base
        for b in members[1:]:
            rep = self.partition.union(rep, b)

        # The contracted node takes the place of its base in the tree.
        self.label[rep] = _Label.OUTER
        self.prec[rep] = base_prec
        self.depth[rep] = base_depth
        self.partition.set_value(rep, cycle)

        for x in new_outer:
            self.queue.extend(self.graph.adjacent_edges[x])

    def scan(self) -> Optional[_AugmentingPath]:
        """Scan queued edges to expand the alternating tree.

        The scan proceeds until either an augmenting path is found,
        or the queue becomes empty.

        New cycles may be contracted during the scan.

        Returns:
            Augmenting path if found; otherwise None.
        """

        graph = self.graph
        edges = graph.edges
        erased = graph.vertex_erased
        find = self.partition.find
        label = self.label

        while self.queue:

            e = self.queue.popleft()
            (x, y) = edges[e]

            # Ignore vertices that were proven unmatchable.
            if erased[x] or erased[y]:
                continue

            bx = find(x)
            by = find(y)

            # Ignore edges that are internal to a contracted cycle.
            if bx == by:
                continue

            # Edges are only queued from OUTER nodes, and OUTER nodes
            # stay OUTER until the end of the search.
            if label[bx] != _Label.OUTER:
                (x, y, bx, by) = (y, x, by, bx)
            assert label[bx] == _Label.OUTER

            ylabel = label[by]

            if ylabel == _Label.UNVISITED:
                # Unvisited nodes are always single vertices.
                assert by == y
                if graph.vertex_matcher[y] == -1:
                    # Found a path from the root to an unmatched vertex.
                    return self.trace_augmenting_path(bx, y, e)
                self.extend_tree(bx, y, e)

            elif ylabel == _Label.OUTER:
                # Two OUTER nodes in the same tree form an odd cycle.
                self.make_cycle(bx, by, e)

            # An edge between OUTER and INNER nodes adds no information.

        # No further edges to scan, and no augmenting path found.
        return None

    def _member_index(self, cycle: _Cycle, x: int) -> int:
        """Return the index of the member of "cycle" that contains
        vertex "x"."""
        (c, i) = self.vertex_cycle[x]
        while c is not cycle:
            i = c.parent_index
            parent = c.parent
            assert parent is not None
            c = parent
        return i

    def _set_cycle_edge(self, cycle: _Cycle, i: int, matched: bool) -> None:
        """Set the matching flag of cycle edge "i".

        If the edge becomes matched, its endpoints become the entry vertices
        of the members on either side of the edge.
        """
        self.graph.set_matched(cycle.edges[i], matched)
        if matched:
            n = len(cycle.members)
            (x, y) = cycle.ends[i]
            for (p, z) in ((i, x), ((i + 1) % n, y)):
                sub = cycle.subcycles[p]
                if sub is not None:
                    sub.entry = z

    def expand_cycle(self, cycle: _Cycle) -> None:
        """Restore a consistent alternating matching on the edges of
        a contracted cycle.

        The member that contains the entry vertex is matched outside the
        cycle. Every other member is matched to a neighbouring member
        via a cycle edge.

        This function takes time O(k + d), where "k" is the number of
        members and "d" is the nesting depth of the entry vertex.
        """
        assert cycle.entry != -1

        k = self._member_index(cycle, cycle.entry)
        sub = cycle.subcycles[k]
        if sub is not None:
            sub.entry = cycle.entry

        # Walk away from member "k" in both directions.
        # Edges at odd distance from member "k" are matched.
        #
        #   ... === (k-2) --- (k-1) === ... (k) --- (k+1) === (k+2) --- ...
        #
        n = len(cycle.members)
        half = n // 2
        for t in range(half + 1):
            self._set_cycle_edge(cycle, (k + t) % n, t % 2 == 1)
        for t in range(half):
            self._set_cycle_edge(cycle, (k - 1 - t) % n, t % 2 == 1)

    def augment_and_expand(self, path: _AugmentingPath) -> None:
        """Augment the matching along the path and expand all cycles
        contracted during this search.

        This function takes time O(n + m).
        """

        augment(self.graph, path.edges)

        # The edges at even positions on the path are now matched.
        # Each top-level cycle on the path is touched by exactly one
        # of these edges.
        find = self.partition.find
        for e in path.edges[0::2]:
            for x in self.graph.edges[e]:
                cycle = self.partition.value(find(x))
                if cycle is not None:
                    assert cycle.entry == -1
                    cycle.entry = x

        # Expand the most recently contracted cycle first, so that each
        # cycle receives its entry vertex before it is expanded.
        # Cycles without entry vertex are still consistent.
        while self.cycles:
            cycle = self.cycles.pop()
            if cycle.entry != -1:
                self.expand_cycle(cycle)

        self.graph.refresh_matchers()

    def erase_tree(self) -> None:
        """Mark all vertices of the alternating tree as unmatchable."""
        for x in self.reached:
            self.graph.vertex_erased[x] = True


# Marks a vertex of the Tutte-Berge barrier set.
_BARRIER = -2


class _TutteBergeWitness:
    """Certificate of optimality, collected from failed searches.

    Each failed search leaves a tree in which every OUTER node is an odd
    set of vertices. After erasing the tree, no edge links an OUTER node
    to anything except INNER vertices or vertices inside the same node.
    The INNER vertices of all failed trees form a barrier set.
    """

    def __init__(self, num_vertex: int) -> None:
        # "vertex_class[x]" is the index of the odd set that contains "x",
        # or _BARRIER if "x" is in the barrier set,
        # or -1 if "x" was never erased.
        self.vertex_class: list[int] = num_vertex * [-1]
        self.num_odd: int = 0
        self.num_barrier: int = 0

    def add_tree(self, ctx: _SearchContext) -> None:
        """Record the labels of a failed search."""
        find = ctx.partition.find
        class_index: dict[int, int] = {}
        for x in ctx.reached:
            b = find(x)
            if ctx.label[b] == _Label.OUTER:
                self.vertex_class[x] = class_index.setdefault(
                    b, self.num_odd + len(class_index))
            else:
                assert ctx.label[b] == _Label.INNER
                self.vertex_class[x] = _BARRIER
                self.num_barrier += 1
        self.num_odd += len(class_index)

    def add_isolated(self, x: int) -> None:
        """Record a vertex without incident edges as an odd set."""
        self.vertex_class[x] = self.num_odd
        self.num_odd += 1


def find_maximum_matching(graph: Graph) -> MatchingStats:
    """Extend the matching stored in the graph to a maximum-cardinality
    matching.

    The existing matching flags of the graph are used as the starting
    point. The result is stored in the graph by updating the matching flags.

    This function takes time O(n * m * alpha(n)).

    Returns:
        Counters describing the work done.

    Raises:
        MatchingError: If verification of the result fails.
            This can only happen if there is a bug in the algorithm.
    """

    num_vertex = graph.num_vertex

    # Start from the current matching flags.
    graph.refresh_matchers()
    for x in range(num_vertex):
        graph.vertex_erased[x] = False

    unmatched = {x for x in range(num_vertex)
                 if graph.vertex_matcher[x] == -1}

    witness = _TutteBergeWitness(num_vertex)

    num_search = 0
    num_augment = 0
    num_blossom = 0
    num_erased = 0

    # Search for an augmenting path from each unmatched vertex.
    #
    # A search either matches its root, or proves that the root can not
    # be matched. Either way the root leaves the unmatched set and is
    # never considered again. Vertices can only become matched, never
    # unmatched, so a single pass over the vertices is sufficient.
    for root in range(num_vertex):

        if root not in unmatched:
            continue

        assert not graph.vertex_erased[root]

        # Isolated vertices can not be matched.
        # Skip setting up a search for them.
        if not graph.adjacent_edges[root]:
            graph.vertex_erased[root] = True
            witness.add_isolated(root)
            unmatched.discard(root)
            num_erased += 1
            continue

        ctx = _SearchContext(graph, root)
        path = ctx.scan()

        num_search += 1
        num_blossom += len(ctx.cycles)

        if path is not None:
            ctx.augment_and_expand(path)
            unmatched.discard(root)
            unmatched.discard(path.end_vertex)
            num_augment += 1
        else:
            ctx.erase_tree()
            witness.add_tree(ctx)
            unmatched.discard(root)
            num_erased += len(ctx.reached)

    assert not unmatched

    # Verify that the matching is optimal.
    # Verification is a redundant step; if the matching algorithm is correct,
    # verification will always pass.
    _verify_matching(graph)
    _verify_optimum(graph, witness)

    return MatchingStats(
        num_search=num_search,
        num_augment=num_augment,
        num_blossom=num_blossom,
        num_erased=num_erased)


def _verify_matching(graph: Graph) -> None:
    """Verify that the matching flags describe a valid matching.

    This function takes time O(n + m).

    Raises:
        MatchingError: If the matching is not valid.
    """

    vertex_matcher = graph.vertex_matcher
    num_matched_vertex = 0

    for x in range(graph.num_vertex):
        e = vertex_matcher[x]
        if e != -1:
            if not graph.edge_matched[e]:
                raise MatchingError(
                    f"Verification failed: vertex {x} refers to"
                    f" unmatched edge {e}")
            if not graph.edge_touches(e, x):
                raise MatchingError(
                    f"Verification failed: vertex {x} refers to"
                    f" non-incident edge {e}")
            num_matched_vertex += 1

    num_matched_edge = 0
    for (e, (x, y)) in enumerate(graph.edges):
        if graph.edge_matched[e]:
            if x == y:
                raise MatchingError(
                    f"Verification failed: self-edge {e} is matched")
            if (vertex_matcher[x] != e) or (vertex_matcher[y] != e):
                raise MatchingError(
                    f"Verification failed: matched edge {e} shares"
                    " a vertex with another matched edge")
            num_matched_edge += 1

    if num_matched_vertex != 2 * num_matched_edge:
        raise MatchingError(
            f"Verification failed: {num_matched_vertex} matched vertices"
            f" inconsistent with {num_matched_edge} matched edges")


def _verify_optimum(graph: Graph, witness: _TutteBergeWitness) -> None:
    """Verify that the matching has maximum cardinality.

    By the Tutte-Berge formula, any matching leaves at least
    (odd(G - U) - |U|) vertices unmatched, where "U" is any set of
    vertices and odd(G - U) is the number of odd-sized components
    of the graph without "U".

    The witness claims a barrier "U" and a collection of odd vertex sets.
    This function checks that each odd set has odd size and is a separate
    component of (G - U), and that the number of unmatched vertices reaches
    the lower bound.

    This function takes time O(n + m).

    Raises:
        MatchingError: If the matching is not optimal.
    """

    num_vertex = graph.num_vertex
    vertex_class = witness.vertex_class

    class_size = witness.num_odd * [0]
    num_barrier = 0
    for x in range(num_vertex):
        c = vertex_class[x]
        if c == _BARRIER:
            num_barrier += 1
        elif c >= 0:
            class_size[c] += 1

    if num_barrier != witness.num_barrier:
        raise MatchingError(
            f"Verification failed: barrier has {num_barrier} vertices"
            f" but witness claims {witness.num_barrier}")

    for (c, size) in enumerate(class_size):
        if size % 2 == 0:
            raise MatchingError(
                f"Verification failed: odd set {c} has {size} vertices")

    # Check that each odd set is a component of (G - U).
    for (x, y) in graph.edges:
        cx = vertex_class[x]
        cy = vertex_class[y]
        if cx == _BARRIER or cy == _BARRIER:
            continue
        if (cx >= 0 or cy >= 0) and (cx != cy):
            raise MatchingError(
                f"Verification failed: edge ({x}, {y}) leaves odd set")

    num_unmatched = num_vertex - 2 * graph.matching_size()
    deficiency = witness.num_odd - num_barrier
    if num_unmatched != deficiency:
        raise MatchingError(
            f"Verification failed: {num_unmatched} unmatched vertices"
            f" but witness only proves {deficiency}")

    # Optimum solution confirmed.
