"""Unit tests for maximum cardinality matching."""

import random
import unittest
from unittest.mock import Mock

import mcmatching
from mcmatching import maximum_cardinality_matching as mcm
from mcmatching import algorithm
from mcmatching.algorithm import (
    Graph, augment, find_maximum_matching, _TutteBergeWitness, _BARRIER)


def _brute_force_size(edges):
    """Return the maximum matching size by trying all edge subsets."""

    def search(i, used):
        if i == len(edges):
            return 0
        best = search(i + 1, used)
        (x, y) = edges[i]
        if x != y and x not in used and y not in used:
            best = max(best, 1 + search(i + 1, used | {x, y}))
        return best

    return search(0, frozenset())


def _random_graph(rng, max_vertex, max_edge):
    n = rng.randint(1, max_vertex)
    m = rng.randint(0, max_edge)
    edges = [(rng.randrange(n), rng.randrange(n)) for _i in range(m)]
    return (n, edges)


class TestMaximumCardinalityMatching(unittest.TestCase):
    """Test maximum_cardinality_matching() function."""

    def _check_valid(self, pairs, edges):
        for (x, y) in pairs:
            self.assertIn((x, y), edges)
            self.assertNotEqual(x, y)
        vertices = [x for p in pairs for x in p]
        self.assertEqual(len(vertices), len(set(vertices)))

    def test10_empty(self):
        """empty input graph"""
        self.assertEqual(mcm([]), [])

    def test11_singleedge(self):
        """single edge"""
        self.assertEqual(mcm([(0,1)]), [(0,1)])

    def test12_triangle(self):
        """odd cycle of length 3"""
        self.assertEqual(mcm([(0,1), (1,2), (0,2)]), [(0,1)])

    def test13_path(self):
        """path of 5 vertices"""
        self.assertEqual(
            mcm([(0,1), (1,2), (2,3), (3,4)]),
            [(0,1), (2,3)])

    def test14_blossom_pendant(self):
        """5-cycle with pendant edge"""
        pairs = mcm([(0,1), (1,2), (2,3), (3,4), (4,0), (4,5)])
        self.assertEqual(len(pairs), 3)
        self.assertIn((4,5), pairs)
        self.assertEqual(pairs, [(0,1), (2,3), (4,5)])

    def test15_two_triangles(self):
        """disconnected graph"""
        self.assertEqual(
            mcm([(0,1), (1,2), (2,0), (3,4), (4,5), (5,3)]),
            [(0,1), (3,4)])

    def test16_no_edges(self):
        """vertices without edges"""
        self.assertEqual(mcm([], num_vertex=5), [])

    def test17_isolated_vertices(self):
        """isolated vertices between connected vertices"""
        self.assertEqual(mcm([(1,3), (5,7)], num_vertex=9), [(1,3), (5,7)])

    def test20_selfloop(self):
        """self-edges are never matched"""
        self.assertEqual(mcm([(0,0)]), [])
        self.assertEqual(mcm([(0,0), (0,1), (1,1)]), [(0,1)])

    def test21_multi_edge(self):
        """parallel edges"""
        self.assertEqual(mcm([(0,1), (1,0), (0,1)]), [(0,1)])
        pairs = mcm([(0,1), (1,2), (2,1), (2,3), (1,2)])
        self.assertEqual(pairs, [(0,1), (2,3)])

    def test22_complete(self):
        """complete graphs"""
        for n in range(1, 9):
            edges = [(x, y) for x in range(n) for y in range(x + 1, n)]
            pairs = mcm(edges, num_vertex=n)
            self.assertEqual(len(pairs), n // 2)
            self._check_valid(pairs, edges)

    def test23_star(self):
        """star graph"""
        pairs = mcm([(0,1), (0,2), (0,3), (0,4)])
        self.assertEqual(pairs, [(0,1)])

    def test24_long_path(self):
        """long path"""
        edges = [(x, x + 1) for x in range(499)]
        pairs = mcm(edges)
        self.assertEqual(len(pairs), 250)
        self._check_valid(pairs, edges)

    def test25_long_odd_cycle(self):
        """long odd cycle with pendant edge"""
        n = 101
        edges = [(x, (x + 1) % n) for x in range(n)]
        edges.append((n - 1, n))
        pairs = mcm(edges)
        self.assertEqual(len(pairs), (n + 1) // 2)
        self._check_valid(pairs, edges)

    def test30_random_small(self):
        """random small graphs, compared against brute force"""
        rng = random.Random(12345)
        for _i in range(300):
            (n, edges) = _random_graph(rng, 8, 12)
            pairs = mcm(edges, num_vertex=n)
            self._check_valid(pairs, edges)
            self.assertEqual(len(pairs), _brute_force_size(edges))

    def test31_random_dense(self):
        """random dense graphs, compared against brute force"""
        rng = random.Random(54321)
        for _i in range(50):
            (n, edges) = _random_graph(rng, 7, 14)
            pairs = mcm(edges, num_vertex=n)
            self._check_valid(pairs, edges)
            self.assertEqual(len(pairs), _brute_force_size(edges))

    def test_fail_bad_input(self):
        """bad input values"""
        with self.assertRaises(TypeError):
            mcm(15)
        with self.assertRaises(TypeError):
            mcm([15])
        with self.assertRaises(TypeError):
            mcm([(1,2,3)])
        with self.assertRaises(TypeError):
            mcm([(1.0, 2)])
        with self.assertRaises(TypeError):
            mcm([("1", 2)])
        with self.assertRaises(ValueError):
            mcm([(1, -2)])
        with self.assertRaises(ValueError):
            mcm([(0, 5)], num_vertex=3)
        with self.assertRaises(ValueError):
            mcm([], num_vertex=-1)
        with self.assertRaises(TypeError):
            mcm([], num_vertex=2.0)


class TestFindMaximumMatching(unittest.TestCase):
    """Test find_maximum_matching() on a Graph."""

    def test_stats_empty(self):
        graph = Graph(5, [])
        stats = find_maximum_matching(graph)
        self.assertEqual(stats.num_search, 0)
        self.assertEqual(stats.num_augment, 0)
        self.assertEqual(stats.num_erased, 5)
        self.assertEqual(graph.pairs(), [])

    def test_stats_zero_vertices(self):
        graph = Graph(0, [])
        stats = find_maximum_matching(graph)
        self.assertEqual(stats, mcmatching.MatchingStats())

    def test_triangle_blossom(self):
        """triangle contracts into a blossom in the failed search"""
        graph = Graph(3, [(0,1), (1,2), (2,0)])
        stats = find_maximum_matching(graph)
        self.assertEqual(graph.edge_matched, [True, False, False])
        self.assertEqual(stats.num_augment, 1)
        self.assertEqual(stats.num_blossom, 1)

    def test_initial_matching(self):
        """augment along a path of length 3"""
        graph = Graph(4, [(0,1), (1,2), (2,3)], matched=[False, True, False])
        stats = find_maximum_matching(graph)
        self.assertEqual(graph.edge_matched, [True, False, True])
        self.assertEqual(stats.num_search, 1)
        self.assertEqual(stats.num_augment, 1)

    def test_augment_through_blossom(self):
        """augmenting path enters a blossom away from its base"""
        #
        #   [0]---[1]===[2]
        #    |           |
        #   [4]=========[3]---[5]
        #
        edges = [(0,1), (1,2), (2,3), (3,4), (4,0), (3,5)]
        graph = Graph(
            6, edges, matched=[False, True, False, True, False, False])
        stats = find_maximum_matching(graph)
        self.assertEqual(graph.pairs(), [(1,2), (4,0), (3,5)])
        self.assertEqual(stats.num_blossom, 1)
        self.assertEqual(stats.num_augment, 1)

    def test_nested_blossom(self):
        """augmenting path through a blossom nested in a blossom"""
        #
        #   [0]----[1]----[5]
        #     \    //      ||
        #      \  //       ||
        #       [2]       [6]
        #        |         |
        #       [3]=======[4]---[7]
        #
        edges = [(0,1), (0,2), (1,2), (2,3), (3,4),
                 (1,5), (5,6), (6,4), (4,7)]
        matched = [False, False, True, False, True,
                   False, True, False, False]
        graph = Graph(8, edges, matched=matched)
        stats = find_maximum_matching(graph)
        self.assertEqual(graph.pairs(), [(0,1), (2,3), (5,6), (4,7)])
        self.assertEqual(stats.num_search, 1)
        self.assertEqual(stats.num_blossom, 2)
        self.assertEqual(stats.num_augment, 1)

    def test_idempotent(self):
        """rerunning on a maximum matching changes nothing"""
        rng = random.Random(4242)
        for _i in range(50):
            (n, edges) = _random_graph(rng, 30, 60)
            graph = Graph(n, edges)
            find_maximum_matching(graph)
            flags = list(graph.edge_matched)

            graph2 = Graph(n, edges, matched=flags)
            stats = find_maximum_matching(graph2)
            self.assertEqual(graph2.edge_matched, flags)
            self.assertEqual(stats.num_augment, 0)

    def test_augment_count(self):
        """each augmentation adds one edge to the matching"""
        rng = random.Random(777)
        for _i in range(50):
            (n, edges) = _random_graph(rng, 40, 80)
            graph = Graph(n, edges)
            stats = find_maximum_matching(graph)
            size = graph.matching_size()
            self.assertEqual(stats.num_augment, size)
            self.assertGreaterEqual(stats.num_erased, n - 2 * size)

    def test_random_initial_matching(self):
        """start from a random valid matching"""
        rng = random.Random(999)
        for _i in range(100):
            (n, edges) = _random_graph(rng, 8, 12)
            used = set()
            matched = []
            for (x, y) in edges:
                flag = (x != y and x not in used and y not in used
                        and rng.random() < 0.5)
                if flag:
                    used.update((x, y))
                matched.append(flag)
            graph = Graph(n, edges, matched=matched)
            find_maximum_matching(graph)
            self.assertEqual(graph.matching_size(), _brute_force_size(edges))


class TestGraph(unittest.TestCase):
    """Test Graph helper class."""

    def test_empty(self):
        graph = Graph(0, [])
        self.assertEqual(graph.num_vertex, 0)
        self.assertEqual(graph.edges, [])
        self.assertEqual(graph.adjacent_edges, [])
        self.assertEqual(graph.pairs(), [])

    def test_adjacency(self):
        graph = Graph(3, [(0,1), (1,1), (1,2)])
        self.assertEqual(graph.adjacent_edges, [[0], [0, 1, 1, 2], [2]])
        self.assertEqual(graph.other_endpoint(0, 0), 1)
        self.assertEqual(graph.other_endpoint(2, 2), 1)
        self.assertEqual(graph.other_endpoint(1, 1), 1)
        self.assertTrue(graph.edge_touches(2, 1))
        self.assertFalse(graph.edge_touches(2, 0))

    def test_matchers(self):
        graph = Graph(4, [(0,1), (1,2), (2,3)], matched=[True, False, True])
        self.assertEqual(graph.vertex_matcher, [0, 0, 2, 2])
        self.assertEqual(graph.matched_edges(), [0, 2])
        self.assertEqual(graph.matching_size(), 2)
        self.assertEqual(graph.pairs(), [(0,1), (2,3)])

    def test_augment_toggle(self):
        """augmenting twice restores the matching"""
        graph = Graph(4, [(0,1), (1,2), (2,3)], matched=[False, True, False])
        augment(graph, [2, 1, 0])
        self.assertEqual(graph.edge_matched, [True, False, True])
        augment(graph, [2, 1, 0])
        self.assertEqual(graph.edge_matched, [False, True, False])

    def test_fail_bad_graph(self):
        with self.assertRaises(ValueError):
            Graph(2, [(0,2)])
        with self.assertRaises(ValueError):
            Graph(2, [(-1,0)])

    def test_fail_bad_initial_matching(self):
        with self.assertRaises(ValueError):
            Graph(3, [(0,1), (1,2)], matched=[True])
        with self.assertRaises(ValueError):
            Graph(3, [(0,1), (1,2)], matched=[True, True])
        with self.assertRaises(ValueError):
            Graph(2, [(0,1), (1,1)], matched=[False, True])


class TestVerificationFail(unittest.TestCase):
    """Test failure handling in verification routines."""

    def _make_witness(self, vertex_class):
        witness = Mock(spec=_TutteBergeWitness)
        witness.vertex_class = vertex_class
        witness.num_barrier = sum(1 for c in vertex_class if c == _BARRIER)
        witness.num_odd = len({c for c in vertex_class if c >= 0})
        return witness

    def test_success(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        algorithm._verify_matching(graph)
        witness = self._make_witness([0, _BARRIER, 1])
        algorithm._verify_optimum(graph, witness)

    def test_vertex_refers_to_unmatched_edge(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        graph.edge_matched[0] = False
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_matching(graph)

    def test_vertex_refers_to_nonincident_edge(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        graph.vertex_matcher[2] = 0
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_matching(graph)

    def test_shared_vertex(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        graph.edge_matched[1] = True
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_matching(graph)

    def test_matched_selfloop(self):
        graph = Graph(2, [(0,1), (1,1)])
        graph.edge_matched[1] = True
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_matching(graph)

    def test_even_odd_set(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        witness = self._make_witness([0, 0, -1])
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_optimum(graph, witness)

    def test_edge_leaves_odd_set(self):
        graph = Graph(3, [(0,1), (1,2), (0,2)], matched=[True, False, False])
        witness = self._make_witness([0, _BARRIER, 1])
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_optimum(graph, witness)

    def test_edge_to_unclassified_vertex(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[False, True])
        witness = self._make_witness([0, -1, -1])
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_optimum(graph, witness)

    def test_barrier_count_mismatch(self):
        graph = Graph(3, [(0,1), (1,2)], matched=[True, False])
        witness = self._make_witness([0, _BARRIER, 1])
        witness.num_barrier = 2
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_optimum(graph, witness)

    def test_not_maximum(self):
        graph = Graph(4, [(0,1), (1,2), (2,3)], matched=[False, True, False])
        witness = self._make_witness([-1, -1, -1, -1])
        with self.assertRaises(mcmatching.MatchingError):
            algorithm._verify_optimum(graph, witness)


if __name__ == "__main__":
    unittest.main()
