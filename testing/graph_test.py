import unittest

import networkx as nx
import numpy as np

from lcfinder import Graph, is_commuting, is_independent


class TestGraph(unittest.TestCase):
    def test_adjacency_validation(self):
        with self.assertRaises(ValueError):
            Graph([[0, 1, 0], [1, 0, 1]])  # not square
        with self.assertRaises(ValueError):
            Graph([[0, 1], [0, 0]])  # not symmetric
        with self.assertRaises(ValueError):
            Graph([[1, 0], [0, 0]])  # self loop
        with self.assertRaises(ValueError):
            Graph([[0, 2], [2, 0]])  # not binary

    def test_from_edges(self):
        graph = Graph.from_edges(3, [(0, 1), (1, 2)])
        self.assertEqual(graph.num_vertices(), 3)
        self.assertEqual(graph.edges(), [(0, 1), (1, 2)])
        self.assertEqual(graph.neighbors(1), [0, 2])
        np.testing.assert_array_equal(
            graph.get_adjacency_matrix(), [[0, 1, 0], [1, 0, 1], [0, 1, 0]]
        )

    def test_from_edges_rejects_self_loop(self):
        with self.assertRaises(ValueError):
            Graph.from_edges(2, [(1, 1)])

    def test_from_edges_rejects_out_of_range(self):
        with self.assertRaises(ValueError):
            Graph.from_edges(3, [(0, -1)])
        with self.assertRaises(ValueError):
            Graph.from_edges(3, [(1, 3)])

    def test_adjacency_is_copied(self):
        graph = Graph([[0, 1], [1, 0]])
        adjacency = graph.get_adjacency_matrix()
        adjacency[0, 1] = 0
        self.assertEqual(graph.edges(), [(0, 1)])

    def test_from_networkx(self):
        graph = Graph.from_networkx(nx.path_graph(3))
        self.assertEqual(graph, Graph.from_edges(3, [(0, 1), (1, 2)]))

    def test_stabilizer_generators(self):
        graph = Graph.from_edges(3, [(0, 1), (1, 2)])
        generators = graph.stabilizer_generators()
        self.assertEqual([g.to_string() for g in generators], ["XZI", "ZXZ", "IZX"])

    def test_generators_form_a_stabilizer(self):
        graph = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2)])
        generators = graph.stabilizer_generators()
        self.assertTrue(is_commuting(generators))
        self.assertTrue(is_independent(generators))

    def test_empty_graph(self):
        graph = Graph(np.zeros((2, 2), dtype=int))
        self.assertEqual(graph.edges(), [])
        self.assertEqual([g.to_string() for g in graph.stabilizer_generators()], ["XI", "IX"])


if __name__ == "__main__":
    unittest.main()
