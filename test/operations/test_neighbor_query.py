"""Tests for the neighbor search structures in pointfilter.operations."""

from typing import Type

import numpy as np
import pytest

from pointfilter.operations import BruteForceNeighborQuery, KDTreeNeighborQuery, NeighborQuery

from test.utils import generate_grid_points  # pylint: disable=wrong-import-order


def _sort_rows(xyz: np.ndarray) -> np.ndarray:
    return xyz[np.lexsort(xyz.T[::-1])]


@pytest.mark.parametrize("query_class", [KDTreeNeighborQuery, BruteForceNeighborQuery])
class TestNeighborQuery:
    """Tests for pointfilter.operations.KDTreeNeighborQuery and pointfilter.operations.BruteForceNeighborQuery."""

    def test_k_nearest(self, query_class: Type[NeighborQuery]):
        xyz = generate_grid_points((5,), point_spacing=1.0)
        neighbor_query = query_class(xyz)

        neighbors = neighbor_query.query(np.array([0.0, 0.0, 0.0]), k=3)

        expected_neighbors = np.array([[0, 0, 0], [1, 0, 0], [2, 0, 0]], dtype=np.float64)
        np.testing.assert_array_equal(expected_neighbors, _sort_rows(neighbors))

    def test_k_larger_than_point_count(self, query_class: Type[NeighborQuery]):
        xyz = generate_grid_points((3,), point_spacing=1.0)
        neighbor_query = query_class(xyz)

        neighbors = neighbor_query.query(xyz[1], k=10)

        assert len(neighbor_query) == 3
        np.testing.assert_array_equal(xyz, _sort_rows(neighbors))

    def test_radius_limited(self, query_class: Type[NeighborQuery]):
        xyz = generate_grid_points((10,), point_spacing=1.0)
        neighbor_query = query_class(xyz)

        neighbors = neighbor_query.query(xyz[5], k=10, radius=1.0)

        expected_neighbors = np.array([[4, 0, 0], [5, 0, 0], [6, 0, 0]], dtype=np.float64)
        np.testing.assert_array_equal(expected_neighbors, _sort_rows(neighbors))

    def test_radius_limited_capped_at_k(self, query_class: Type[NeighborQuery]):
        xyz = np.array([[0, 0, 0], [0.1, 0, 0], [0.5, 0, 0], [0.9, 0, 0], [5, 0, 0]], dtype=np.float64)
        neighbor_query = query_class(xyz)

        neighbors = neighbor_query.query(xyz[0], k=2, radius=1.0)

        np.testing.assert_array_equal(xyz[:2], _sort_rows(neighbors))

    def test_radius_without_neighbors(self, query_class: Type[NeighborQuery]):
        xyz = generate_grid_points((3,), point_spacing=1.0)
        neighbor_query = query_class(xyz)

        neighbors = neighbor_query.query(np.array([10.0, 10.0, 10.0]), k=2, radius=0.5)

        assert neighbors.shape == (0, 3)

    @pytest.mark.parametrize("k, radius, position", [(0, 0.0, [0, 0, 0]), (2, -1.0, [0, 0, 0]), (2, 0.0, [0, 0])])
    def test_invalid_query(self, query_class: Type[NeighborQuery], k: int, radius: float, position: list):
        neighbor_query = query_class(generate_grid_points((3,), point_spacing=1.0))

        with pytest.raises(ValueError):
            neighbor_query.query(np.array(position, dtype=np.float64), k=k, radius=radius)

    @pytest.mark.parametrize("xyz", [np.zeros((0, 3)), np.zeros((4, 2)), np.zeros(3)])
    def test_invalid_points(self, query_class: Type[NeighborQuery], xyz: np.ndarray):
        with pytest.raises(ValueError):
            query_class(xyz)


@pytest.mark.parametrize("radius", [0.0, 0.2])
def test_kd_tree_and_brute_force_agree(radius: float):
    """Tests that pointfilter.operations.KDTreeNeighborQuery and pointfilter.operations.BruteForceNeighborQuery return
    the same neighbors."""

    xyz = np.random.default_rng(seed=3).uniform(0, 1, (200, 3))
    kd_tree_query = KDTreeNeighborQuery(xyz)
    brute_force_query = BruteForceNeighborQuery(xyz)

    for position in xyz[:20]:
        np.testing.assert_array_equal(
            _sort_rows(brute_force_query.query(position, k=8, radius=radius)),
            _sort_rows(kd_tree_query.query(position, k=8, radius=radius)),
        )
