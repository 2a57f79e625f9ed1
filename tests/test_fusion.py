"""Tests for similarity network fusion"""
import pytest
import numpy as np

from netfuse.exceptions import InvalidInput
from netfuse.integrate import full_transition, fuse_networks, local_transition

from conftest import assert_valid_affinity, block_affinity, random_affinity


class TestTransitions:
    """Tests for the full and local transition matrices"""

    def test_full_transition_rows(self):
        """Test rows sum to 1 with a self-weight of 1/2"""
        W = random_affinity(6, seed=0)

        P = full_transition(W)

        np.testing.assert_allclose(P.sum(axis=1), 1.0)
        np.testing.assert_allclose(np.diag(P), 0.5)

    def test_full_transition_zero_row(self):
        """Test an isolated node keeps an all-zero row"""
        W = random_affinity(4, seed=1)
        W[2, :] = 0.0
        W[:, 2] = 0.0

        P = full_transition(W)

        np.testing.assert_array_equal(P[2], 0.0)
        np.testing.assert_allclose(np.delete(P, 2, axis=0).sum(axis=1), 1.0)

    def test_full_transition_ignores_diagonal(self):
        """Test an input diagonal does not leak into the transitions"""
        W = random_affinity(5, seed=2)
        W_diag = W + np.eye(5) * 7.0

        np.testing.assert_allclose(full_transition(W_diag), full_transition(W))

    def test_local_transition_keeps_k_strongest(self):
        """Test each row keeps its k largest off-diagonal entries"""
        W = random_affinity(8, seed=3)

        S = local_transition(W, k=3)

        assert ((S > 0).sum(axis=1) == 3).all()
        np.testing.assert_allclose(S.sum(axis=1), 1.0)
        np.testing.assert_array_equal(np.diag(S), 0.0)
        for i in range(8):
            kept = np.flatnonzero(S[i])
            others = np.setdiff1d(np.delete(np.arange(8), i), kept)
            assert W[i, kept].min() >= W[i, others].max()

    def test_local_transition_ties_prefer_lower_index(self):
        """Test equal affinities resolve to the lowest column index"""
        W = np.ones((4, 4))
        np.fill_diagonal(W, 0.0)

        S = local_transition(W, k=1)

        assert [int(np.flatnonzero(row)[0]) for row in S] == [1, 0, 0, 0]


class TestFuseNetworks:
    """Tests for fuse_networks"""

    def test_single_view_returned_unchanged(self):
        """Test fusing one view gives back that view"""
        W = random_affinity(10, seed=4)

        fused = fuse_networks([W], k=3, iterations=5)

        np.testing.assert_array_equal(fused, W)

    def test_output_is_valid_affinity(self):
        """Test fused output is symmetric, non-negative with zero diagonal"""
        views = [random_affinity(12, seed=s) for s in range(3)]

        fused = fuse_networks(views, k=4, iterations=10)

        assert fused.shape == (12, 12)
        assert_valid_affinity(fused)

    def test_view_order_does_not_matter(self):
        """Test fusion is invariant under permutation of the views"""
        views = [random_affinity(10, seed=s) for s in (5, 6, 7)]

        a = fuse_networks(views, k=3, iterations=8)
        b = fuse_networks(views[::-1], k=3, iterations=8)

        np.testing.assert_allclose(a, b, rtol=1e-10, atol=1e-12)

    def test_mapping_and_list_agree(self):
        """Test views may be passed by name"""
        A, B = random_affinity(9, seed=8), random_affinity(9, seed=9)

        by_list = fuse_networks([A, B], k=3, iterations=4)
        by_name = fuse_networks({"rna": A, "methylation": B}, k=3, iterations=4)

        np.testing.assert_array_equal(by_list, by_name)

    def test_shared_structure_is_kept(self):
        """Test blocks present in every view dominate the fused network"""
        rng = np.random.default_rng(10)
        views = []
        for _ in range(2):
            W = block_affinity([8, 8], within=1.0, between=0.05)
            noise = rng.random(W.shape) * 0.1
            W = W + (noise + noise.T) / 2
            np.fill_diagonal(W, 0.0)
            views.append(W)

        fused = fuse_networks(views, k=5, iterations=10)

        within = fused[:8, :8].sum() + fused[8:, 8:].sum()
        between = fused[:8, 8:].sum() + fused[8:, :8].sum()
        assert within > 10 * between

    def test_zero_iterations(self):
        """Test iterations=0 returns the element-wise average of the views"""
        views = [random_affinity(6, seed=s) for s in (11, 12)]

        fused = fuse_networks(views, k=2, iterations=0)

        assert_valid_affinity(fused)
        np.testing.assert_allclose(fused, (views[0] + views[1]) / 2)

    def test_identical_views_not_rescaled(self):
        """Test averaging identical views keeps their scale"""
        W = 5.0 * random_affinity(6, seed=21)

        fused = fuse_networks([W, W.copy()], k=2, iterations=0)

        np.testing.assert_allclose(fused, W)

    def test_tolerance_stops_early(self):
        """Test a loose tolerance stops after the first iteration"""
        views = [random_affinity(8, seed=s) for s in (13, 14)]

        early = fuse_networks(views, k=3, iterations=20, tol=1e9)
        one = fuse_networks(views, k=3, iterations=1)

        np.testing.assert_array_equal(early, one)

    def test_isolated_node_stays_isolated(self):
        """Test an object without affinity in any view keeps a zero row"""
        views = []
        for s in (15, 16):
            W = random_affinity(7, seed=s)
            W[3, :] = 0.0
            W[:, 3] = 0.0
            views.append(W)

        fused = fuse_networks(views, k=2, iterations=5)

        assert np.isfinite(fused).all()
        np.testing.assert_array_equal(fused[3], 0.0)
        np.testing.assert_array_equal(fused[:, 3], 0.0)

    def test_inputs_not_modified(self):
        """Test the caller's matrices are left untouched"""
        views = [random_affinity(6, seed=s) for s in (17, 18)]
        originals = [W.copy() for W in views]

        fuse_networks(views, k=2, iterations=3)

        for W, original in zip(views, originals):
            np.testing.assert_array_equal(W, original)

    def test_empty_views(self):
        """Test an empty view set is rejected"""
        with pytest.raises(InvalidInput, match="At least one"):
            fuse_networks([])

    def test_dimension_mismatch(self):
        """Test views over different object counts are rejected"""
        with pytest.raises(InvalidInput, match="differ in dimension"):
            fuse_networks([random_affinity(5, seed=0), random_affinity(6, seed=0)], k=2)

    @pytest.mark.parametrize("k", [0, 6, -1])
    def test_k_out_of_range(self, k):
        """Test k must lie in [1, n - 1]"""
        views = [random_affinity(6, seed=s) for s in (0, 1)]

        with pytest.raises(InvalidInput):
            fuse_networks(views, k=k)

    @pytest.mark.parametrize("iterations", [-1, 2.5])
    def test_invalid_iterations(self, iterations):
        """Test iterations must be a non-negative integer"""
        views = [random_affinity(6, seed=s) for s in (0, 1)]

        with pytest.raises(InvalidInput, match="iterations"):
            fuse_networks(views, k=2, iterations=iterations)

    def test_invalid_tolerance(self):
        """Test tol must be positive"""
        views = [random_affinity(6, seed=s) for s in (0, 1)]

        with pytest.raises(InvalidInput, match="tol"):
            fuse_networks(views, k=2, tol=0.0)
