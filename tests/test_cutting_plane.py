"""
Tests for the cutting-plane driving loops

The search spaces and oracles here are scripted stand-ins so that each
termination path can be reached deterministically.
"""

import numpy as np
import pytest

from cutplane import (
    CInfo,
    CutStatus,
    Options,
    cutting_plane_feas,
    cutting_plane_optim,
    cutting_plane_optim_q,
)


class ScriptedSpace:
    """Search space returning preset statuses and moving its center by one."""

    def __init__(self, statuses=None, tsq=1.0):
        self._xc = np.zeros(2)
        self._statuses = list(statuses or [])
        self._tsq = tsq
        self.cuts = []

    def xc(self):
        return self._xc

    def set_xc(self, x):
        self._xc = np.array(x)

    def tsq(self):
        return self._tsq

    def copy(self):
        other = ScriptedSpace(self._statuses, self._tsq)
        other._xc = self._xc.copy()
        return other

    def update(self, cut):
        self.cuts.append(cut)
        status = self._statuses.pop(0) if self._statuses else CutStatus.SUCCESS
        if status == CutStatus.SUCCESS:
            self._xc = self._xc + 1.0
        return status


class ScriptedFeasOracle:
    """Returns a cut for the first ``n_cuts`` queries, then accepts."""

    def __init__(self, n_cuts):
        self.n_cuts = n_cuts
        self.queries = 0

    def assess_feas(self, x):
        self.queries += 1
        if self.queries > self.n_cuts:
            return None
        return np.array([1.0, 0.0]), 0.0


class TestOptions:
    """Driver configuration."""

    def test_defaults(self):
        options = Options()
        assert options.max_iter == 2000
        assert options.tol == 1e-8

    def test_immutable(self):
        options = Options()
        with pytest.raises(Exception):
            options.max_iter = 10

    def test_invalid(self):
        with pytest.raises(ValueError):
            Options(max_iter=-1)
        with pytest.raises(ValueError):
            Options(tol=-1.0)

    def test_cinfo_canonical(self):
        info = CInfo(True, 3, CutStatus.SUCCESS)
        assert info.to_canonical() == {
            "feasible": True, "num_iters": 3, "status": "success", "interval": None
        }


class TestCuttingPlaneFeas:
    """Feasibility loop."""

    def test_feasible_center(self):
        """A feasible initial center returns at once without updates."""
        space = ScriptedSpace()
        info = cutting_plane_feas(ScriptedFeasOracle(0), space)
        assert info.feasible
        assert info.num_iters == 0
        assert space.cuts == []

    def test_feasible_after_cuts(self):
        """Iterations count the cuts applied before acceptance."""
        space = ScriptedSpace()
        info = cutting_plane_feas(ScriptedFeasOracle(3), space)
        assert info.feasible
        assert info.num_iters == 3
        assert len(space.cuts) == 3

    def test_no_solution(self):
        """A NO_SOLN update stops with infeasibility."""
        space = ScriptedSpace([CutStatus.NO_SOLN])
        info = cutting_plane_feas(ScriptedFeasOracle(10), space)
        assert not info.feasible
        assert info.num_iters == 0
        assert info.status == CutStatus.NO_SOLN

    def test_no_effect(self):
        """A cut without effect stops with infeasibility."""
        space = ScriptedSpace([CutStatus.SUCCESS, CutStatus.NO_EFFECT])
        info = cutting_plane_feas(ScriptedFeasOracle(10), space)
        assert not info.feasible
        assert info.num_iters == 1
        assert info.status == CutStatus.NO_EFFECT

    def test_small_region(self):
        """A region below tolerance stops with infeasibility."""
        space = ScriptedSpace(tsq=1e-12)
        info = cutting_plane_feas(ScriptedFeasOracle(10), space)
        assert not info.feasible
        assert info.num_iters == 0

    def test_budget_exhausted(self):
        """Running out of iterations reports max_iter."""
        space = ScriptedSpace()
        info = cutting_plane_feas(ScriptedFeasOracle(100), space, Options(max_iter=5))
        assert not info.feasible
        assert info.num_iters == 5
        assert len(space.cuts) == 5


class ScriptedOptimOracle:
    """Improves the target on the listed query indices."""

    def __init__(self, improve_at):
        self.improve_at = set(improve_at)
        self.queries = 0
        self.seen = []

    def assess_optim(self, x, target):
        idx = self.queries
        self.queries += 1
        self.seen.append(np.array(x))
        if idx in self.improve_at:
            return (np.array([1.0, 0.0]), 0.0), target + 1.0
        return (np.array([1.0, 0.0]), 0.5), None


class TestCuttingPlaneOptim:
    """Continuous optimization loop."""

    def test_never_improved(self):
        """x_best stays None when the target never improves."""
        space = ScriptedSpace([CutStatus.SUCCESS] * 3 + [CutStatus.NO_SOLN])
        x_best, target, num_iters = cutting_plane_optim(ScriptedOptimOracle([]), space, 0.0)
        assert x_best is None
        assert target == 0.0
        assert num_iters == 3

    def test_snapshot_before_update(self):
        """x_best is the center at the improving query, not the final center."""
        omega = ScriptedOptimOracle([1])
        space = ScriptedSpace([CutStatus.SUCCESS] * 4 + [CutStatus.NO_EFFECT])
        x_best, target, num_iters = cutting_plane_optim(omega, space, 0.0)

        np.testing.assert_array_equal(x_best, omega.seen[1])
        assert not np.array_equal(x_best, space.xc())
        assert target == 1.0
        assert num_iters == 4

    def test_snapshot_is_a_copy(self):
        """Later in-place changes to the center do not alter x_best."""
        omega = ScriptedOptimOracle([0])
        space = ScriptedSpace([CutStatus.NO_SOLN])
        x_best, _, _ = cutting_plane_optim(omega, space, 0.0)
        space.xc()[:] = 42.0
        np.testing.assert_array_equal(x_best, [0.0, 0.0])

    def test_zero_target_counts_as_improvement(self):
        """A tightened target of 0.0 still records the point."""
        class ZeroOracle:
            def assess_optim(self, x, target):
                return (np.array([1.0, 0.0]), 0.0), 0.0

        x_best, target, _ = cutting_plane_optim(ZeroOracle(), ScriptedSpace([CutStatus.NO_SOLN]), -1.0)
        assert x_best is not None
        assert target == 0.0

    def test_budget_exhausted(self):
        """Budget exhaustion returns the best snapshot so far."""
        omega = ScriptedOptimOracle([0, 2])
        x_best, target, num_iters = cutting_plane_optim(
            omega, ScriptedSpace(), 0.0, Options(max_iter=4))
        assert num_iters == 4
        assert target == 2.0
        np.testing.assert_array_equal(x_best, omega.seen[2])


class ScriptedQuantOracle:
    """Quantized oracle recording the retry flag it receives."""

    def __init__(self, improve_at=(), more_alt=True):
        self.improve_at = set(improve_at)
        self.more_alt = more_alt
        self.retries = []

    def assess_optim_q(self, x, target, retry):
        idx = len(self.retries)
        self.retries.append(retry)
        x_q = np.round(x) + 0.5
        target1 = target + 1.0 if idx in self.improve_at else None
        return (np.array([1.0, 0.0]), 0.0), target1, x_q, self.more_alt


class TestCuttingPlaneOptimQ:
    """Quantized optimization loop."""

    def test_records_rounded_point(self):
        """x_best is the oracle's rounded point, not the center."""
        omega = ScriptedQuantOracle(improve_at=[0])
        space = ScriptedSpace([CutStatus.SUCCESS, CutStatus.NO_SOLN])
        x_best, target, num_iters = cutting_plane_optim_q(omega, space, 0.0)
        np.testing.assert_array_equal(x_best, [0.5, 0.5])
        assert target == 1.0
        assert num_iters == 1

    def test_no_soln_returns_immediately(self):
        """No further update happens after a NO_SOLN status."""
        omega = ScriptedQuantOracle()
        space = ScriptedSpace([CutStatus.SUCCESS, CutStatus.NO_SOLN, CutStatus.SUCCESS])
        _, _, num_iters = cutting_plane_optim_q(omega, space, 0.0)
        assert num_iters == 1
        assert len(space.cuts) == 2
        assert len(omega.retries) == 2

    def test_no_effect_without_alternatives(self):
        """NO_EFFECT with no alternative rounding ends the loop."""
        omega = ScriptedQuantOracle(improve_at=[0], more_alt=False)
        space = ScriptedSpace([CutStatus.NO_EFFECT])
        x_best, target, num_iters = cutting_plane_optim_q(omega, space, 0.0)
        assert num_iters == 0
        assert target == 1.0
        assert x_best is not None

    def test_retry_is_sticky(self):
        """Once set by NO_EFFECT, retry stays set after later successes."""
        omega = ScriptedQuantOracle()
        space = ScriptedSpace([
            CutStatus.SUCCESS,
            CutStatus.NO_EFFECT,
            CutStatus.SUCCESS,
            CutStatus.SUCCESS,
            CutStatus.NO_SOLN,
        ])
        cutting_plane_optim_q(omega, space, 0.0)
        assert omega.retries == [False, False, True, True, True]

    def test_converges_on_small_region(self):
        """A region below tolerance ends the loop."""
        omega = ScriptedQuantOracle()
        space = ScriptedSpace(tsq=1e-12)
        _, _, num_iters = cutting_plane_optim_q(omega, space, 0.0)
        assert num_iters == 0

    def test_budget_exhausted(self):
        omega = ScriptedQuantOracle()
        _, _, num_iters = cutting_plane_optim_q(omega, ScriptedSpace(), 0.0, Options(max_iter=7))
        assert num_iters == 7
