import numpy as np
import pytest
from lfatoolkit.mesh import Mesh1D
from lfatoolkit.basis import tensor_h1_lagrange_p_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.jacobi import Jacobi
from lfatoolkit.preconditioners.multigrid import PMultigrid
from lfatoolkit.evaluation.sweep import SymbolSweep
from lfatoolkit.optimization.smoothing_parameters import Optimizer, restrict_parameters, smoothing_objective, \
    smoother_objective


def test_restrict_parameters():
    parameters = [-1.0, 0.5, 3.0]
    restrict_parameters(parameters, 0.0, 2.0)
    assert parameters == [0.0, 0.5, 2.0]


def test_quadratic_objective():
    optimizer = Optimizer(lambda p: (p[0] - 0.7) ** 2, 1)
    parameters, logbook = optimizer.optimize(30, seed=1)
    assert len(parameters) == 1
    assert parameters[0] == pytest.approx(0.7, abs=1e-2)
    assert len(logbook) == 30


def test_parameters_are_restricted():
    optimizer = Optimizer(lambda p: -p[0], 1, minimum=0.0, maximum=1.5)
    parameters, _ = optimizer.optimize(10, seed=2)
    assert parameters[0] == pytest.approx(1.5)


def test_non_finite_objective():
    optimizer = Optimizer(lambda p: np.nan, 1, infinity=1e10)
    assert optimizer.evaluate([1.0]) == (1e10,)


def test_optimizer_validation():
    with pytest.raises(ValueError):
        Optimizer(lambda p: 0.0, 0)
    with pytest.raises(ValueError):
        Optimizer(lambda p: 0.0, 1, minimum=1.0, maximum=1.0)
    with pytest.raises(ValueError):
        Optimizer(lambda p: 0.0, 2).optimize(1, centroid=[1.0])


def test_smoothing_objectives():
    mesh = Mesh1D(1.0)
    fine_diffusion = gallery_operator("diffusion", 5, 5, mesh)
    coarse_diffusion = gallery_operator("diffusion", 3, 5, mesh)
    jacobi = Jacobi(fine_diffusion)
    multigrid = PMultigrid(fine_diffusion, coarse_diffusion, jacobi,
                           [tensor_h1_lagrange_p_prolongation_basis(3, 5, 1)])
    sweep = SymbolSweep(1, 8)
    rho = smoothing_objective(multigrid, [1, 1], sweep)([1.0])
    assert np.isfinite(rho)
    assert rho > 0.0
    mu = smoother_objective(jacobi, sweep)([0.5])
    assert 0.0 < mu < 1.0
    assert smoother_objective(jacobi, sweep, high_frequencies_only=False)([0.5]) >= mu
