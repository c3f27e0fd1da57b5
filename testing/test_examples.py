import os
import runpy
import numpy as np
import pytest
from lfatoolkit.mesh import Mesh1D
from lfatoolkit.basis import tensor_h1_lagrange_h_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator, gallery_macro_element_operator
from lfatoolkit.preconditioners.jacobi import Jacobi
from lfatoolkit.preconditioners.multigrid import HMultigrid

examples_directory = os.path.join(os.path.dirname(__file__), os.pardir, 'examples')


def run_example(name):
    return runpy.run_path(os.path.join(examples_directory, name))


def test_ex101_jacobi():
    eigenvalues = run_example('ex101_jacobi.py')['eigenvalues']
    assert min(eigenvalues) == pytest.approx(-0.6289239142744161)
    assert max(eigenvalues) == pytest.approx(0.6405931989084651)


def test_ex111_chebyshev():
    namespace = run_example('ex111_chebyshev.py')
    eigenvalues = namespace['eigenvalues']
    assert min(eigenvalues) == pytest.approx(-0.2728757362795382)
    assert max(eigenvalues) == pytest.approx(0.26048711552603665)
    # every eigenvalue of D^-1 A at (pi, pi) lies in the smoothing interval
    lower, upper = namespace['chebyshev'].eigenvalue_bounds
    sigma = (upper + lower) / (upper - lower)
    bound = 1 / (4 * sigma ** 3 - 3 * sigma)
    assert max(np.abs(eigenvalues)) <= bound + 1e-12


def test_ex211_hmultigrid():
    namespace = run_example('ex211_hmultigrid.py')
    # D^-1 A is the identity at (pi, pi), so the smoother is p(1) I with the Chebyshev residual polynomial p
    assert namespace['chebyshev'].eigenvalue_estimates[1] == pytest.approx(1.5)
    assert max(namespace['eigenvalues']) == pytest.approx((13937 / 71577) ** 2)


def test_ex212_hmultigrid_multilevel():
    eigenvalues = run_example('ex212_hmultigrid_multilevel.py')['eigenvalues']
    assert 0.0 < max(eigenvalues) < 1.0


def assemble_periodic(element_matrix, row_offset, column_offset, number_of_elements, shape):
    matrix = np.zeros(shape)
    rows, columns = element_matrix.shape
    for e in range(number_of_elements):
        row_indices = (e * row_offset + np.arange(rows)) % shape[0]
        column_indices = (e * column_offset + np.arange(columns)) % shape[1]
        matrix[np.ix_(row_indices, column_indices)] += element_matrix
    return matrix


@pytest.mark.parametrize("number_of_nodes_1d", [2, 3])
def test_h_multigrid_matches_global_two_grid(number_of_nodes_1d):
    mesh = Mesh1D(1.0)
    number_of_fine_elements_1d = 2
    number_of_coarse_elements = 6
    fine_diffusion = gallery_macro_element_operator("diffusion", number_of_nodes_1d, number_of_nodes_1d + 1,
                                                    number_of_fine_elements_1d, mesh)
    coarse_diffusion = gallery_operator("diffusion", number_of_nodes_1d, number_of_nodes_1d + 1, mesh)
    ctof_basis = tensor_h1_lagrange_h_prolongation_basis(number_of_nodes_1d, 1, number_of_fine_elements_1d)
    multigrid = HMultigrid(fine_diffusion, coarse_diffusion, Jacobi(fine_diffusion), [ctof_basis])
    weight = [0.6]
    smoothing_steps = [1, 1]

    # periodic mesh of macro elements, each coarse element split into two fine elements
    coarse_stride = number_of_nodes_1d - 1
    fine_stride = number_of_fine_elements_1d * coarse_stride
    number_of_fine_nodes = number_of_coarse_elements * fine_stride
    number_of_coarse_nodes = number_of_coarse_elements * coarse_stride
    A_f = assemble_periodic(fine_diffusion.element_matrix, fine_stride, fine_stride, number_of_coarse_elements,
                            (number_of_fine_nodes, number_of_fine_nodes))
    A_c = assemble_periodic(coarse_diffusion.element_matrix, coarse_stride, coarse_stride,
                            number_of_coarse_elements, (number_of_coarse_nodes, number_of_coarse_nodes))
    P = assemble_periodic(multigrid.prolongation_matrix, fine_stride, coarse_stride, number_of_coarse_elements,
                          (number_of_fine_nodes, number_of_coarse_nodes))
    np.testing.assert_allclose(np.diag(A_f)[:fine_stride], fine_diffusion.diagonal)
    identity = np.eye(number_of_fine_nodes)
    S = identity - weight[0] * A_f / np.diag(A_f)[:, np.newaxis]
    # the constant vector is in the kernel of the coarse operator
    coarse_grid_correction = identity - P @ np.linalg.pinv(A_c) @ P.T @ A_f
    two_grid = S @ coarse_grid_correction @ S
    global_eigenvalues = np.linalg.eigvals(two_grid)

    for k in range(1, number_of_coarse_elements):
        theta = [2 * np.pi * k / number_of_coarse_elements]
        eigenvalues = np.linalg.eigvals(multigrid.compute_symbols(weight, smoothing_steps, theta))
        assert max(abs(eigenvalues.imag)) < 1e-8
        for eigenvalue in eigenvalues:
            assert min(abs(global_eigenvalues - eigenvalue)) < 1e-6
