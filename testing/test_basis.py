import numpy as np
import pytest
from lfatoolkit import quadrature
from lfatoolkit.basis import TensorBasis, tensor_h1_lagrange_basis, tensor_h1_lagrange_macro_basis, \
    tensor_h1_lagrange_p_prolongation_basis, tensor_h1_lagrange_h_prolongation_basis, \
    tensor_h1_lagrange_h_prolongation_macro_basis


def integrate_monomial(points, weights, degree):
    return np.sum(weights * points ** degree)


def exact_monomial_integral(degree):
    return 0.0 if degree % 2 == 1 else 2.0 / (degree + 1)


@pytest.mark.parametrize("number_of_points", [1, 2, 3, 5, 8])
def test_gauss_quadrature_exactness(number_of_points):
    points, weights = quadrature.gauss_quadrature(number_of_points)
    for degree in range(2 * number_of_points):
        assert integrate_monomial(points, weights, degree) == pytest.approx(exact_monomial_integral(degree), abs=1e-12)


@pytest.mark.parametrize("number_of_points", [2, 3, 4, 6])
def test_lobatto_quadrature_exactness(number_of_points):
    points, weights = quadrature.lobatto_quadrature(number_of_points)
    assert points[0] == pytest.approx(-1.0)
    assert points[-1] == pytest.approx(1.0)
    assert np.all(np.diff(points) > 0)
    assert np.sum(weights) == pytest.approx(2.0)
    for degree in range(2 * number_of_points - 2):
        assert integrate_monomial(points, weights, degree) == pytest.approx(exact_monomial_integral(degree), abs=1e-12)


def test_lobatto_quadrature_three_points():
    points, weights = quadrature.lobatto_quadrature(3)
    np.testing.assert_allclose(points, [-1.0, 0.0, 1.0], atol=1e-14)
    np.testing.assert_allclose(weights, [1 / 3, 4 / 3, 1 / 3])


def test_quadrature_number_of_points():
    with pytest.raises(ValueError):
        quadrature.gauss_quadrature(0)
    with pytest.raises(ValueError):
        quadrature.lobatto_quadrature(1)


def test_lagrange_interpolation_is_identity_on_nodes():
    nodes, _ = quadrature.lobatto_quadrature(4)
    interpolation, _ = quadrature.lagrange_interpolation(nodes, nodes)
    np.testing.assert_allclose(interpolation, np.eye(4), atol=1e-14)


def test_lagrange_interpolation_reproduces_polynomials():
    nodes, _ = quadrature.lobatto_quadrature(4)
    points, _ = quadrature.gauss_quadrature(5)
    interpolation, gradient = quadrature.lagrange_interpolation(nodes, points)
    np.testing.assert_allclose(interpolation @ nodes ** 3, points ** 3, atol=1e-13)
    np.testing.assert_allclose(gradient @ nodes ** 3, 3 * points ** 2, atol=1e-12)


def test_macro_points():
    nodes, _ = quadrature.lobatto_quadrature(3)
    np.testing.assert_allclose(quadrature.macro_points(nodes, 2), [-1.0, -0.5, 0.0, 0.5, 1.0], atol=1e-14)
    points, weights = quadrature.gauss_quadrature(2)
    assert len(quadrature.macro_points(points, 3)) == 6
    assert np.sum(quadrature.macro_weights(weights, 3)) == pytest.approx(2.0)


def test_partition_of_unity(dimension):
    basis = tensor_h1_lagrange_basis(4, 5, dimension)
    assert basis.interpolation.shape == (5 ** dimension, 4 ** dimension)
    assert basis.gradient.shape == (dimension * 5 ** dimension, 4 ** dimension)
    np.testing.assert_allclose(basis.interpolation.sum(axis=1), 1.0)
    np.testing.assert_allclose(basis.gradient.sum(axis=1), 0.0, atol=1e-12)
    assert np.sum(basis.quadrature_weights) == pytest.approx(2.0 ** dimension)


def test_nodes_first_coordinate_fastest():
    basis = tensor_h1_lagrange_basis(3, 3, 2)
    np.testing.assert_allclose(basis.nodes[:3], [[-1.0, -1.0], [0.0, -1.0], [1.0, -1.0]], atol=1e-14)
    np.testing.assert_allclose(basis.nodes[3], [-1.0, 0.0], atol=1e-14)


def test_gradient_blocks_ordered_by_direction():
    basis = tensor_h1_lagrange_basis(2, 3, 2)
    number_of_points = basis.number_of_quadrature_points
    x = basis.nodes[:, 0]
    y = basis.nodes[:, 1]
    np.testing.assert_allclose(basis.gradient[:number_of_points] @ x, 1.0)
    np.testing.assert_allclose(basis.gradient[number_of_points:] @ x, 0.0, atol=1e-14)
    np.testing.assert_allclose(basis.gradient[:number_of_points] @ y, 0.0, atol=1e-14)
    np.testing.assert_allclose(basis.gradient[number_of_points:] @ y, 1.0)


def test_mode_map():
    assert list(tensor_h1_lagrange_basis(3, 4, 1).mode_map) == [0, 1, 0]
    assert list(tensor_h1_lagrange_basis(3, 4, 2).mode_map) == [0, 1, 0, 2, 3, 2, 0, 1, 0]
    basis = tensor_h1_lagrange_basis(4, 4, 3)
    assert basis.number_of_modes == 27
    assert sorted(set(basis.mode_map)) == list(range(27))
    np.testing.assert_array_equal(basis.mode_map_matrix.sum(axis=0), 1.0)


def test_macro_basis_with_one_element_is_element_basis(dimension):
    basis = tensor_h1_lagrange_basis(3, 4, dimension)
    macro_basis = tensor_h1_lagrange_macro_basis(3, 4, dimension, 1)
    np.testing.assert_allclose(macro_basis.interpolation, basis.interpolation, atol=1e-14)
    np.testing.assert_allclose(macro_basis.gradient, basis.gradient, atol=1e-13)
    np.testing.assert_allclose(macro_basis.quadrature_weights, basis.quadrature_weights)


def test_macro_basis():
    basis = tensor_h1_lagrange_macro_basis(3, 4, 1, 2)
    assert basis.number_of_nodes_1d == 5
    assert basis.number_of_quadrature_points_1d == 8
    assert basis.number_of_elements_1d == 2
    assert list(basis.mode_map) == [0, 1, 2, 3, 0]
    np.testing.assert_allclose(basis.interpolation @ basis.nodes_1d, basis.quadrature_points_1d, atol=1e-14)
    np.testing.assert_allclose(basis.gradient @ basis.nodes_1d, 1.0)


def test_p_prolongation_basis():
    basis = tensor_h1_lagrange_p_prolongation_basis(3, 5, 1)
    assert basis.interpolation.shape == (5, 3)
    fine_nodes, _ = quadrature.lobatto_quadrature(5)
    np.testing.assert_allclose(basis.quadrature_points_1d, fine_nodes)
    np.testing.assert_allclose(basis.interpolation @ basis.nodes_1d ** 2, fine_nodes ** 2, atol=1e-14)


def test_h_prolongation_basis():
    basis = tensor_h1_lagrange_h_prolongation_basis(3, 1, 2)
    assert basis.interpolation.shape == (5, 3)
    assert basis.quadrature_weights is None
    fine_nodes = basis.quadrature_points_1d
    np.testing.assert_allclose(fine_nodes, [-1.0, -0.5, 0.0, 0.5, 1.0], atol=1e-14)
    np.testing.assert_allclose(basis.interpolation @ basis.nodes_1d, fine_nodes, atol=1e-14)
    np.testing.assert_allclose(basis.interpolation @ basis.nodes_1d ** 2, fine_nodes ** 2, atol=1e-14)


def test_h_prolongation_macro_basis():
    basis = tensor_h1_lagrange_h_prolongation_macro_basis(2, 2, 2, 4)
    assert basis.number_of_nodes_1d == 3
    assert basis.number_of_quadrature_points_1d == 5
    np.testing.assert_allclose(basis.interpolation.sum(axis=1), 1.0)
    with pytest.raises(ValueError):
        tensor_h1_lagrange_h_prolongation_macro_basis(2, 1, 2, 3)


def test_basis_validation():
    nodes, _ = quadrature.lobatto_quadrature(3)
    points, weights = quadrature.gauss_quadrature(4)
    interpolation, gradient = quadrature.lagrange_interpolation(nodes, points)
    with pytest.raises(ValueError):
        TensorBasis(3, 4, 0, nodes, points, weights, interpolation, gradient)
    with pytest.raises(ValueError):
        TensorBasis(3, 4, 1, nodes, points, weights, interpolation.T, gradient)
    with pytest.raises(ValueError):
        TensorBasis(3, 4, 1, nodes[:2], points, weights, interpolation, gradient)


def test_basis_is_read_only():
    basis = tensor_h1_lagrange_basis(3, 4, 2)
    with pytest.raises(AttributeError):
        basis.dimension = 3
    with pytest.raises(ValueError):
        basis.interpolation[0, 0] = 2.0
