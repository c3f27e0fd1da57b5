import numpy as np
from numpy.polynomial import legendre


def gauss_quadrature(number_of_points: int):
    """Gauss-Legendre points and weights on [-1, 1]."""
    if number_of_points < 1:
        raise ValueError("Gauss quadrature requires at least one point")
    points, weights = legendre.leggauss(number_of_points)
    return points, weights


def lobatto_quadrature(number_of_points: int):
    """Gauss-Lobatto-Legendre points and weights on [-1, 1].

    The points are the endpoints together with the roots of P'_{n-1}; the weights are
    2 / (n (n - 1) P_{n-1}(x)^2).
    """
    if number_of_points < 2:
        raise ValueError("Gauss-Lobatto quadrature requires at least two points")
    degree = number_of_points - 1
    polynomial = legendre.Legendre.basis(degree)
    interior = np.real(polynomial.deriv().roots())
    points = np.sort(np.concatenate(([-1.0], interior, [1.0])))
    weights = 2.0 / (number_of_points * degree * polynomial(points) ** 2)
    return points, weights


def lagrange_interpolation(nodes, points):
    """Interpolation and derivative matrices of the Lagrange polynomials on `nodes`, evaluated at `points`.

    Both matrices have one row per point and one column per node.
    """
    nodes = np.asarray(nodes, dtype=float)
    points = np.asarray(points, dtype=float)
    number_of_nodes = len(nodes)
    interpolation = np.ones((len(points), number_of_nodes))
    gradient = np.zeros((len(points), number_of_nodes))
    for j in range(number_of_nodes):
        for m in range(number_of_nodes):
            if m != j:
                interpolation[:, j] *= (points - nodes[m]) / (nodes[j] - nodes[m])
        for l in range(number_of_nodes):
            if l == j:
                continue
            term = np.full(len(points), 1.0 / (nodes[j] - nodes[l]))
            for m in range(number_of_nodes):
                if m != j and m != l:
                    term *= (points - nodes[m]) / (nodes[j] - nodes[m])
            gradient[:, j] += term
    return interpolation, gradient


def macro_points(points, number_of_elements: int):
    """Copies of reference `points` mapped into each of the sub-elements of [-1, 1].

    Shared sub-element endpoints appear only once when the points contain both endpoints.
    """
    points = np.asarray(points, dtype=float)
    shared = np.isclose(points[0], -1.0) and np.isclose(points[-1], 1.0)
    result = []
    for element in range(number_of_elements):
        mapped = -1.0 + (2.0 * element + points + 1.0) / number_of_elements
        if shared and element > 0:
            mapped = mapped[1:]
        result.append(mapped)
    return np.concatenate(result)


def macro_weights(weights, number_of_elements: int):
    weights = np.asarray(weights, dtype=float)
    return np.tile(weights / number_of_elements, number_of_elements)


def macro_lagrange_interpolation(nodes, points, number_of_elements: int):
    """Piecewise Lagrange interpolation on a macro element of `number_of_elements` sub-elements.

    `nodes` are the reference nodes of a single sub-element (including both endpoints), `points` are
    macro element coordinates in [-1, 1]. Columns follow the continuous macro element node numbering.
    """
    nodes = np.asarray(nodes, dtype=float)
    points = np.asarray(points, dtype=float)
    number_of_nodes = len(nodes)
    number_of_macro_nodes = number_of_elements * (number_of_nodes - 1) + 1
    interpolation = np.zeros((len(points), number_of_macro_nodes))
    gradient = np.zeros((len(points), number_of_macro_nodes))
    for i, x in enumerate(points):
        element = int(np.floor((x + 1.0) / 2.0 * number_of_elements))
        element = min(max(element, 0), number_of_elements - 1)
        left = -1.0 + 2.0 * element / number_of_elements
        local = (x - left) * number_of_elements - 1.0
        row_interpolation, row_gradient = lagrange_interpolation(nodes, [local])
        first = element * (number_of_nodes - 1)
        interpolation[i, first:first + number_of_nodes] = row_interpolation[0]
        gradient[i, first:first + number_of_nodes] = row_gradient[0] * number_of_elements
    return interpolation, gradient
