from functools import reduce
import numpy as np
from lfatoolkit import quadrature


def read_only(array):
    array = np.array(array)
    array.setflags(write=False)
    return array


def tensor_points(points_1d, dimension):
    """Tensor product coordinates with the first coordinate varying fastest."""
    grids = np.meshgrid(*([points_1d] * dimension), indexing='ij')
    return np.stack([grids[dimension - 1 - k].ravel() for k in range(dimension)], axis=1)


class TensorBasis:
    """Tensor product finite element basis.

    For an element basis the nodes carry the degrees of freedom and the quadrature points are used to
    integrate the weak form. For a prolongation basis the nodes are the coarse grid nodes and the
    quadrature points are the fine grid nodes, so that `interpolation` maps coarse to fine values.
    """

    def __init__(self, number_of_nodes_1d, number_of_quadrature_points_1d, dimension, nodes_1d,
                 quadrature_points_1d, quadrature_weights_1d, interpolation_1d, gradient_1d,
                 number_of_elements_1d=1):
        if dimension < 1:
            raise ValueError("The dimension of a basis must be greater or equal 1")
        if number_of_nodes_1d < 2:
            raise ValueError("A basis requires at least two nodes per dimension")
        if number_of_quadrature_points_1d < 1:
            raise ValueError("A basis requires at least one quadrature point per dimension")
        shape = (number_of_quadrature_points_1d, number_of_nodes_1d)
        if np.shape(interpolation_1d) != shape or np.shape(gradient_1d) != shape:
            raise ValueError("Interpolation and gradient matrices must have one row per quadrature point "
                             "and one column per node")
        if len(nodes_1d) != number_of_nodes_1d or len(quadrature_points_1d) != number_of_quadrature_points_1d:
            raise ValueError("Number of nodes or quadrature points does not match")
        self._number_of_nodes_1d = number_of_nodes_1d
        self._number_of_quadrature_points_1d = number_of_quadrature_points_1d
        self._dimension = dimension
        self._number_of_elements_1d = number_of_elements_1d
        self._nodes_1d = read_only(nodes_1d)
        self._quadrature_points_1d = read_only(quadrature_points_1d)
        self._quadrature_weights_1d = None if quadrature_weights_1d is None else read_only(quadrature_weights_1d)
        self._interpolation_1d = read_only(interpolation_1d)
        self._gradient_1d = read_only(gradient_1d)
        self._nodes = None
        self._quadrature_points = None
        self._quadrature_weights = None
        self._interpolation = None
        self._gradient = None
        self._mode_map = None

    @property
    def number_of_nodes_1d(self):
        return self._number_of_nodes_1d

    @property
    def number_of_quadrature_points_1d(self):
        return self._number_of_quadrature_points_1d

    @property
    def dimension(self):
        return self._dimension

    @property
    def number_of_elements_1d(self):
        return self._number_of_elements_1d

    @property
    def nodes_1d(self):
        return self._nodes_1d

    @property
    def quadrature_points_1d(self):
        return self._quadrature_points_1d

    @property
    def quadrature_weights_1d(self):
        return self._quadrature_weights_1d

    @property
    def interpolation_1d(self):
        return self._interpolation_1d

    @property
    def gradient_1d(self):
        return self._gradient_1d

    @property
    def number_of_nodes(self):
        return self.number_of_nodes_1d ** self.dimension

    @property
    def number_of_quadrature_points(self):
        return self.number_of_quadrature_points_1d ** self.dimension

    @property
    def number_of_modes(self):
        return (self.number_of_nodes_1d - 1) ** self.dimension

    @property
    def nodes(self):
        if self._nodes is None:
            self._nodes = read_only(tensor_points(self.nodes_1d, self.dimension))
        return self._nodes

    @property
    def quadrature_points(self):
        if self._quadrature_points is None:
            self._quadrature_points = read_only(tensor_points(self.quadrature_points_1d, self.dimension))
        return self._quadrature_points

    @property
    def quadrature_weights(self):
        if self._quadrature_weights is None and self.quadrature_weights_1d is not None:
            weights = reduce(np.kron, [self.quadrature_weights_1d] * self.dimension)
            self._quadrature_weights = read_only(weights)
        return self._quadrature_weights

    @property
    def interpolation(self):
        if self._interpolation is None:
            interpolation = reduce(np.kron, [self.interpolation_1d] * self.dimension)
            self._interpolation = read_only(interpolation)
        return self._interpolation

    @property
    def gradient(self):
        # one block of quadrature point rows per direction, x derivative first
        if self._gradient is None:
            blocks = []
            for k in range(self.dimension):
                factors = [self.interpolation_1d] * self.dimension
                factors[self.dimension - 1 - k] = self.gradient_1d
                blocks.append(reduce(np.kron, factors))
            self._gradient = read_only(np.vstack(blocks))
        return self._gradient

    @property
    def mode_map(self):
        """Mode index of every node; the last node in each direction is identified with the first."""
        if self._mode_map is None:
            number_of_modes_1d = self.number_of_nodes_1d - 1
            mode_map_1d = np.array(list(range(number_of_modes_1d)) + [0])
            grids = np.meshgrid(*([mode_map_1d] * self.dimension), indexing='ij')
            mode_map = sum(grids[self.dimension - 1 - k].ravel() * number_of_modes_1d ** k
                           for k in range(self.dimension))
            self._mode_map = read_only(mode_map)
        return self._mode_map

    @property
    def mode_map_matrix(self):
        matrix = np.zeros((self.number_of_modes, self.number_of_nodes))
        matrix[self.mode_map, np.arange(self.number_of_nodes)] = 1.0
        return matrix

    def __repr__(self):
        return f'TensorBasis({self.number_of_nodes_1d}, {self.number_of_quadrature_points_1d}, ' \
               f'{self.dimension}, number_of_elements_1d={self.number_of_elements_1d})'


def tensor_h1_lagrange_basis(number_of_nodes_1d, number_of_quadrature_points_1d, dimension,
                             lagrange_quadrature=False):
    """H1 Lagrange basis on Gauss-Lobatto nodes.

    With `lagrange_quadrature` the quadrature points are Gauss-Lobatto points instead of Gauss points,
    which turns the basis into a prolongation from `number_of_nodes_1d` to
    `number_of_quadrature_points_1d` nodes.
    """
    nodes, _ = quadrature.lobatto_quadrature(number_of_nodes_1d)
    if lagrange_quadrature:
        points, weights = quadrature.lobatto_quadrature(number_of_quadrature_points_1d)
    else:
        points, weights = quadrature.gauss_quadrature(number_of_quadrature_points_1d)
    interpolation, gradient = quadrature.lagrange_interpolation(nodes, points)
    return TensorBasis(number_of_nodes_1d, number_of_quadrature_points_1d, dimension, nodes, points, weights,
                       interpolation, gradient)


def tensor_h1_lagrange_macro_basis(number_of_nodes_1d, number_of_quadrature_points_1d, dimension,
                                   number_of_elements_1d):
    if number_of_elements_1d < 1:
        raise ValueError("A macro element must contain at least one element per dimension")
    element_nodes, _ = quadrature.lobatto_quadrature(number_of_nodes_1d)
    element_points, element_weights = quadrature.gauss_quadrature(number_of_quadrature_points_1d)
    nodes = quadrature.macro_points(element_nodes, number_of_elements_1d)
    points = quadrature.macro_points(element_points, number_of_elements_1d)
    weights = quadrature.macro_weights(element_weights, number_of_elements_1d)
    interpolation, gradient = quadrature.macro_lagrange_interpolation(element_nodes, points, number_of_elements_1d)
    return TensorBasis(len(nodes), len(points), dimension, nodes, points, weights, interpolation, gradient,
                       number_of_elements_1d=number_of_elements_1d)


def tensor_h1_lagrange_p_prolongation_basis(number_of_coarse_nodes_1d, number_of_fine_nodes_1d, dimension):
    return tensor_h1_lagrange_basis(number_of_coarse_nodes_1d, number_of_fine_nodes_1d, dimension,
                                    lagrange_quadrature=True)


def tensor_h1_lagrange_h_prolongation_basis(number_of_nodes_1d, dimension, number_of_fine_elements_1d):
    return tensor_h1_lagrange_h_prolongation_macro_basis(number_of_nodes_1d, dimension, 1,
                                                         number_of_fine_elements_1d)


def tensor_h1_lagrange_h_prolongation_macro_basis(number_of_nodes_1d, dimension, number_of_coarse_elements_1d,
                                                  number_of_fine_elements_1d):
    if number_of_coarse_elements_1d < 1 or number_of_fine_elements_1d < 1:
        raise ValueError("A macro element must contain at least one element per dimension")
    if number_of_fine_elements_1d % number_of_coarse_elements_1d != 0:
        raise ValueError("Number of fine elements must be a multiple of the number of coarse elements")
    element_nodes, _ = quadrature.lobatto_quadrature(number_of_nodes_1d)
    coarse_nodes = quadrature.macro_points(element_nodes, number_of_coarse_elements_1d)
    fine_nodes = quadrature.macro_points(element_nodes, number_of_fine_elements_1d)
    interpolation, gradient = quadrature.macro_lagrange_interpolation(element_nodes, fine_nodes,
                                                                      number_of_coarse_elements_1d)
    return TensorBasis(len(coarse_nodes), len(fine_nodes), dimension, coarse_nodes, fine_nodes, None,
                       interpolation, gradient, number_of_elements_1d=number_of_coarse_elements_1d)
