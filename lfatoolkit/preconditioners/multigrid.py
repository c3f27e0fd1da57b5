import numpy as np
import scipy.sparse
from lfatoolkit.basis import read_only
from lfatoolkit.operators.operator import Operator, compute_node_coordinate_differences, validate_frequencies
from lfatoolkit.preconditioners.base import Preconditioner


class Multigrid:
    """Two-level multigrid preconditioner, nested to arbitrary depth through the coarse operator.

    The coarse operator is either a finite element operator, which is inverted directly, or another
    multigrid preconditioner whose own error propagation replaces the exact coarse solve. The smoother
    must be bound to the fine grid operator and there must be one prolongation basis per field.
    """

    def __init__(self, fine_operator, coarse_operator, smoother, prolongation_bases):
        prolongation_bases = tuple(prolongation_bases)
        if not isinstance(fine_operator, Operator):
            raise TypeError("Fine grid operator must be a finite element operator")
        if not isinstance(smoother, Preconditioner):
            raise TypeError("Smoother must be a preconditioner")
        if smoother.operator is not fine_operator:
            raise ValueError("Smoother must be for the fine grid operator")
        if not isinstance(coarse_operator, (Operator, Multigrid)):
            raise TypeError("Coarse operator must be an operator or multigrid")
        if len(prolongation_bases) != len(fine_operator.outputs) or \
                len(prolongation_bases) != len(coarse_operator.outputs):
            raise ValueError("Operators and prolongation bases must have the same number of fields")
        for basis in prolongation_bases:
            if basis.dimension != fine_operator.inputs[0].basis.dimension:
                raise ValueError("Fine grid and prolongation space dimensions must agree")
        self._fine_operator = fine_operator
        self._coarse_operator = coarse_operator
        self._smoother = smoother
        self._prolongation_bases = prolongation_bases
        self._prolongation_matrix = None
        self._node_coordinate_differences = None

    @property
    def fine_operator(self):
        return self._fine_operator

    @property
    def coarse_operator(self):
        return self._coarse_operator

    @property
    def smoother(self):
        return self._smoother

    @property
    def prolongation_bases(self):
        return self._prolongation_bases

    # used when this multigrid is the coarse operator of another level
    @property
    def outputs(self):
        return self.fine_operator.outputs

    @property
    def row_mode_map(self):
        return self.fine_operator.row_mode_map

    @property
    def column_mode_map(self):
        return self.fine_operator.column_mode_map

    @property
    def input_coordinates(self):
        return self.fine_operator.input_coordinates

    @property
    def dimension(self):
        return self.prolongation_bases[0].dimension

    @property
    def prolongation_matrix(self):
        """Block diagonal prolongation from coarse to fine nodes, scaled by the fine node multiplicity."""
        if self._prolongation_matrix is None:
            blocks = [basis.interpolation for basis in self.prolongation_bases]
            prolongation_matrix = scipy.sparse.block_diag(blocks, format='csr')
            multiplicity = self.fine_operator.multiplicity
            if prolongation_matrix.shape[0] != len(multiplicity):
                raise ValueError("Prolongation bases do not match the fine grid operator outputs")
            scaled = scipy.sparse.diags(1.0 / multiplicity) @ prolongation_matrix
            self._prolongation_matrix = read_only(scaled.toarray())
        return self._prolongation_matrix

    @property
    def node_coordinate_differences(self):
        if self._node_coordinate_differences is None:
            differences = compute_node_coordinate_differences(self.fine_operator.output_coordinates,
                                                              self.coarse_operator.input_coordinates)
            self._node_coordinate_differences = read_only(differences)
        return self._node_coordinate_differences

    def _symbol_matrix_nodes(self, theta, sign):
        theta = validate_frequencies(theta, self.dimension)
        phase = np.exp(sign * 1j * (self.node_coordinate_differences @ theta))
        return self.prolongation_matrix * phase

    def compute_symbols_prolongation(self, theta):
        symbol_matrix_nodes = self._symbol_matrix_nodes(theta, 1.0)
        return self.fine_operator.row_mode_map @ symbol_matrix_nodes @ self.coarse_operator.column_mode_map

    def compute_symbols_restriction(self, theta):
        # transpose, not conjugate transpose, with the mode maps of the opposite direction
        symbol_matrix_nodes = self._symbol_matrix_nodes(theta, -1.0)
        return self.coarse_operator.row_mode_map @ symbol_matrix_nodes.T @ self.fine_operator.column_mode_map

    def compute_coarse_inverse_symbols(self, parameters, smoothing_steps, theta):
        """Symbol matrix of the (approximate) coarse grid inverse."""
        coarse_operator = self.coarse_operator
        if isinstance(coarse_operator, Operator):
            return np.linalg.inv(coarse_operator.compute_symbols(theta))
        elif isinstance(coarse_operator, Multigrid):
            coarse_symbols = coarse_operator.fine_operator.compute_symbols(theta)
            identity = np.eye(coarse_symbols.shape[0])
            error_propagation = coarse_operator.compute_symbols(parameters, smoothing_steps, theta)
            return (identity - error_propagation) @ np.linalg.inv(coarse_symbols)
        else:
            raise RuntimeError("Coarse operator not supported")

    def compute_symbols(self, parameters, smoothing_steps, theta):
        """Symbol matrix of the multigrid error propagation.

        `parameters` are passed to the smoother on every level, `smoothing_steps` holds the number of
        pre- and post-smoothing sweeps (0 disables smoothing).
        """
        smoothing_steps = tuple(smoothing_steps)
        if len(smoothing_steps) != 2:
            raise ValueError("Must specify number of pre and post smooths")
        if any(int(v) != v or v < 0 for v in smoothing_steps):
            raise ValueError("Number of pre and post smooths must be non-negative integers")
        pre_smooths, post_smooths = (int(v) for v in smoothing_steps)

        S_f = self.smoother.compute_symbols(parameters, theta)
        R_ftoc = self.compute_symbols_restriction(theta)
        P_ctof = self.compute_symbols_prolongation(theta)
        A_f = self.fine_operator.compute_symbols(theta)
        A_c_inv = self.compute_coarse_inverse_symbols(parameters, smoothing_steps, theta)

        identity = np.eye(A_f.shape[0])
        coarse_grid_correction = identity - P_ctof @ A_c_inv @ R_ftoc @ A_f
        return np.linalg.matrix_power(S_f, post_smooths) @ coarse_grid_correction @ \
            np.linalg.matrix_power(S_f, pre_smooths)


class PMultigrid(Multigrid):
    """Multigrid with polynomial degree coarsening."""

    def __repr__(self):
        return f'PMultigrid({repr(self.fine_operator)}, {repr(self.coarse_operator)}, {repr(self.smoother)}, ' \
               f'{repr(list(self.prolongation_bases))})'


class HMultigrid(Multigrid):
    """Multigrid with mesh coarsening on macro elements; prolongation bases from the h-prolongation bases."""

    def __repr__(self):
        return f'HMultigrid({repr(self.fine_operator)}, {repr(self.coarse_operator)}, {repr(self.smoother)}, ' \
               f'{repr(list(self.prolongation_bases))})'
