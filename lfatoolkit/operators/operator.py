import numpy as np
import scipy.linalg
from lfatoolkit.basis import read_only
from lfatoolkit.operators.field import EvaluationMode


def validate_frequencies(theta, dimension):
    theta = np.asarray(theta, dtype=float)
    if theta.shape != (dimension,):
        raise ValueError(f"Expected one Fourier mode frequency per dimension ({dimension}), got {theta.size}")
    return theta


def compute_node_coordinate_differences(output_coordinates, input_coordinates):
    """Offsets between input and output nodes, normalized by the extent of the input nodes.

    Entry [i, j, k] is (input_coordinates[j, k] - output_coordinates[i, k]) / length[k].
    """
    lengths = input_coordinates.max(axis=0) - input_coordinates.min(axis=0)
    differences = input_coordinates[np.newaxis, :, :] - output_coordinates[:, np.newaxis, :]
    return differences / lengths


class Operator:
    """Finite element operator given by a pointwise weak form on a single (macro) element.

    The weak form is called with one array per input field, in input order, and returns one array per
    output field. Non-weight inputs contain the field values or gradients at a quadrature point, the
    quadrature weights field contains the scaled weight of that point.
    """

    def __init__(self, weak_form, mesh, inputs, outputs):
        inputs = tuple(inputs)
        outputs = tuple(outputs)
        if len(inputs) == 0:
            raise ValueError("An operator requires at least one input field")
        if len(outputs) == 0:
            raise ValueError("An operator requires at least one output field")
        if all(field.is_quadrature_weights for field in inputs):
            raise ValueError("An operator requires at least one input field that is not quadrature weights")
        dimension = inputs[0].basis.dimension
        number_of_quadrature_points = inputs[0].basis.number_of_quadrature_points
        for field in inputs + outputs:
            if field.basis.dimension != dimension:
                raise ValueError("All operator fields must have the same dimension")
            if field.basis.number_of_quadrature_points != number_of_quadrature_points:
                raise ValueError("All operator fields must have the same number of quadrature points")
        for field in outputs:
            if EvaluationMode.quadrature_weights in field.evaluation_modes:
                raise ValueError("Quadrature weights can not be an operator output")
        if mesh.dimension != dimension:
            raise ValueError("Mesh and basis dimensions must agree")
        self._weak_form = weak_form
        self._mesh = mesh
        self._inputs = inputs
        self._outputs = outputs
        self._element_matrix = None
        self._diagonal = None
        self._multiplicity = None
        self._row_mode_map = None
        self._column_mode_map = None
        self._input_coordinates = None
        self._output_coordinates = None
        self._node_coordinate_differences = None

    @property
    def weak_form(self):
        return self._weak_form

    @property
    def mesh(self):
        return self._mesh

    @property
    def inputs(self):
        return self._inputs

    @property
    def outputs(self):
        return self._outputs

    @property
    def dimension(self):
        return self.inputs[0].basis.dimension

    @property
    def number_of_quadrature_points(self):
        return self.inputs[0].basis.number_of_quadrature_points

    def _evaluation_matrix(self, fields):
        number_of_quadrature_points = self.number_of_quadrature_points
        scaling = 2.0 / np.array(self.mesh.lengths)
        blocks = []
        for field in fields:
            if field.is_quadrature_weights:
                continue
            rows = []
            for mode in field.evaluation_modes:
                if mode == EvaluationMode.interpolation:
                    rows.append(field.basis.interpolation)
                elif mode == EvaluationMode.gradient:
                    gradient = field.basis.gradient
                    for k in range(self.dimension):
                        block = gradient[k * number_of_quadrature_points:(k + 1) * number_of_quadrature_points, :]
                        rows.append(block * scaling[k])
            blocks.append(np.vstack(rows))
        return scipy.linalg.block_diag(*blocks)

    def _quadrature_weights(self):
        jacobian_determinant = np.prod(np.array(self.mesh.lengths) / 2.0)
        for field in self.inputs:
            if field.is_quadrature_weights:
                return field.basis.quadrature_weights * jacobian_determinant
        return None

    def _weak_form_arguments(self, quadrature_weight, component):
        arguments = []
        offset = 0
        for field in self.inputs:
            if field.is_quadrature_weights:
                arguments.append(np.array([quadrature_weight]))
            else:
                argument = np.zeros(field.number_of_components)
                if offset <= component < offset + field.number_of_components:
                    argument[component - offset] = 1.0
                offset += field.number_of_components
                arguments.append(argument)
        return arguments

    def _pointwise_matrix(self):
        # probe the weak form with unit inputs at every quadrature point
        number_of_quadrature_points = self.number_of_quadrature_points
        number_of_input_components = sum(field.number_of_components for field in self.inputs
                                         if not field.is_quadrature_weights)
        number_of_output_components = sum(field.number_of_components for field in self.outputs)
        weights = self._quadrature_weights()
        output_rows = np.arange(number_of_output_components) * number_of_quadrature_points
        pointwise = np.zeros((number_of_output_components * number_of_quadrature_points,
                              number_of_input_components * number_of_quadrature_points))
        for q in range(number_of_quadrature_points):
            weight = None if weights is None else weights[q]
            for c in range(number_of_input_components):
                values = self.weak_form(*self._weak_form_arguments(weight, c))
                values = np.concatenate([np.ravel(np.asarray(value, dtype=float)) for value in values])
                if len(values) != number_of_output_components:
                    raise ValueError(f"Weak form returned {len(values)} values, "
                                     f"expected {number_of_output_components}")
                pointwise[output_rows + q, c * number_of_quadrature_points + q] = values
        return pointwise

    @property
    def element_matrix(self):
        if self._element_matrix is None:
            input_evaluation = self._evaluation_matrix(self.inputs)
            output_evaluation = self._evaluation_matrix(self.outputs)
            element_matrix = output_evaluation.T @ self._pointwise_matrix() @ input_evaluation
            self._element_matrix = read_only(element_matrix)
        return self._element_matrix

    @property
    def row_mode_map(self):
        if self._row_mode_map is None:
            blocks = [field.basis.mode_map_matrix for field in self.outputs]
            self._row_mode_map = read_only(scipy.linalg.block_diag(*blocks))
        return self._row_mode_map

    @property
    def column_mode_map(self):
        if self._column_mode_map is None:
            blocks = [field.basis.mode_map_matrix.T for field in self.inputs if not field.is_quadrature_weights]
            self._column_mode_map = read_only(scipy.linalg.block_diag(*blocks))
        return self._column_mode_map

    def _coordinates(self, fields):
        scaling = np.array(self.mesh.lengths) / 2.0
        return np.vstack([field.basis.nodes * scaling for field in fields if not field.is_quadrature_weights])

    @property
    def input_coordinates(self):
        if self._input_coordinates is None:
            self._input_coordinates = read_only(self._coordinates(self.inputs))
        return self._input_coordinates

    @property
    def output_coordinates(self):
        if self._output_coordinates is None:
            self._output_coordinates = read_only(self._coordinates(self.outputs))
        return self._output_coordinates

    @property
    def node_coordinate_differences(self):
        if self._node_coordinate_differences is None:
            differences = compute_node_coordinate_differences(self.output_coordinates, self.input_coordinates)
            self._node_coordinate_differences = read_only(differences)
        return self._node_coordinate_differences

    @property
    def diagonal(self):
        if self._diagonal is None:
            diagonal_nodes = np.diag(np.diag(self.element_matrix))
            diagonal_modes = self.row_mode_map @ diagonal_nodes @ self.column_mode_map
            self._diagonal = read_only(np.diag(diagonal_modes))
        return self._diagonal

    @property
    def multiplicity(self):
        """Number of output nodes sharing the mode of each output node."""
        if self._multiplicity is None:
            row_mode_map = self.row_mode_map
            nodes_per_mode = row_mode_map @ np.ones(row_mode_map.shape[1])
            self._multiplicity = read_only(row_mode_map.T @ nodes_per_mode)
        return self._multiplicity

    def compute_symbols(self, theta):
        theta = validate_frequencies(theta, self.dimension)
        phase = np.exp(1j * (self.node_coordinate_differences @ theta))
        symbol_matrix_nodes = self.element_matrix * phase
        return self.row_mode_map @ symbol_matrix_nodes @ self.column_mode_map

    def __repr__(self):
        name = getattr(self.weak_form, '__name__', repr(self.weak_form))
        return f'Operator({name}, {repr(self.mesh)}, {repr(list(self.inputs))}, ' \
               f'{repr(list(self.outputs))})'
