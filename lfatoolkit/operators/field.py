import enum


class EvaluationMode(enum.Enum):
    interpolation = 'interpolation'
    gradient = 'gradient'
    quadrature_weights = 'quadrature_weights'


class OperatorField:
    """Input or output of a finite element operator: a basis and the ways it is evaluated.

    Quadrature weights must be listed in a separate operator field.
    """

    def __init__(self, basis, evaluation_modes, name=None):
        evaluation_modes = tuple(evaluation_modes)
        if len(evaluation_modes) == 0:
            raise ValueError("An operator field requires at least one evaluation mode")
        if len(evaluation_modes) > 1 and EvaluationMode.quadrature_weights in evaluation_modes:
            raise ValueError("Quadrature weights must be a separate operator field")
        self._basis = basis
        self._evaluation_modes = evaluation_modes
        self._name = name

    @property
    def basis(self):
        return self._basis

    @property
    def evaluation_modes(self):
        return self._evaluation_modes

    @property
    def name(self):
        return self._name

    @property
    def is_quadrature_weights(self):
        return self.evaluation_modes[0] == EvaluationMode.quadrature_weights

    @property
    def number_of_components(self):
        """Number of values per quadrature point this field passes to or receives from the weak form."""
        number_of_components = 0
        for mode in self.evaluation_modes:
            if mode == EvaluationMode.gradient:
                number_of_components += self.basis.dimension
            else:
                number_of_components += 1
        return number_of_components

    def __repr__(self):
        modes = ', '.join(mode.value for mode in self.evaluation_modes)
        if self.name is None:
            return f'OperatorField({repr(self.basis)}, [{modes}])'
        return f'OperatorField({repr(self.basis)}, [{modes}], {repr(self.name)})'
