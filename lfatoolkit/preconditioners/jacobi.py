import numpy as np
from lfatoolkit.basis import read_only
from lfatoolkit.preconditioners.base import Preconditioner, validate_parameters


class Jacobi(Preconditioner):
    def __init__(self, operator):
        super().__init__(operator)
        self._operator_diagonal_inverse = None

    @property
    def operator_diagonal_inverse(self):
        if self._operator_diagonal_inverse is None:
            self._operator_diagonal_inverse = read_only(1.0 / self.operator.diagonal)
        return self._operator_diagonal_inverse

    def compute_symbols(self, parameters, theta):
        """Symbol matrix of one weighted Jacobi sweep, I - omega D^-1 A."""
        omega, = validate_parameters(parameters, 1, "Jacobi smoothing")
        symbols = self.operator.compute_symbols(theta)
        identity = np.eye(symbols.shape[0])
        return identity - omega * (self.operator_diagonal_inverse[:, np.newaxis] * symbols)

    def __repr__(self):
        return f'Jacobi({repr(self.operator)})'
