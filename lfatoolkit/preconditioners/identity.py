import numpy as np
from lfatoolkit.operators.operator import validate_frequencies
from lfatoolkit.preconditioners.base import Preconditioner


class IdentityPC(Preconditioner):
    """No-op smoother; turns a multigrid preconditioner into a pure coarse grid correction."""

    def compute_symbols(self, parameters, theta):
        validate_frequencies(theta, self.operator.dimension)
        return np.eye(self.operator.row_mode_map.shape[0])

    def __repr__(self):
        return f'IdentityPC({repr(self.operator)})'
