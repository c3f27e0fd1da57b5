import itertools
import numpy as np
from lfatoolkit.basis import read_only
from lfatoolkit.preconditioners.base import Preconditioner, validate_parameters


class Chebyshev(Preconditioner):
    """Chebyshev polynomial smoother on the Jacobi preconditioned operator D^-1 A.

    The smoothing interval is derived from estimates of the extreme eigenvalues of D^-1 A,
    lower = s0 * min + s1 * max and upper = s2 * min + s3 * max with the eigenvalue estimate scaling
    (s0, s1, s2, s3). The estimates are sampled on a uniform grid of `number_of_samples` frequencies
    per dimension.
    """

    def __init__(self, operator, eigenvalue_estimate_scaling=(0.0, 0.1, 0.0, 1.0), number_of_samples=8,
                 minimum_frequency=np.pi / 128):
        super().__init__(operator)
        eigenvalue_estimate_scaling = tuple(float(s) for s in eigenvalue_estimate_scaling)
        if len(eigenvalue_estimate_scaling) != 4:
            raise ValueError("Eigenvalue estimate scaling requires exactly four entries")
        if number_of_samples < 1:
            raise ValueError("At least one frequency sample per dimension is required")
        self._eigenvalue_estimate_scaling = eigenvalue_estimate_scaling
        self._number_of_samples = number_of_samples
        self._minimum_frequency = minimum_frequency
        self._operator_diagonal_inverse = None
        self._eigenvalue_estimates = None

    @property
    def eigenvalue_estimate_scaling(self):
        return self._eigenvalue_estimate_scaling

    @property
    def number_of_samples(self):
        return self._number_of_samples

    @property
    def operator_diagonal_inverse(self):
        if self._operator_diagonal_inverse is None:
            self._operator_diagonal_inverse = read_only(1.0 / self.operator.diagonal)
        return self._operator_diagonal_inverse

    def compute_preconditioned_symbols(self, theta):
        return self.operator_diagonal_inverse[:, np.newaxis] * self.operator.compute_symbols(theta)

    @property
    def eigenvalue_estimates(self):
        if self._eigenvalue_estimates is None:
            samples = np.linspace(-np.pi, np.pi, self.number_of_samples, endpoint=False)
            minimum = np.inf
            maximum = -np.inf
            for theta in itertools.product(samples, repeat=self.operator.dimension):
                theta = np.array(theta)
                eigenvalues = np.real(np.linalg.eigvals(self.compute_preconditioned_symbols(theta)))
                maximum = max(maximum, eigenvalues.max())
                # the constant mode is in the kernel of the operator
                if np.linalg.norm(theta) > self._minimum_frequency:
                    minimum = min(minimum, eigenvalues.min())
            if not np.isfinite(minimum):
                minimum = 0.0
            self._eigenvalue_estimates = (float(minimum), float(maximum))
        return self._eigenvalue_estimates

    @property
    def eigenvalue_bounds(self):
        minimum, maximum = self.eigenvalue_estimates
        s0, s1, s2, s3 = self.eigenvalue_estimate_scaling
        lower = s0 * minimum + s1 * maximum
        upper = s2 * minimum + s3 * maximum
        if not upper > lower:
            raise ValueError("Chebyshev smoothing interval is empty, check the eigenvalue estimate scaling")
        return lower, upper

    def compute_symbols(self, parameters, theta):
        """Symbol matrix of a Chebyshev smoother of the given degree."""
        degree, = validate_parameters(parameters, 1, "Chebyshev smoothing")
        if int(degree) != degree or degree < 1:
            raise ValueError("Chebyshev degree must be a positive integer")
        degree = int(degree)
        lower, upper = self.eigenvalue_bounds
        center = (upper + lower) / 2
        half_width = (upper - lower) / 2
        sigma = center / half_width
        preconditioned = self.compute_preconditioned_symbols(theta)
        identity = np.eye(preconditioned.shape[0])
        previous = identity
        current = identity - preconditioned / center
        rho_previous = 1 / sigma
        for _ in range(1, degree):
            rho = 1 / (2 * sigma - rho_previous)
            following = (1 + rho * rho_previous) * current - rho * rho_previous * previous \
                - (2 * rho / half_width) * (preconditioned @ current)
            previous, current = current, following
            rho_previous = rho
        return current

    def __repr__(self):
        return f'Chebyshev({repr(self.operator)}, eigenvalue_estimate_scaling={self.eigenvalue_estimate_scaling})'
