import itertools
import numpy as np


def flatten(lst: list):
    return [item for sublist in lst for item in sublist]


def frequency_samples(dimension, number_of_samples, theta_min=-np.pi / 2, theta_max=3 * np.pi / 2):
    """Tensor grid of Fourier mode frequencies theta_min + (theta_max - theta_min) * i / n, i = 1, ..., n."""
    values = [theta_min + (theta_max - theta_min) * i / number_of_samples for i in range(1, number_of_samples + 1)]
    for theta in itertools.product(values, repeat=dimension):
        yield np.array(theta)


class SymbolSweep:
    """Evaluates symbol matrices over a grid of frequencies and reduces their eigenvalues.

    Frequencies are distributed round-robin over the processes of `mpi_comm`; without a communicator the
    sweep runs serially. Frequencies closer than `minimum_frequency` to zero (modulo 2 pi) are skipped,
    high frequencies are those with at least one component above `high_frequency_threshold`.
    """

    def __init__(self, dimension, number_of_samples, theta_min=-np.pi / 2, theta_max=3 * np.pi / 2,
                 minimum_frequency=np.pi / 128, high_frequency_threshold=np.pi / 2,
                 mpi_comm=None, mpi_rank=0, number_of_mpi_processes=1, verbose=False):
        if number_of_samples < 1:
            raise ValueError("At least one frequency sample per dimension is required")
        self._dimension = dimension
        self._number_of_samples = number_of_samples
        self._theta_min = theta_min
        self._theta_max = theta_max
        self._minimum_frequency = minimum_frequency
        self._high_frequency_threshold = high_frequency_threshold
        self._mpi_comm = mpi_comm
        self._mpi_rank = mpi_rank
        self._number_of_mpi_processes = number_of_mpi_processes
        self._verbose = verbose

    @classmethod
    def distributed(cls, dimension, number_of_samples, **kwargs):
        """Sweep distributed over all processes of MPI.COMM_WORLD."""
        from mpi4py import MPI
        comm = MPI.COMM_WORLD
        return cls(dimension, number_of_samples, mpi_comm=comm, mpi_rank=comm.Get_rank(),
                   number_of_mpi_processes=comm.Get_size(), **kwargs)

    @property
    def dimension(self):
        return self._dimension

    @property
    def number_of_samples(self):
        return self._number_of_samples

    @property
    def mpi_comm(self):
        return self._mpi_comm

    @property
    def mpi_rank(self):
        return self._mpi_rank

    @property
    def number_of_mpi_processes(self):
        return self._number_of_mpi_processes

    def is_root(self):
        return self.mpi_rank == 0

    def allgather(self, data):
        if self.mpi_comm is None:
            return data
        else:
            return flatten(self.mpi_comm.allgather(data))

    def is_resolved(self, theta):
        reduced = np.mod(np.asarray(theta) + np.pi, 2 * np.pi) - np.pi
        return np.linalg.norm(reduced) > self._minimum_frequency

    def is_high_frequency(self, theta):
        return bool(np.any(np.asarray(theta) > self._high_frequency_threshold))

    def local_samples(self):
        samples = frequency_samples(self.dimension, self.number_of_samples, self._theta_min, self._theta_max)
        for i, theta in enumerate(samples):
            if i % self.number_of_mpi_processes == self.mpi_rank:
                yield theta

    def maximum_eigenvalue(self, symbol_function, high_frequencies_only=False):
        """Largest eigenvalue magnitude of symbol_function(theta) over the sweep and the frequency attaining it."""
        local_results = []
        for theta in self.local_samples():
            if not self.is_resolved(theta):
                continue
            if high_frequencies_only and not self.is_high_frequency(theta):
                continue
            eigenvalues = np.abs(np.linalg.eigvals(symbol_function(theta)))
            local_results.append((float(eigenvalues.max()), tuple(float(t) for t in theta)))
        results = self.allgather(local_results)
        if len(results) == 0:
            raise ValueError("No frequencies sampled, increase the number of samples")
        maximum, theta = max(results, key=lambda result: result[0])
        if self._verbose and self.is_root():
            print(f"Maximum eigenvalue {maximum} at theta / pi = {np.array(theta) / np.pi}", flush=True)
        return maximum, np.array(theta)

    def spectral_radius(self, symbol_function):
        maximum, _ = self.maximum_eigenvalue(symbol_function)
        return maximum

    def smoothing_factor(self, symbol_function):
        maximum, _ = self.maximum_eigenvalue(symbol_function, high_frequencies_only=True)
        return maximum
