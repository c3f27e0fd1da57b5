from deap import creator, tools, algorithms, cma
import deap.base
import numpy
from math import log


def restrict_parameters(parameters, minimum, maximum):
    for i, p in enumerate(parameters):
        if p < minimum:
            parameters[i] = minimum
        elif p > maximum:
            parameters[i] = maximum


def smoothing_objective(multigrid, smoothing_steps, sweep):
    """Spectral radius of the multigrid error propagation as a function of the smoother parameters."""
    def objective(parameters):
        return sweep.spectral_radius(lambda theta: multigrid.compute_symbols(parameters, smoothing_steps, theta))
    return objective


def smoother_objective(smoother, sweep, high_frequencies_only=True):
    """Smoothing factor (or spectral radius) of a smoother as a function of its parameters."""
    def objective(parameters):
        def symbol_function(theta):
            return smoother.compute_symbols(parameters, theta)
        if high_frequencies_only:
            return sweep.smoothing_factor(symbol_function)
        return sweep.spectral_radius(symbol_function)
    return objective


class Optimizer:
    """CMA-ES search for smoother parameters minimizing an objective such as a spectral radius."""

    def __init__(self, objective, number_of_parameters, minimum=0.0, maximum=2.0, infinity=1e100, verbose=False):
        if number_of_parameters < 1:
            raise ValueError("At least one parameter must be optimized")
        if not minimum < maximum:
            raise ValueError("Parameter minimum must be smaller than the maximum")
        if not hasattr(creator, "FitnessMin"):
            creator.create("FitnessMin", deap.base.Fitness, weights=(-1.0,))
        if not hasattr(creator, "SmoothingParameters"):
            creator.create("SmoothingParameters", list, fitness=creator.FitnessMin)
        self._objective = objective
        self._number_of_parameters = number_of_parameters
        self._minimum = minimum
        self._maximum = maximum
        self._infinity = infinity
        self._verbose = verbose
        self._toolbox = deap.base.Toolbox()

    @property
    def number_of_parameters(self):
        return self._number_of_parameters

    @property
    def minimum(self):
        return self._minimum

    @property
    def maximum(self):
        return self._maximum

    @property
    def infinity(self):
        return self._infinity

    def evaluate(self, parameters):
        restrict_parameters(parameters, self.minimum, self.maximum)
        value = self._objective(list(parameters))
        if not numpy.isfinite(value):
            return self.infinity,
        return value,

    def optimize(self, generations, centroid=None, sigma=0.3, lambda_=None, seed=None):
        if seed is not None:
            numpy.random.seed(seed)
        if centroid is None:
            centroid = [1.0] * self.number_of_parameters
        if len(centroid) != self.number_of_parameters:
            raise ValueError("Centroid must have one entry per parameter")
        if lambda_ is None:
            lambda_ = int(round((4 + 3 * log(self.number_of_parameters)) * 4))
        self._toolbox.register("evaluate", self.evaluate)
        if self._verbose:
            print("Running CMA-ES", flush=True)
        strategy = cma.Strategy(centroid=list(centroid), sigma=sigma, lambda_=lambda_)
        stats = tools.Statistics(lambda ind: ind.fitness.values)
        stats.register("avg", numpy.mean)
        stats.register("std", numpy.std)
        stats.register("min", numpy.min)
        stats.register("max", numpy.max)
        self._toolbox.register("generate", strategy.generate, creator.SmoothingParameters)
        self._toolbox.register("update", strategy.update)
        hof = tools.HallOfFame(1)
        _, logbook = algorithms.eaGenerateUpdate(self._toolbox, ngen=generations, halloffame=hof, stats=stats,
                                                 verbose=self._verbose)
        return list(hof[0]), logbook
