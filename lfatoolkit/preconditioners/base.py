import abc
from lfatoolkit.operators.operator import Operator


class Preconditioner(abc.ABC):
    """Preconditioner bound to a single finite element operator.

    Any preconditioner used as a multigrid smoother must be bound to the fine grid operator and
    provide the symbol matrix of one application for given parameters and frequencies.
    """

    def __init__(self, operator):
        if not isinstance(operator, Operator):
            raise TypeError("A preconditioner must be bound to a finite element operator")
        self._operator = operator

    @property
    def operator(self):
        return self._operator

    @abc.abstractmethod
    def compute_symbols(self, parameters, theta):
        pass


def validate_parameters(parameters, number_of_parameters, name):
    parameters = list(parameters)
    if len(parameters) != number_of_parameters:
        raise ValueError(f"{name} requires exactly {number_of_parameters} parameter(s), got {len(parameters)}")
    return parameters
