import abc
from lfatoolkit.basis import tensor_h1_lagrange_basis, tensor_h1_lagrange_macro_basis
from lfatoolkit.operators.field import EvaluationMode, OperatorField
from lfatoolkit.operators.operator import Operator


class OperatorGenerator(abc.ABC):

    @property
    @abc.abstractmethod
    def evaluation_mode(self):
        pass

    @staticmethod
    @abc.abstractmethod
    def weak_form(*args):
        pass

    def generate_operator(self, basis, mesh):
        inputs = [
            OperatorField(basis, [self.evaluation_mode]),
            OperatorField(basis, [EvaluationMode.quadrature_weights]),
        ]
        outputs = [OperatorField(basis, [self.evaluation_mode])]
        return Operator(self.weak_form, mesh, inputs, outputs)


class Mass(OperatorGenerator):

    @property
    def evaluation_mode(self):
        return EvaluationMode.interpolation

    @staticmethod
    def weak_form(u, w):
        v = u * w[0]
        return [v]


class Diffusion(OperatorGenerator):

    @property
    def evaluation_mode(self):
        return EvaluationMode.gradient

    @staticmethod
    def weak_form(du, w):
        dv = du * w[0]
        return [dv]


generators = {
    'mass': Mass(),
    'diffusion': Diffusion(),
}


def get_generator(name) -> OperatorGenerator:
    if name not in generators:
        raise ValueError(f"Gallery operator {repr(name)} not found, available operators: "
                         f"{', '.join(sorted(generators))}")
    return generators[name]


def gallery_operator(name, number_of_nodes_1d, number_of_quadrature_points_1d, mesh) -> Operator:
    generator = get_generator(name)
    basis = tensor_h1_lagrange_basis(number_of_nodes_1d, number_of_quadrature_points_1d, mesh.dimension)
    return generator.generate_operator(basis, mesh)


def gallery_macro_element_operator(name, number_of_nodes_1d, number_of_quadrature_points_1d,
                                   number_of_elements_1d, mesh) -> Operator:
    generator = get_generator(name)
    basis = tensor_h1_lagrange_macro_basis(number_of_nodes_1d, number_of_quadrature_points_1d, mesh.dimension,
                                           number_of_elements_1d)
    return generator.generate_operator(basis, mesh)
