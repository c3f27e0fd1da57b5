from functools import reduce
import operator


class Mesh:
    def __init__(self, lengths):
        lengths = tuple(float(length) for length in lengths)
        if len(lengths) < 1:
            raise ValueError("A mesh must have at least one dimension")
        if any(length <= 0.0 for length in lengths):
            raise ValueError("Element lengths must be positive")
        self._lengths = lengths

    @property
    def lengths(self):
        return self._lengths

    @property
    def dimension(self):
        return len(self.lengths)

    @property
    def volume(self):
        return reduce(operator.mul, self.lengths)

    def __eq__(self, other):
        if isinstance(other, Mesh):
            return self.lengths == other.lengths
        return False

    def __hash__(self):
        return hash(self.lengths)

    def __repr__(self):
        return f'Mesh({repr(self.lengths)})'


class Mesh1D(Mesh):
    def __init__(self, dx):
        super().__init__((dx,))

    @property
    def dx(self):
        return self.lengths[0]

    def __repr__(self):
        return f'Mesh1D({repr(self.dx)})'


class Mesh2D(Mesh):
    def __init__(self, dx, dy):
        super().__init__((dx, dy))

    @property
    def dx(self):
        return self.lengths[0]

    @property
    def dy(self):
        return self.lengths[1]

    def __repr__(self):
        return f'Mesh2D({repr(self.dx)}, {repr(self.dy)})'


class Mesh3D(Mesh):
    def __init__(self, dx, dy, dz):
        super().__init__((dx, dy, dz))

    @property
    def dx(self):
        return self.lengths[0]

    @property
    def dy(self):
        return self.lengths[1]

    @property
    def dz(self):
        return self.lengths[2]

    def __repr__(self):
        return f'Mesh3D({repr(self.dx)}, {repr(self.dy)}, {repr(self.dz)})'


def generate_mesh(dimension, length=1.0):
    if dimension == 1:
        return Mesh1D(length)
    elif dimension == 2:
        return Mesh2D(length, length)
    elif dimension == 3:
        return Mesh3D(length, length, length)
    else:
        return Mesh((length,) * dimension)
