import pytest
from lfatoolkit.mesh import generate_mesh


@pytest.fixture(params=[1, 2, 3])
def dimension(request):
    return request.param


@pytest.fixture
def mesh(dimension):
    return generate_mesh(dimension)
