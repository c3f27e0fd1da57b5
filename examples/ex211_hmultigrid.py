# h-multigrid example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.basis import tensor_h1_lagrange_h_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator, gallery_macro_element_operator
from lfatoolkit.preconditioners.chebyshev import Chebyshev
from lfatoolkit.preconditioners.multigrid import HMultigrid

# setup
mesh = Mesh2D(1.0, 1.0)
p = 1
number_of_fine_elements_1d = 2
dimension = 2
ctof_basis = tensor_h1_lagrange_h_prolongation_basis(p + 1, dimension, number_of_fine_elements_1d)

# operators
fine_diffusion = gallery_macro_element_operator("diffusion", p + 1, p + 2, number_of_fine_elements_1d, mesh)
coarse_diffusion = gallery_operator("diffusion", p + 1, p + 2, mesh)

# Chebyshev smoother
chebyshev = Chebyshev(fine_diffusion)

# h-multigrid preconditioner
multigrid = HMultigrid(fine_diffusion, coarse_diffusion, chebyshev, [ctof_basis])

# compute operator symbols
A = multigrid.compute_symbols([3], [1, 1], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Maximum eigenvalue: {eigenvalues.max()}")
