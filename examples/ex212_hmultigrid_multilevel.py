# h-multigrid multilevel example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.basis import tensor_h1_lagrange_h_prolongation_basis, tensor_h1_lagrange_h_prolongation_macro_basis
from lfatoolkit.operators.gallery import gallery_operator, gallery_macro_element_operator
from lfatoolkit.preconditioners.chebyshev import Chebyshev
from lfatoolkit.preconditioners.multigrid import HMultigrid

# setup
mesh = Mesh2D(1.0, 1.0)
p = 2
number_of_fine_elements_1d = 4
number_of_mid_elements_1d = 2
dimension = 2
ctom_basis = tensor_h1_lagrange_h_prolongation_basis(p, dimension, number_of_mid_elements_1d)
mtof_basis = tensor_h1_lagrange_h_prolongation_macro_basis(p, dimension, number_of_mid_elements_1d,
                                                           number_of_fine_elements_1d)

# operators
fine_diffusion = gallery_macro_element_operator("diffusion", p, p + 1, number_of_fine_elements_1d, mesh)
mid_diffusion = gallery_macro_element_operator("diffusion", p, p + 1, number_of_mid_elements_1d, mesh)
coarse_diffusion = gallery_operator("diffusion", p, p + 1, mesh)

# Chebyshev smoothers
fine_chebyshev = Chebyshev(fine_diffusion)
mid_chebyshev = Chebyshev(mid_diffusion)

# h-multigrid preconditioner
mid_multigrid = HMultigrid(mid_diffusion, coarse_diffusion, mid_chebyshev, [ctom_basis])
multigrid = HMultigrid(fine_diffusion, mid_multigrid, fine_chebyshev, [mtof_basis])

# compute operator symbols
A = multigrid.compute_symbols([3], [1, 1], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Maximum eigenvalue: {eigenvalues.max()}")
