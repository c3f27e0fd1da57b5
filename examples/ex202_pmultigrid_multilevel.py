# p-multigrid multilevel example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.basis import tensor_h1_lagrange_p_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.chebyshev import Chebyshev
from lfatoolkit.preconditioners.multigrid import PMultigrid

# setup
mesh = Mesh2D(1.0, 1.0)
fine_p = 4
mid_p = 2
coarse_p = 1
dimension = 2
ctom_basis = tensor_h1_lagrange_p_prolongation_basis(coarse_p + 1, mid_p + 1, dimension)
mtof_basis = tensor_h1_lagrange_p_prolongation_basis(mid_p + 1, fine_p + 1, dimension)

# operators
fine_diffusion = gallery_operator("diffusion", fine_p + 1, fine_p + 1, mesh)
mid_diffusion = gallery_operator("diffusion", mid_p + 1, fine_p + 1, mesh)
coarse_diffusion = gallery_operator("diffusion", coarse_p + 1, fine_p + 1, mesh)

# Chebyshev smoothers
fine_chebyshev = Chebyshev(fine_diffusion)
mid_chebyshev = Chebyshev(mid_diffusion)

# p-multigrid preconditioner
mid_multigrid = PMultigrid(mid_diffusion, coarse_diffusion, mid_chebyshev, [ctom_basis])
multigrid = PMultigrid(fine_diffusion, mid_multigrid, fine_chebyshev, [mtof_basis])

# compute operator symbols
A = multigrid.compute_symbols([3], [1, 1], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Maximum eigenvalue: {eigenvalues.max()}")
