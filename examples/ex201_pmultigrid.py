# p-multigrid example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.basis import tensor_h1_lagrange_p_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.jacobi import Jacobi
from lfatoolkit.preconditioners.multigrid import PMultigrid

# setup
mesh = Mesh2D(1.0, 1.0)
fine_p = 4
coarse_p = 2
dimension = 2
ctof_basis = tensor_h1_lagrange_p_prolongation_basis(coarse_p + 1, fine_p + 1, dimension)

# operators
fine_diffusion = gallery_operator("diffusion", fine_p + 1, fine_p + 1, mesh)
coarse_diffusion = gallery_operator("diffusion", coarse_p + 1, fine_p + 1, mesh)

# Jacobi smoother
jacobi = Jacobi(fine_diffusion)

# p-multigrid preconditioner
multigrid = PMultigrid(fine_diffusion, coarse_diffusion, jacobi, [ctof_basis])

# compute operator symbols
A = multigrid.compute_symbols([1.0], [1, 1], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Maximum eigenvalue: {eigenvalues.max()}")
