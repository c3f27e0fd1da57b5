# Jacobi smoother example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.jacobi import Jacobi

# setup
mesh = Mesh2D(1.0, 1.0)
p = 3

# diffusion operator
diffusion = gallery_operator("diffusion", p + 1, p + 1, mesh)

# Jacobi smoother
jacobi = Jacobi(diffusion)

# compute operator symbols
A = jacobi.compute_symbols([1.0], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Minimum eigenvalue: {eigenvalues.min()}")
print(f"Maximum eigenvalue: {eigenvalues.max()}")
