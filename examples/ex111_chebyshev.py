# Chebyshev smoother example

import numpy as np
from lfatoolkit.mesh import Mesh2D
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.chebyshev import Chebyshev

# setup
mesh = Mesh2D(1.0, 1.0)
p = 3

# diffusion operator
diffusion = gallery_operator("diffusion", p + 1, p + 1, mesh)

# Chebyshev smoother
chebyshev = Chebyshev(diffusion)

# compute operator symbols
A = chebyshev.compute_symbols([3], [np.pi, np.pi])
eigenvalues = np.real(np.linalg.eigvals(A))
print(f"Eigenvalue estimates of D^-1 A: {chebyshev.eigenvalue_estimates}")
print(f"Minimum eigenvalue: {eigenvalues.min()}")
print(f"Maximum eigenvalue: {eigenvalues.max()}")
