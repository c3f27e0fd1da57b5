from lfatoolkit.mesh import generate_mesh
from lfatoolkit.basis import tensor_h1_lagrange_p_prolongation_basis
from lfatoolkit.operators.gallery import gallery_operator
from lfatoolkit.preconditioners.jacobi import Jacobi
from lfatoolkit.preconditioners.multigrid import PMultigrid
from lfatoolkit.evaluation.sweep import SymbolSweep
from lfatoolkit.optimization.smoothing_parameters import Optimizer, smoothing_objective
import numpy as np
from mpi4py import MPI


def main():
    # I. Set up MPI
    comm = MPI.COMM_WORLD
    nprocs = comm.Get_size()
    mpi_rank = comm.Get_rank()
    if nprocs > 1:
        tmp = "processes"
    else:
        tmp = "process"
    if mpi_rank == 0:
        print(f"Running {nprocs} MPI {tmp}")

    # II. problem specifications
    dimension = 2
    fine_p = 4
    coarse_p = 2
    smoothing_steps = [1, 1]
    mesh = generate_mesh(dimension)
    fine_diffusion = gallery_operator("diffusion", fine_p + 1, fine_p + 1, mesh)
    coarse_diffusion = gallery_operator("diffusion", coarse_p + 1, fine_p + 1, mesh)
    ctof_basis = tensor_h1_lagrange_p_prolongation_basis(coarse_p + 1, fine_p + 1, dimension)
    jacobi = Jacobi(fine_diffusion)
    multigrid = PMultigrid(fine_diffusion, coarse_diffusion, jacobi, [ctof_basis])

    # III. Distribute the frequency sweep
    number_of_samples = 16
    sweep = SymbolSweep(dimension, number_of_samples, mpi_comm=comm, mpi_rank=mpi_rank,
                        number_of_mpi_processes=nprocs)

    # IV. optimization parameters
    generations = 20
    sigma = 0.3
    seed = 1  # all processes must draw the same samples
    optimizer = Optimizer(smoothing_objective(multigrid, smoothing_steps, sweep), 1, minimum=0.0, maximum=2.0,
                          verbose=mpi_rank == 0)

    # V. Return values of the optimization
    # parameters: best Jacobi weight found
    # logbook: statistics per generation (data structure provided by the DEAP framework)
    parameters, logbook = optimizer.optimize(generations, centroid=[1.0], sigma=sigma, seed=seed)
    rho = sweep.spectral_radius(lambda theta: multigrid.compute_symbols(parameters, smoothing_steps, theta))
    if mpi_rank == 0:
        print(f"Best Jacobi weight: {parameters[0]}", flush=True)
        print(f"Two-grid convergence factor: {rho}", flush=True)
        print(f"Convergence factor with unit weight: "
              f"{sweep.spectral_radius(lambda theta: multigrid.compute_symbols([1.0], smoothing_steps, theta))}",
              flush=True)
        print(f"Frequency samples per process: {np.ceil(number_of_samples ** dimension / nprocs)}", flush=True)


if __name__ == "__main__":
    main()
