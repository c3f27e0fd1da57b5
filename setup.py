from setuptools import setup, find_namespace_packages

setup(name='lfatoolkit',
      version='1.0',
      description='Local Fourier Analysis of High-Order Finite Element Operators and Preconditioners',
      packages=find_namespace_packages(include=['lfatoolkit', 'lfatoolkit.*']),
      install_requires=[
          'numpy', 'scipy', 'deap'
      ],
      extras_require={
          'mpi': ['mpi4py'],
          'test': ['pytest'],
      },
     )
