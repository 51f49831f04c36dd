"""Linear algebra on NumPy arrays: decompositions, least squares, norms, Krylov bases and LOBPCG."""

__version__ = "0.1.0"