"""LOBPCG eigensolver with truncated eigenvalue and singular value decompositions."""