[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ndlinalg"
version = "0.1.0"
description = "Dense linear algebra helpers on NumPy arrays: decompositions, least squares, norms, Krylov bases and LOBPCG eigensolvers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = [
    "linear-algebra",
    "eigenvalues",
    "least-squares",
    "qr",
    "krylov",
    "arnoldi",
    "lobpcg",
    "svd",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ndlinalg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
