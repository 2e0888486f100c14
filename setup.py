import setuptools
from setuptools import setup, find_packages

setup(
    name="lcfinder",
    version="0.1",
    description="Pauli algebra and local Clifford equivalence of stabilizer and graph states",
    packages=["lcfinder"],
    package_dir={"lcfinder": "src"},
    install_requires=[
        "numpy",
        "numba",
        "galois",
        "joblib",
        "sympy",
        "z3-solver",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
