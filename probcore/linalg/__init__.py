from .matrix import (
    Matrix,
    DenseMatrix,
    SparseMatrix,
    UserDefinedMatrix,
    Vector,
    DenseVector,
    UserDefinedVector,
)

__all__ = [
    "Matrix",
    "DenseMatrix",
    "SparseMatrix",
    "UserDefinedMatrix",
    "Vector",
    "DenseVector",
    "UserDefinedVector",
]
