from .loader import (
    TEST_DATA_2D,
    MatrixLoader,
    DenseMatrixLoader,
    SparseMatrixLoader,
    UserDefinedMatrixLoader,
)

__all__ = [
    "TEST_DATA_2D",
    "MatrixLoader",
    "DenseMatrixLoader",
    "SparseMatrixLoader",
    "UserDefinedMatrixLoader",
]
