# linalg/matrix.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, Type

import numpy as np
from scipy import sparse

from ..custom_types import Array, ArrayLike
from ..array_backend.utils import (
    _ensure_real_scalar,
    _ensure_vector,
    _ensure_matrix,
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


def _check_index(index: int, bound: int, axis: str) -> int:
    index = int(index)
    if not 0 <= index < bound:
        raise IndexError(f"{axis} index {index} out of range for size {bound}")
    return index


# ---- Vectors -----------------------------------------------------------------

class Vector(ABC):
    """Abstract base class for a real vector with pluggable storage.

    Concrete subclasses provide `size`, `to_dense`, element access and the
    `zeros` / `from_array` constructors. Arithmetic is implemented here on top
    of `to_dense` and returns the left operand's storage type.
    """

    @property
    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def to_dense(self) -> Array:
        """Return the entries as a 1D numpy array of shape (size,)."""
        ...

    @abstractmethod
    def __getitem__(self, index: int) -> float:
        ...

    @abstractmethod
    def __setitem__(self, index: int, value: float) -> None:
        ...

    @classmethod
    @abstractmethod
    def zeros(cls, size: int) -> Vector:
        ...

    @classmethod
    @abstractmethod
    def from_array(cls, data: ArrayLike) -> Vector:
        ...

    def __len__(self) -> int:
        return self.size

    def _check_same_size(self, other: Vector) -> None:
        if not isinstance(other, Vector):
            raise TypeError(f"Expected a Vector, got {type(other).__name__}")
        if other.size != self.size:
            raise ValueError(f"Vector sizes differ: {self.size} != {other.size}")

    def __add__(self, other: Vector) -> Vector:
        self._check_same_size(other)
        return type(self).from_array(self.to_dense() + other.to_dense())

    def __sub__(self, other: Vector) -> Vector:
        self._check_same_size(other)
        return type(self).from_array(self.to_dense() - other.to_dense())

    def __mul__(self, scalar: float) -> Vector:
        return type(self).from_array(_ensure_real_scalar(scalar) * self.to_dense())

    def __rmul__(self, scalar: float) -> Vector:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector:
        return self * -1.0

    def dot(self, other: Vector) -> float:
        self._check_same_size(other)
        return float(self.to_dense() @ other.to_dense())

    def norm(self) -> float:
        """Euclidean norm."""
        return float(np.linalg.norm(self.to_dense()))

    def allclose(self, other: Vector | ArrayLike, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        other_arr = other.to_dense() if isinstance(other, Vector) else np.asarray(other, dtype=float)
        if other_arr.shape != (self.size,):
            return False
        return bool(np.allclose(self.to_dense(), other_arr, rtol=rtol, atol=atol))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size})"


class DenseVector(Vector):
    """Vector backed by a contiguous numpy array."""

    def __init__(self, data: ArrayLike, copy: bool = True) -> None:
        self.array = _ensure_vector(data, copy=copy).astype(np.float64, copy=False)

    @classmethod
    def zeros(cls, size: int) -> DenseVector:
        return cls(np.zeros(int(size)), copy=False)

    @classmethod
    def from_array(cls, data: ArrayLike) -> DenseVector:
        return cls(data)

    @property
    def size(self) -> int:
        return int(self.array.shape[0])

    def to_dense(self) -> Array:
        return self.array

    def __getitem__(self, index: int) -> float:
        return float(self.array[_check_index(index, self.size, "vector")])

    def __setitem__(self, index: int, value: float) -> None:
        self.array[_check_index(index, self.size, "vector")] = _ensure_real_scalar(value)


class UserDefinedVector(Vector):
    """Vector stored as a plain Python list.

    Stands in for storage written by a library user: only the abstract
    methods are implemented, everything else comes from `Vector`.
    """

    def __init__(self, data: Iterable[float]) -> None:
        self._data = [float(v) for v in data]

    @classmethod
    def zeros(cls, size: int) -> UserDefinedVector:
        return cls([0.0] * int(size))

    @classmethod
    def from_array(cls, data: ArrayLike) -> UserDefinedVector:
        return cls(_ensure_vector(data).tolist())

    @property
    def size(self) -> int:
        return len(self._data)

    def to_dense(self) -> Array:
        return np.array(self._data, dtype=np.float64)

    def __getitem__(self, index: int) -> float:
        return self._data[_check_index(index, self.size, "vector")]

    def __setitem__(self, index: int, value: float) -> None:
        self._data[_check_index(index, self.size, "vector")] = _ensure_real_scalar(value)


# ---- Matrices ----------------------------------------------------------------

class Matrix(ABC):
    """Abstract base class for a real matrix with pluggable storage.

    Concrete subclasses must provide `shape`, `to_dense`, element access
    (`m[i, j]`) and the `zeros` / `from_array` constructors. Matrix provides
    convenience arithmetic (`@`, `+`, `-`, scalar `*`, transpose) computed
    through the dense form; results keep the storage type of the left
    operand. Subclasses may override any of these for speed.

    Attributes:
        vector_type: Vector class returned by matrix-vector products.
    """

    vector_type: Type[Vector] = DenseVector

    @property
    @abstractmethod
    def shape(self) -> tuple[int, int]:
        """Return (rows, cols)."""
        ...

    @abstractmethod
    def to_dense(self) -> Array:
        """Return dense array representation of the matrix."""
        ...

    @abstractmethod
    def __getitem__(self, index: tuple[int, int]) -> float:
        ...

    @abstractmethod
    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        ...

    @classmethod
    @abstractmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        ...

    @classmethod
    @abstractmethod
    def from_array(cls, data: ArrayLike) -> Matrix:
        ...

    @property
    def dtype(self) -> Any:
        return np.dtype(np.float64)

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    def _check_index(self, index: tuple[int, int]) -> tuple[int, int]:
        i, j = index
        return _check_index(i, self.rows, "row"), _check_index(j, self.cols, "column")

    def _check_same_shape(self, other: Matrix) -> None:
        if not isinstance(other, Matrix):
            raise TypeError(f"Expected a Matrix, got {type(other).__name__}")
        if other.shape != self.shape:
            raise ValueError(f"Matrix shapes differ: {self.shape} != {other.shape}")

    # ---- Algebra ----

    def transpose(self) -> Matrix:
        return type(self).from_array(self.to_dense().T)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def __matmul__(self, other: Matrix | Vector) -> Matrix | Vector:
        if isinstance(other, Vector):
            if other.size != self.cols:
                raise ValueError(f"Shapes incompatible for product: {self.shape} @ ({other.size},)")
            return self.vector_type.from_array(self.to_dense() @ other.to_dense())
        if isinstance(other, Matrix):
            if other.rows != self.cols:
                raise ValueError(f"Shapes incompatible for product: {self.shape} @ {other.shape}")
            return type(self).from_array(self.to_dense() @ other.to_dense())
        return NotImplemented

    def __add__(self, other: Matrix) -> Matrix:
        self._check_same_shape(other)
        return type(self).from_array(self.to_dense() + other.to_dense())

    def __sub__(self, other: Matrix) -> Matrix:
        self._check_same_shape(other)
        return type(self).from_array(self.to_dense() - other.to_dense())

    def __mul__(self, scalar: float) -> Matrix:
        return type(self).from_array(_ensure_real_scalar(scalar) * self.to_dense())

    def __rmul__(self, scalar: float) -> Matrix:
        return self.__mul__(scalar)

    def __neg__(self) -> Matrix:
        return self * -1.0

    def is_symmetric(self, atol: float = 0.0) -> bool:
        if self.rows != self.cols:
            return False
        A = self.to_dense()
        return bool(np.allclose(A, A.T, rtol=0.0, atol=atol))

    def allclose(self, other: Matrix | ArrayLike, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        other_arr = other.to_dense() if isinstance(other, Matrix) else np.asarray(other, dtype=float)
        if other_arr.shape != self.shape:
            return False
        return bool(np.allclose(self.to_dense(), other_arr, rtol=rtol, atol=atol))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(shape={self.shape})"


class DenseMatrix(Matrix):
    """Dense matrix backed by a numpy array."""

    def __init__(self, arr: ArrayLike, copy: bool = True) -> None:
        self.array = _ensure_matrix(arr, copy=copy).astype(np.float64, copy=False)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> DenseMatrix:
        return cls(np.zeros((int(rows), int(cols))), copy=False)

    @classmethod
    def from_array(cls, data: ArrayLike) -> DenseMatrix:
        return cls(data)

    @property
    def shape(self) -> tuple[int, int]:
        return self.array.shape

    def to_dense(self) -> Array:
        return self.array

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.array[self._check_index(index)])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self.array[self._check_index(index)] = _ensure_real_scalar(value)


class SparseMatrix(Matrix):
    """Sparse matrix backed by a scipy.sparse LIL array.

    LIL storage keeps element assignment cheap; products are computed in CSR
    form without densifying.
    """

    def __init__(self, data: ArrayLike | sparse.sparray | sparse.spmatrix) -> None:
        if sparse.issparse(data):
            self._data = sparse.lil_array(data, dtype=np.float64)
        else:
            self._data = sparse.lil_array(_ensure_matrix(data), dtype=np.float64)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> SparseMatrix:
        return cls(sparse.lil_array((int(rows), int(cols)), dtype=np.float64))

    @classmethod
    def from_array(cls, data: ArrayLike) -> SparseMatrix:
        return cls(data)

    @property
    def shape(self) -> tuple[int, int]:
        return tuple(int(n) for n in self._data.shape)

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return int(self._data.nnz)

    def to_sparse(self) -> sparse.csr_array:
        return self._data.tocsr()

    def to_dense(self) -> Array:
        return self._data.toarray()

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[self._check_index(index)])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self._data[self._check_index(index)] = _ensure_real_scalar(value)

    def transpose(self) -> SparseMatrix:
        return SparseMatrix(self.to_sparse().T)

    def __matmul__(self, other: Matrix | Vector) -> Matrix | Vector:
        if isinstance(other, SparseMatrix):
            if other.rows != self.cols:
                raise ValueError(f"Shapes incompatible for product: {self.shape} @ {other.shape}")
            return SparseMatrix(self.to_sparse() @ other.to_sparse())
        if isinstance(other, Vector):
            if other.size != self.cols:
                raise ValueError(f"Shapes incompatible for product: {self.shape} @ ({other.size},)")
            return self.vector_type.from_array(self.to_sparse() @ other.to_dense())
        return super().__matmul__(other)


class UserDefinedMatrix(Matrix):
    """Matrix stored as nested Python lists (row major).

    Stands in for storage written by a library user: only the abstract
    methods are implemented, everything else comes from `Matrix`.
    """

    vector_type = UserDefinedVector

    def __init__(self, rows: Iterable[Iterable[float]]) -> None:
        self._data = [[float(v) for v in row] for row in rows]
        widths = {len(row) for row in self._data}
        if len(widths) > 1:
            raise ValueError(f"UserDefinedMatrix rows have different lengths: {sorted(widths)}")

    @classmethod
    def zeros(cls, rows: int, cols: int) -> UserDefinedMatrix:
        return cls([[0.0] * int(cols) for _ in range(int(rows))])

    @classmethod
    def from_array(cls, data: ArrayLike) -> UserDefinedMatrix:
        return cls(_ensure_matrix(data).tolist())

    @property
    def shape(self) -> tuple[int, int]:
        n_rows = len(self._data)
        return (n_rows, len(self._data[0]) if n_rows else 0)

    def to_dense(self) -> Array:
        return np.array(self._data, dtype=np.float64).reshape(self.shape)

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = self._check_index(index)
        return self._data[i][j]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        i, j = self._check_index(index)
        self._data[i][j] = _ensure_real_scalar(value)
