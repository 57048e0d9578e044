"""A small dense row-major matrix and plain-list vector helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from numbers import Real


def _fmt(value: float) -> str:
    return f"{value:g}"


class DenseMatrix:
    """A row-major matrix of floats.

    ``data`` may be omitted (zeros), a number (every cell filled with it),
    or an iterable of at most ``rows * cols`` values filling cells in order.
    """

    def __init__(self, rows: int, cols: int, data: Iterable[float] | float | None = None) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("matrix dimensions must be non-negative")
        self._rows = rows
        self._cols = cols
        size = rows * cols
        if data is None:
            self._data = [0.0] * size
        elif isinstance(data, Real):
            self._data = [float(data)] * size
        else:
            values = list(data)
            if len(values) > size:
                raise ValueError(f"{len(values)} values do not fit a {rows}x{cols} matrix")
            self._data = values + [0.0] * (size - len(values))

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def _offset(self, index: tuple[int, int]) -> int:
        i, j = index
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise IndexError(f"index {index} out of range for {self._rows}x{self._cols}")
        return i * self._cols + j

    def __getitem__(self, index: tuple[int, int]) -> float:
        return self._data[self._offset(index)]

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self._data[self._offset(index)] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return (self._rows, self._cols, self._data) == (other._rows, other._cols, other._data)

    def __isub__(self, other: DenseMatrix) -> DenseMatrix:
        if (self._rows, self._cols) != (other._rows, other._cols):
            raise ValueError("matrix shapes differ")
        self._data = [a - b for a, b in zip(self._data, other._data)]
        return self

    def _row(self, i: int) -> list[float]:
        return self._data[i * self._cols:(i + 1) * self._cols]

    def __mul__(self, other):
        if isinstance(other, DenseMatrix):
            if self._cols != other._rows:
                raise ValueError(
                    f"cannot multiply {self._rows}x{self._cols} by {other._rows}x{other._cols}")
            columns = [other.column(j) for j in range(other._cols)]
            product = [dot(self._row(i), col) for i in range(self._rows) for col in columns]
            return DenseMatrix(self._rows, other._cols, product)
        if isinstance(other, Real):
            return DenseMatrix(self._rows, self._cols, [v * other for v in self._data])
        if isinstance(other, Sequence):
            if len(other) != self._cols:
                raise ValueError(f"vector of length {len(other)} does not match {self._cols} columns")
            return [dot(self._row(i), other) for i in range(self._rows)]
        return NotImplemented

    def __rmul__(self, scalar: float) -> DenseMatrix:
        if not isinstance(scalar, Real):
            return NotImplemented
        return DenseMatrix(self._rows, self._cols, [v * scalar for v in self._data])

    def __str__(self) -> str:
        return "".join(
            "".join(f"{_fmt(v)} " for v in self._row(i)) + "\n" for i in range(self._rows))

    def __repr__(self) -> str:
        return f"DenseMatrix({self._rows}, {self._cols}, {self._data!r})"

    def inverse(self) -> DenseMatrix:
        """Invert by Gauss-Jordan elimination without pivoting.

        A zero on the diagonal during elimination raises ZeroDivisionError.
        """
        if self._rows != self._cols:
            raise ValueError("only square matrices can be inverted")
        n = self._cols
        work = [self._row(i) for i in range(n)]
        result = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]

        def eliminate(target: int, source: int, factor: float) -> None:
            work[target] = [a - b * factor for a, b in zip(work[target], work[source])]
            result[target] = [a - b * factor for a, b in zip(result[target], result[source])]

        for k in range(n):
            pivot = work[k][k]
            work[k] = [v / pivot for v in work[k]]
            result[k] = [v / pivot for v in result[k]]
            for i in range(k + 1, n):
                eliminate(i, k, work[i][k])
        for k in range(n - 1, 0, -1):
            for i in range(k - 1, -1, -1):
                eliminate(i, k, work[i][k])

        return DenseMatrix(n, n, [v for row in result for v in row])

    def column(self, index: int) -> list[float]:
        if not 0 <= index < self._cols:
            raise IndexError(f"column {index} out of range")
        return self._data[index::self._cols]

    def swap(self, first: int, second: int) -> None:
        """Swap two rows given by 1-based numbers."""
        if first == second:
            raise ValueError("cannot swap a row with itself")
        if not (1 <= first <= self._rows and 1 <= second <= self._rows):
            raise IndexError(f"rows {first} and {second} must be within 1..{self._rows}")
        a = slice((first - 1) * self._cols, first * self._cols)
        b = slice((second - 1) * self._cols, second * self._cols)
        self._data[a], self._data[b] = self._data[b], self._data[a]

    def transpose(self) -> DenseMatrix:
        return DenseMatrix(
            self._cols, self._rows, [v for j in range(self._cols) for v in self.column(j)])

    def delete_last_row(self) -> None:
        if self._rows == 0:
            raise IndexError("matrix has no rows")
        del self._data[len(self._data) - self._cols:]
        self._rows -= 1


def scale(k: float, vector: Sequence[float]) -> list[float]:
    """Multiply each element of ``vector`` by ``k``."""
    return [v * k for v in vector]


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Scalar product of two equally long vectors."""
    return sum((x * y for x, y in zip(a, b, strict=True)), 0.0)


def vsub(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Element-wise difference of two equally long vectors."""
    return [x - y for x, y in zip(a, b, strict=True)]


def vadd(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Element-wise sum of two equally long vectors."""
    return vsub(a, scale(-1.0, b))


def format_vector(vector: Iterable[float]) -> str:
    """Space-separated values followed by a newline."""
    return "".join(f"{_fmt(v)} " for v in vector) + "\n"