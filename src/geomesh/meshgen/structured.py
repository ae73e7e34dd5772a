from typing import List

import numpy as np

from ..trimesh import TriMesh

DIAGONALS = ("forward", "backward", "alternating")


class LinearSpacing:
    """
    `n` equally spaced samples between `start` and `end`.

    With `endpoint=False` the right end is excluded and the step becomes
    `(end - start) / n`, so `LinearSpacing(0, n, n, endpoint=False)` yields
    the integers 0, 1, ..., n - 1.
    """

    def __init__(self, start: float, end: float, n: int, endpoint: bool = True):
        if n < 1:
            raise ValueError(f"LinearSpacing needs at least one sample, got n={n}")
        self.start = float(start)
        self.end = float(end)
        self.n = int(n)
        self.endpoint = endpoint
        self.values = np.linspace(self.start, self.end, self.n, endpoint=endpoint)

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return (
            f"LinearSpacing(start={self.start}, end={self.end}, n={self.n}, "
            f"endpoint={self.endpoint})"
        )


class StructuredGrid:
    """
    A regular lattice built from one spacing per axis.

    Points are stored row by row: point (i, j) has index `j * nx + i`, where
    `i` runs along x and `j` along y.
    """

    def __init__(self, x: LinearSpacing, y: LinearSpacing):
        self.x = x
        self.y = y

    @property
    def nx(self) -> int:
        return len(self.x)

    @property
    def ny(self) -> int:
        return len(self.y)

    def index(self, i: int, j: int) -> int:
        return j * self.nx + i

    def points(self) -> np.ndarray:
        """Returns the lattice coordinates as an array of shape (nx * ny, 2)."""
        xx, yy = np.meshgrid(self.x.values, self.y.values)
        return np.column_stack([xx.ravel(), yy.ravel()])


class StructuredMeshGenerator:
    """
    Triangulates a StructuredGrid into a TriMesh.

    Every lattice quad is split into two triangles along one of its diagonals.
    The `diagonal` option selects which one:

    - "forward": from (i, j) to (i + 1, j + 1) in every quad,
    - "backward": from (i + 1, j) to (i, j + 1) in every quad,
    - "alternating": forward and backward in a checkerboard pattern.

    Cells are numbered row by row, the lower triangle of each quad first. All
    triangles are counter-clockwise.

    Attributes:
        diagonal (str): The diagonal policy.
    """

    def __init__(self, diagonal: str = "forward"):
        if diagonal not in DIAGONALS:
            raise ValueError(f"diagonal must be one of {DIAGONALS}, got '{diagonal}'")
        self.diagonal = diagonal

    def generate(self, grid: StructuredGrid) -> TriMesh:
        """
        Generates the triangle mesh of the grid.

        Args:
            grid (StructuredGrid): The lattice to triangulate.

        Returns:
            TriMesh: A single-partition mesh with `nx * ny` nodes and
            `2 * (nx - 1) * (ny - 1)` cells.
        """
        if grid.nx < 2 or grid.ny < 2:
            raise ValueError(
                f"A grid needs at least 2 points per axis to be triangulated, "
                f"got nx={grid.nx}, ny={grid.ny}"
            )

        cells: List[List[int]] = []
        for j in range(grid.ny - 1):
            for i in range(grid.nx - 1):
                cells.extend(self._split_quad(grid, i, j))

        return TriMesh.from_arrays(grid.points(), cells)

    def _split_quad(self, grid: StructuredGrid, i: int, j: int) -> List[List[int]]:
        """Returns the two triangles of lattice quad (i, j)."""
        n00 = grid.index(i, j)
        n10 = grid.index(i + 1, j)
        n01 = grid.index(i, j + 1)
        n11 = grid.index(i + 1, j + 1)

        forward = self.diagonal == "forward" or (
            self.diagonal == "alternating" and (i + j) % 2 == 0
        )
        if forward:
            return [[n00, n10, n11], [n00, n11, n01]]
        return [[n00, n10, n01], [n10, n11, n01]]
