import numpy as np
from dataclasses import dataclass, field
from typing import Tuple, Optional


class Node:
    def __init__(self, id, x, y=None, tag=None):
        self.id = id
        self.x = x
        self.y = y
        self.tag = tag

    @property
    def coords(self) -> np.ndarray:
        if self.y is None:
            return np.array([self.x], dtype=float)
        return np.array([self.x, self.y], dtype=float)

    def __repr__(self):
        if self.y is None:
            return f"Node {self.id}({self.x:.3f}, tag='{self.tag}')"
        return f"Node {self.id}({self.x:.3f}, {self.y:.3f}, tag='{self.tag}')"

    def __getitem__(self, idx):
        return self.coords[idx]

    def __iter__(self):
        yield from self.coords


@dataclass(slots=True)
class Element:
    id: int                     # Element ID
    nodes: Tuple[int, ...]      # Global node indices, in reference lattice order
    corner_nodes: Tuple[int, ...] = field(default_factory=tuple)  # Global node indices of the vertices
    tag: str = ""
    element_type: str = "quad"
    poly_order: int = 1
    centroid: Optional[np.ndarray] = None
