"""pycutstab: basis stabilisation by extension for cut finite elements."""
from pycutstab.core import Mesh, Field, FieldElement
from pycutstab.stabilization import (
    StabilizationParameters, SupportNotFoundError, StabilizedDof, stabilize_basis,
)

__all__ = ['Mesh', 'Field', 'FieldElement', 'StabilizationParameters',
           'SupportNotFoundError', 'StabilizedDof', 'stabilize_basis']
__version__ = "0.1.0"
