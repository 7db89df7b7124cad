from .parameters import StabilizationParameters
from .incidence import IncidenceIndex
from .classify import classify_dofs
from .ring import SupportNotFoundError, two_ring_of_dof, three_ring_of_dof, find_supporting_element
from .locate import LocateResult, locate_point_wrt_element
from .constraints import generate_constraints
from .stabilize import StabilizedDof, stabilize_basis
__all__=['StabilizationParameters','IncidenceIndex','classify_dofs','SupportNotFoundError',
         'two_ring_of_dof','three_ring_of_dof','find_supporting_element','LocateResult',
         'locate_point_wrt_element','generate_constraints','StabilizedDof','stabilize_basis']
