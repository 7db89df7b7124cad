from .mesh import Mesh
from .topology import Node, Element
from .dofs import Constraint, DegreeOfFreedom, ACTIVE, INACTIVE, CONSTRAINED
from .field import Field, FieldElement
__all__=['Mesh','Node','Element','Constraint','DegreeOfFreedom','Field','FieldElement',
         'ACTIVE','INACTIVE','CONSTRAINED']
