from enum import Enum, auto


# Tipo de la función que se está resolviendo
class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    METHOD = auto()
    INITIALIZER = auto()


# Tipo de la clase que se está resolviendo
class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()
