"""
DefinitionKind Enum

Defines how a definition builds its service
"""

from enum import Enum


class DefinitionKind(Enum):
    """Construction path of a definition"""
    FACTORY = "FACTORY"
    CLASS_NO_ARGS = "CLASS_NO_ARGS"
    CLASS_WITH_ARGS = "CLASS_WITH_ARGS"
