"""
The framework's own test programs.

Importing this package registers every self-test with the default registry.
"""

from . import integrals, floats, objects, dissimilar_types, memory, errors, adapters, miscellaneous

__all__ = [
    "integrals", "floats", "objects", "dissimilar_types",
    "memory", "errors", "adapters", "miscellaneous",
]
