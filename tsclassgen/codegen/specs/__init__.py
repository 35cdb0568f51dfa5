"""Immutable specs for classes and their members."""

from .class_spec import ClassSpec, ClassSpecBuilder
from .decorator_spec import DecoratorSpec
from .errors import AbstractModifierError, SpecConflictError, SpecError, SpecKindError
from .function_spec import FunctionSpec
from .parameter_spec import ParameterSpec
from .property_spec import PropertySpec

__all__ = [
    "AbstractModifierError",
    "ClassSpec",
    "ClassSpecBuilder",
    "DecoratorSpec",
    "FunctionSpec",
    "ParameterSpec",
    "PropertySpec",
    "SpecConflictError",
    "SpecError",
    "SpecKindError",
]
