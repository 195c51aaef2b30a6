"""
Dart code generator module.

Generates Dart transfer classes (DTOs) from located Dart data classes.
"""

from .generator import DartGenerator, create_dart_generator
from .types import DartField, DartTypeMapper

__all__ = [
    "DartGenerator",
    "DartField",
    "DartTypeMapper",
    "create_dart_generator",
]
