"""
Measurement unit conversion.
"""
from .unit_converter import UnitConverter, MASS, VOLUME, UNIT_CLASSES, normalize_unit

__all__ = ['UnitConverter', 'MASS', 'VOLUME', 'UNIT_CLASSES', 'normalize_unit']
