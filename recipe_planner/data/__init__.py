"""
Data access: recipe catalogs and settings.
"""
from .recipe_catalog import RecipeCatalog, InMemoryRecipeCatalog, current_versions
from .recipes_manager import CsvRecipeCatalog
from .settings_manager import SettingsManager

__all__ = [
    'RecipeCatalog',
    'InMemoryRecipeCatalog',
    'current_versions',
    'CsvRecipeCatalog',
    'SettingsManager',
]
