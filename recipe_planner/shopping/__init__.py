"""
Shopping list aggregation.
"""
from .shopping_list import ShoppingItem, ShoppingList, ShoppingListBuilder

__all__ = ['ShoppingItem', 'ShoppingList', 'ShoppingListBuilder']
