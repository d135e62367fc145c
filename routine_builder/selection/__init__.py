"""
Selection state and its persistence.
"""

from .persistence import DisplayPreferences, SelectionPersistence
from .selection_set import SelectionSet, parse_selection

__all__ = ["DisplayPreferences", "SelectionPersistence", "SelectionSet", "parse_selection"]
