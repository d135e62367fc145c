"""
Routine Builder - product selection and routine advisor backend.
"""

__version__ = "1.0.0"
