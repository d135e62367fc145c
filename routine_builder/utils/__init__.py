"""
Utility modules for the routine builder
"""
from .config_loader import AdvisorConfig, load_advisor_config

__all__ = [
    'AdvisorConfig',
    'load_advisor_config',
]
