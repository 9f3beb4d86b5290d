"""
Utility modules for the intake service
"""
from .config_loader import IntakeConfig, load_intake_config

__all__ = [
    'IntakeConfig',
    'load_intake_config',
]
