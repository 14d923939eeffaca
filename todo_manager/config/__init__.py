"""
Configuration module - Settings and configuration management
"""

from .config_properties import ConfigProperties, ServerSettings

__all__ = [
    'ConfigProperties',
    'ServerSettings',
]
