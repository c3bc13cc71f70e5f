"""Configuration management module.

This module provides configuration storage, loading, and data models for the reader.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (Settings, AppConfiguration)
    paths: AppPaths with default save and configuration locations

The configuration is stored as XML in %APPDATA%/TitanSoulsSaveReader/configuration.xml.
"""

from .manager import ConfigurationManager
from .schema import AppConfiguration, Settings
from .paths import AppPaths

__all__ = [
    "ConfigurationManager",
    "AppConfiguration",
    "Settings",
    "AppPaths",
]
