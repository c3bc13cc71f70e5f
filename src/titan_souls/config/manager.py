"""Configuration management - load/save XML configuration"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths
from .schema import AppConfiguration, Settings
from ..core.save_locator import SaveLocator
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages reader configuration persistence.

    Handles loading and saving configuration to XML format and
    default configuration creation.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or AppPaths.CONFIG_FILE
        self.config: Optional[AppConfiguration] = None

    def exists(self) -> bool:
        """Check if a configuration file has been written."""
        return self.config_path.exists()

    def load(self) -> AppConfiguration:
        """Load configuration from XML file.

        Returns:
            AppConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")

        # Use defaults if Settings element is missing
        if settings_elem is not None:
            settings = Settings(
                save_directory=self._parse_path(settings_elem, "SaveDirectory"),
                save_pattern=self._get_text(settings_elem, "SavePattern", AppPaths.SAVE_PATTERN_DEFAULT),
                strict_ordering=self._parse_bool(settings_elem, "StrictOrdering", False),
            )
        else:
            settings = Settings()

        self.config = AppConfiguration(settings=settings)
        logger.debug(f"Configuration loaded: save directory {settings.save_directory}")
        return self.config

    def load_or_default(self) -> AppConfiguration:
        """Load the configuration, falling back to defaults if it is unusable.

        Returns:
            The loaded or default AppConfiguration
        """
        if not self.exists():
            return self.create_default()

        try:
            return self.load()
        except (ET.ParseError, ValueError) as e:
            # Corrupted config = start from defaults
            logger.warning(f"Could not load config, using defaults: {e}")
            return self.create_default()

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        root = ET.Element("TitanSoulsSaveReader", version="1.0")

        settings = self.config.settings
        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "SaveDirectory").text = str(settings.save_directory) if settings.save_directory else ""
        ET.SubElement(settings_elem, "SavePattern").text = settings.save_pattern
        ET.SubElement(settings_elem, "StrictOrdering").text = str(settings.strict_ordering).lower()

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self, save_directory: Optional[Path] = None) -> AppConfiguration:
        """Create a default configuration.

        Args:
            save_directory: Optional save directory, uses the game's default if None

        Returns:
            New AppConfiguration with default values
        """
        self.config = AppConfiguration(
            settings=Settings(save_directory=save_directory or AppPaths.SAVE_DEFAULT),
        )
        return self.config

    def build_locator(self) -> SaveLocator:
        """Create a SaveLocator from the current settings.

        Returns:
            SaveLocator using the configured pattern and ordering mode
        """
        if self.config is None:
            raise ValueError("No configuration loaded")

        settings = self.config.settings
        return SaveLocator(pattern=settings.save_pattern, strict=settings.strict_ordering)

    # Helper methods for XML parsing
    @staticmethod
    def _get_text(parent: ET.Element, tag: str, default: str = "") -> str:
        """Get text content of a child element."""
        elem = parent.find(tag)
        return elem.text if elem is not None and elem.text else default

    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.strip().lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return AppPaths.expand_path(elem.text)
        return None
