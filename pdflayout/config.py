"""Configuration management."""
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration manager."""

    _instance = None

    def __new__(cls, config_path: Optional[str] = None):
        """Singleton pattern to ensure single config instance."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration."""
        if config_path is None:
            config_path = os.getenv('CONFIG_PATH', 'config.yaml')
        self.config_path = config_path
        self.config = self._merge(self._default_config(), self._load_config())

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not os.path.exists(self.config_path):
            return {}

        with open(self.config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            'layout': {
                'line_threshold': 5,
                'column_threshold': 20,
                'table_width_tolerance': 50,
                'table_min_lines': 3,
                'alignment_margin': 50
            },
            'spacing': {
                'space_width_ratio': 0.3,
                'max_spaces': 10
            },
            'rendering': {
                'font_name': 'Helvetica',
                'default_font_size': 12
            },
            'reflow': {
                'margin': 50,
                'font_size': 12,
                'line_spacing': 15
            },
            'output': {
                'output_directory': 'output'
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', 'INFO')
            }
        }

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay values loaded from file on top of the defaults."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated path."""
        keys = key_path.split('.')
        value = self.config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value

    def reload(self, config_path: Optional[str] = None) -> None:
        """Re-read configuration, optionally from a different file."""
        self.__init__(config_path)

    @property
    def line_threshold(self) -> int:
        """Vertical distance under which runs share a line."""
        return self.get('layout.line_threshold', 5)

    @property
    def column_threshold(self) -> int:
        """Horizontal distance under which line starts share a column."""
        return self.get('layout.column_threshold', 20)

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return str(self.get('logging.level', 'INFO')).upper()

    @property
    def output_directory(self) -> str:
        """Get output directory."""
        return self.get('output.output_directory', 'output')


# Global config instance
config = Config()
