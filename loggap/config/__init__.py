"""Configuration management"""

from .config_loader import ConfigLoader
from .gap_config import AppConfig, DetectionConfig, OutputConfig, StorageConfig

__all__ = ["ConfigLoader", "AppConfig", "DetectionConfig", "OutputConfig", "StorageConfig"]
