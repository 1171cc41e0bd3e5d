"""Configuration management."""
from .config_manager import ConfigManager, get_config, initialize_config
from .settings import (
    GridSettings, OptimizerSettings, LoggingSettings, ApplicationSettings,
    DEFAULT_JUNCTION_PENALTY, DEFAULT_OPTIMIZER_SEED
)

__all__ = [
    'ConfigManager', 'get_config', 'initialize_config',
    'GridSettings', 'OptimizerSettings', 'LoggingSettings', 'ApplicationSettings',
    'DEFAULT_JUNCTION_PENALTY', 'DEFAULT_OPTIMIZER_SEED'
]
