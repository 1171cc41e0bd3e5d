"""Application settings dataclasses."""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_JUNCTION_PENALTY = 1.25
DEFAULT_OPTIMIZER_SEED = 0xD15EA5E5

_UINT64_MAX = 0xFFFFFFFFFFFFFFFF


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_level_name(value) -> bool:
    return isinstance(value, str) and isinstance(logging.getLevelName(value.upper()), int)


@dataclass
class GridSettings:
    """Default grid dimensions."""
    rows: int = 20
    columns: int = 30
    
    def validate(self) -> List[str]:
        errors = []
        if not _is_int(self.rows) or self.rows <= 0:
            errors.append(f"rows must be a positive integer, got {self.rows!r}")
        if not _is_int(self.columns) or self.columns <= 0:
            errors.append(f"columns must be a positive integer, got {self.columns!r}")
        return errors


@dataclass
class OptimizerSettings:
    """Pipe optimizer tuning."""
    # Cost added per degree-2 endpoint a new edge would turn into a junction
    junction_penalty: float = DEFAULT_JUNCTION_PENALTY
    seed: int = DEFAULT_OPTIMIZER_SEED
    timeout_seconds: Optional[float] = None
    
    def validate(self) -> List[str]:
        errors = []
        penalty = self.junction_penalty
        if isinstance(penalty, bool) or not isinstance(penalty, (int, float)):
            errors.append(f"junction_penalty must be numeric, got {penalty!r}")
        elif math.isnan(penalty) or math.isinf(penalty) or penalty < 0:
            errors.append(f"junction_penalty must be finite and non-negative, got {penalty}")
        
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            errors.append(f"seed must be an integer, got {self.seed!r}")
        elif not 0 <= self.seed <= _UINT64_MAX:
            errors.append(f"seed must fit in 64 bits, got {self.seed}")
        
        if self.timeout_seconds is not None:
            timeout = self.timeout_seconds
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or not timeout > 0:
                errors.append(f"timeout_seconds must be positive, got {self.timeout_seconds!r}")
        return errors


@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: str = "INFO"
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True
    file_output: bool = False
    log_file: str = "logs/piperoute.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    component_levels: Dict[str, str] = field(default_factory=dict)
    
    def validate(self) -> List[str]:
        errors = []
        if not _is_level_name(self.level):
            errors.append(f"Unknown logging level: {self.level!r}")
        if not isinstance(self.component_levels, dict):
            errors.append("component_levels must be an object of logger name to level")
        else:
            for component, level in self.component_levels.items():
                if not _is_level_name(level):
                    errors.append(f"Unknown logging level for {component}: {level!r}")
        if not _is_int(self.max_file_size_mb) or self.max_file_size_mb <= 0:
            errors.append("max_file_size_mb must be a positive integer")
        if not _is_int(self.backup_count) or self.backup_count < 0:
            errors.append("backup_count must be a non-negative integer")
        return errors


@dataclass
class ApplicationSettings:
    """Top-level settings container."""
    grid: GridSettings = field(default_factory=GridSettings)
    optimizer: OptimizerSettings = field(default_factory=OptimizerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    version: str = "1.0.0"
    config_version: int = 1
    
    def validate(self) -> Dict[str, List[str]]:
        """Validate all categories.
        
        Returns:
            Mapping of category name to a list of error messages
        """
        return {
            "grid": self.grid.validate(),
            "optimizer": self.optimizer.validate(),
            "logging": self.logging.validate(),
        }
