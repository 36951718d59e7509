"""
Configuration Management Module

Handles loading, validation, and saving of run configuration:
- Generation volume, batching and worker count
- Output destination (console, file, S3 multipart upload)
- Object storage client settings
- Logging
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, asdict
from enum import Enum
import logging

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MAX_THREADS = 128
DEFAULT_PART_SIZE = 5 * 1024 * 1024  # 5 MiB, the S3 minimum for all but the last part


class OutputMode(Enum):
    """Enumeration of output destinations"""
    NONE = "none"
    CONSOLE = "console"
    FILE = "file"
    OBJECT_STORAGE = "s3"
    DATABASE = "database"

    @classmethod
    def parse(cls, value: Union[str, 'OutputMode']) -> 'OutputMode':
        """
        Map a user-supplied mode string to an OutputMode

        Unknown strings fall back to NONE, which is rejected when the sink is built.
        """
        if isinstance(value, cls):
            return value

        normalized = str(value).strip().lower()
        aliases = {
            'stdout': cls.CONSOLE,
            'console': cls.CONSOLE,
            'file': cls.FILE,
            's3': cls.OBJECT_STORAGE,
            'object_storage': cls.OBJECT_STORAGE,
            'object-storage': cls.OBJECT_STORAGE,
            'database': cls.DATABASE,
            'postgresql': cls.DATABASE,
            'none': cls.NONE,
        }
        mode = aliases.get(normalized)
        if mode is None:
            logger.warning(f"Unsupported output requested: {value}, defaulting to 'none'")
            return cls.NONE
        return mode


@dataclass
class GenerationConfig:
    """Configuration for data generation parameters"""
    num_rows: int = 1000
    batch_size: int = 100
    num_threads: int = 1
    seed: Optional[int] = None
    display_header: bool = False
    channel_capacity: Optional[int] = None  # default: 2 * num_threads

    @property
    def num_batches(self) -> int:
        return self.num_rows // self.batch_size if self.batch_size > 0 else 0

    @property
    def batches_per_thread(self) -> int:
        return self.num_batches // self.num_threads if self.num_threads > 0 else 0


@dataclass
class OutputConfig:
    """Configuration for the output sink"""
    mode: OutputMode = OutputMode.CONSOLE
    output_file: Optional[str] = None  # path, or "<bucket>:<key>" for s3

    def __post_init__(self):
        self.mode = OutputMode.parse(self.mode)


@dataclass
class StorageConfig:
    """Configuration for the S3 client"""
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    part_size: int = DEFAULT_PART_SIZE
    max_attempts: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging"""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class combining all sub-configurations"""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        config_dict = asdict(self)
        config_dict['output']['mode'] = self.output.mode.value
        return config_dict


class ConfigLoader:
    """Loads and saves configuration files"""

    def load_from_file(self, filepath: Union[str, Path]) -> Config:
        """
        Load configuration from a YAML file

        Args:
            filepath: Path to the YAML configuration file

        Returns:
            Config object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(filepath, 'r') as f:
            try:
                config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {filepath}: {e}") from e

        return self._dict_to_config(config_dict)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> Config:
        """Load configuration from a dictionary"""
        return self._dict_to_config(config_dict)

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> Config:
        """Convert dictionary to Config object"""
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a mapping of sections")

        config = Config()

        config_mapping = {
            'generation': GenerationConfig,
            'output': OutputConfig,
            'storage': StorageConfig,
            'logging': LoggingConfig,
        }

        for key in config_dict:
            if key not in config_mapping:
                raise ConfigurationError(f"Unknown configuration section: '{key}'")

        for key, config_class in config_mapping.items():
            if key not in config_dict:
                continue
            section = config_dict[key] or {}
            if not isinstance(section, dict):
                raise ConfigurationError(f"Configuration section '{key}' must be a mapping")
            try:
                setattr(config, key, config_class(**section))
            except TypeError as e:
                # Unknown or missing keyword for the section's dataclass
                raise ConfigurationError(f"Invalid '{key}' configuration: {e}") from e

        return config

    def save_config(self, config: Config, filepath: Union[str, Path]):
        """
        Save configuration to a YAML file

        Args:
            config: Configuration to save
            filepath: Path to save the file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to: {filepath}")


class ConfigValidator:
    """Validates configuration parameters"""

    @staticmethod
    def validate(config: Config) -> tuple[bool, List[str]]:
        """
        Validate configuration parameters

        Args:
            config: Configuration to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []
        generation = config.generation

        if generation.num_rows < 0:
            errors.append("num_rows must not be negative")

        if generation.batch_size <= 0:
            errors.append("batch_size must be positive")

        if not 1 <= generation.num_threads <= MAX_THREADS:
            errors.append(f"num_threads must be between 1 and {MAX_THREADS}")

        if (generation.channel_capacity is not None
                and generation.channel_capacity <= 0):
            errors.append("channel_capacity must be positive")

        # Only meaningful once the values above are sane
        if not errors and generation.num_batches % generation.num_threads != 0:
            errors.append("Number of batches must be evenly divisible by number of threads.")

        if config.output.mode in (OutputMode.FILE, OutputMode.OBJECT_STORAGE):
            if not config.output.output_file:
                errors.append(f"output_file required when output mode is '{config.output.mode.value}'")

        if config.storage.part_size < DEFAULT_PART_SIZE:
            errors.append(f"storage.part_size must be at least {DEFAULT_PART_SIZE} bytes")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if config.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of {valid_levels}")

        return len(errors) == 0, errors


def get_default_config() -> Config:
    """Get the default configuration"""
    return Config()
