"""
Configuration Management
========================

Provides a centralized configuration system with:
- YAML file loading
- Environment variable overrides
- Default values
- Singleton pattern for global access

Calibration values are frozen once loaded; every resolver built from the
same Config shares them read-only.
"""

import os
import yaml
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationConfig:
    """
    Physical mounting geometry of the Limelight.

    Heights are in inches from the floor, angles in degrees.
    These MUST be measured on the actual robot.
    """
    limelight_height: float = 40.0
    limelight_angle: float = 15.0       # positive = tilted up
    apriltag_height: float = 36.0
    ball_height: float = 1.5            # centre of a 3in ball resting on the floor
    horizontal_half_fov: float = 29.8
    vertical_half_fov: float = 24.85


@dataclass
class NetworkConfig:
    """HTTP JSON API settings."""
    host: str = "limelight.local"
    port: int = 5807
    results_path: str = "/results"
    settings_path: str = "/settings"
    probe_timeout: float = 2.0
    poll_timeout: float = 0.5

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass
class LocalBusConfig:
    """Direct (USB hub) connection settings."""
    enabled: bool = True
    device_name: str = "limelight"


@dataclass
class PipelineConfig:
    """Pipeline slot numbers as configured on the camera."""
    purple_ball: int = 0
    green_ball: int = 1
    pillar_tags: int = 2
    center_tags: int = 3
    settle_time: float = 0.2


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "/tmp/limelight_targeting.log"
    max_file_size: int = 10485760
    backup_count: int = 3
    console_enabled: bool = True


class Config:
    """
    Central configuration manager.

    Loads configuration from YAML file with environment variable overrides.
    Uses singleton pattern for global access.

    Usage:
        config = Config.load("config/limelight_config.yaml")
        # or
        config = get_config()  # Gets existing instance

        height = config.calibration.limelight_height
        url = config.network.base_url
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if Config._initialized and config_path is None:
            return

        self._raw: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

        self.calibration = CalibrationConfig()
        self.network = NetworkConfig()
        self.local_bus = LocalBusConfig()
        self.pipelines = PipelineConfig()
        self.logging = LoggingConfig()

        if config_path:
            self._load_file(config_path)
        else:
            self._apply_env_overrides()

        Config._initialized = True

    @classmethod
    def load(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        instance = cls()
        instance._load_file(config_path)
        return instance

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        global _config
        cls._instance = None
        cls._initialized = False
        _config = None

    def _load_file(self, config_path: str) -> None:
        """Load and parse YAML configuration file."""
        path = Path(config_path)

        search_paths = [
            path,
            Path(__file__).parent.parent.parent / "config" / path.name,
            Path("/etc/limelight_targeting") / path.name,
        ]

        self._config_path = None
        for search_path in search_paths:
            if search_path.exists():
                self._config_path = search_path
                break

        if self._config_path is None:
            logger.warning(f"Config file not found: {config_path}, using defaults")
            self._apply_env_overrides()
            return

        try:
            with open(self._config_path, 'r') as f:
                self._raw = yaml.safe_load(f) or {}
            logger.info(f"Loaded config from: {self._config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config: {e}")
            return

        self._parse_config()
        self._apply_env_overrides()

    def _parse_config(self) -> None:
        """Parse raw config into typed dataclasses."""
        if 'calibration' in self._raw:
            c = self._raw['calibration']
            self.calibration = CalibrationConfig(
                limelight_height=float(c.get('limelight_height', 40.0)),
                limelight_angle=float(c.get('limelight_angle', 15.0)),
                apriltag_height=float(c.get('apriltag_height', 36.0)),
                ball_height=float(c.get('ball_height', 1.5)),
                horizontal_half_fov=float(c.get('horizontal_half_fov', 29.8)),
                vertical_half_fov=float(c.get('vertical_half_fov', 24.85)),
            )

        if 'network' in self._raw:
            n = self._raw['network']
            self.network = NetworkConfig(
                host=n.get('host', 'limelight.local'),
                port=int(n.get('port', 5807)),
                results_path=n.get('results_path', '/results'),
                settings_path=n.get('settings_path', '/settings'),
                probe_timeout=float(n.get('probe_timeout', 2.0)),
                poll_timeout=float(n.get('poll_timeout', 0.5)),
            )

        if 'local_bus' in self._raw:
            lb = self._raw['local_bus']
            self.local_bus = LocalBusConfig(
                enabled=lb.get('enabled', True),
                device_name=lb.get('device_name', 'limelight'),
            )

        if 'pipelines' in self._raw:
            p = self._raw['pipelines']
            self.pipelines = PipelineConfig(
                purple_ball=int(p.get('purple_ball', 0)),
                green_ball=int(p.get('green_ball', 1)),
                pillar_tags=int(p.get('pillar_tags', 2)),
                center_tags=int(p.get('center_tags', 3)),
                settle_time=float(p.get('settle_time', 0.2)),
            )

        if 'logging' in self._raw:
            log = self._raw['logging']
            self.logging = LoggingConfig(
                level=log.get('level', 'INFO'),
                file_enabled=log.get('file_enabled', False),
                file_path=log.get('file_path', '/tmp/limelight_targeting.log'),
                max_file_size=log.get('max_file_size', 10485760),
                backup_count=log.get('backup_count', 3),
                console_enabled=log.get('console_enabled', True),
            )

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        # Network
        if os.environ.get('LL_HOST'):
            self.network.host = os.environ['LL_HOST']
        if os.environ.get('LL_PORT'):
            self.network.port = int(os.environ['LL_PORT'])
        if os.environ.get('LL_PROBE_TIMEOUT'):
            self.network.probe_timeout = float(os.environ['LL_PROBE_TIMEOUT'])
        if os.environ.get('LL_POLL_TIMEOUT'):
            self.network.poll_timeout = float(os.environ['LL_POLL_TIMEOUT'])

        # Local bus
        if os.environ.get('LL_DEVICE_NAME'):
            self.local_bus.device_name = os.environ['LL_DEVICE_NAME']

        # Pipelines
        if os.environ.get('LL_SETTLE_TIME'):
            self.pipelines.settle_time = float(os.environ['LL_SETTLE_TIME'])

        # Calibration (frozen, so rebuild)
        overrides = {}
        if os.environ.get('LL_LIMELIGHT_HEIGHT'):
            overrides['limelight_height'] = float(os.environ['LL_LIMELIGHT_HEIGHT'])
        if os.environ.get('LL_LIMELIGHT_ANGLE'):
            overrides['limelight_angle'] = float(os.environ['LL_LIMELIGHT_ANGLE'])
        if os.environ.get('LL_APRILTAG_HEIGHT'):
            overrides['apriltag_height'] = float(os.environ['LL_APRILTAG_HEIGHT'])
        if overrides:
            self.calibration = replace(self.calibration, **overrides)

        # Logging
        if os.environ.get('LL_LOG_LEVEL'):
            self.logging.level = os.environ['LL_LOG_LEVEL']

    def get(self, key: str, default: Any = None) -> Any:
        """Get raw config value by dot-notation key."""
        keys = key.split('.')
        value = self._raw
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def __repr__(self) -> str:
        return f"Config(path={self._config_path}, url={self.network.base_url})"


# Global config accessor
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(config_path: str) -> Config:
    """Load configuration from file and set as global."""
    global _config
    _config = Config.load(config_path)
    return _config
