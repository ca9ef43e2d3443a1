"""
Configuration management for hand gesture recognition system.
"""
import logging
import sys
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class PresenceConfig:
    """Hand presence gate settings."""
    min_rect_size: float


@dataclass
class StaticConfig:
    """Static gesture classification settings."""
    thumb_index_touch_distance: float


@dataclass
class ScrollConfig:
    """Scroll movement configuration."""
    distance_factor: float


@dataclass
class ZoomConfig:
    """Zoom movement configuration."""
    height_factor: float


@dataclass
class SlideConfig:
    """Slide movement configuration."""
    angle_threshold_deg: float
    vertical_min_deg: float
    vertical_max_deg: float
    frame_stride: int


@dataclass
class MovementConfig:
    """Movement recognition configuration."""
    scroll: ScrollConfig
    zoom: ZoomConfig
    slide: SlideConfig


@dataclass
class LoggingConfig:
    """Logging settings for the command line runner."""
    level: str
    format: str


@dataclass
class Cfg:
    """Main configuration class."""
    presence: PresenceConfig
    static: StaticConfig
    movement: MovementConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data or {})


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Fetch a required mapping from the config data."""
    if name not in data:
        raise KeyError(f"Missing config section: {name}")
    return data[name]


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    presence_data = _section(data, 'presence')
    presence = PresenceConfig(
        min_rect_size=float(presence_data['min_rect_size'])
    )

    static_data = _section(data, 'static')
    static = StaticConfig(
        thumb_index_touch_distance=float(static_data['thumb_index_touch_distance'])
    )

    movement_data = _section(data, 'movement')
    scroll_data = _section(movement_data, 'scroll')
    zoom_data = _section(movement_data, 'zoom')
    slide_data = _section(movement_data, 'slide')
    if int(slide_data['frame_stride']) < 1:
        raise ValueError(
            f"movement.slide.frame_stride must be at least 1, got {slide_data['frame_stride']}"
        )
    movement = MovementConfig(
        scroll=ScrollConfig(
            distance_factor=float(scroll_data['distance_factor'])
        ),
        zoom=ZoomConfig(
            height_factor=float(zoom_data['height_factor'])
        ),
        slide=SlideConfig(
            angle_threshold_deg=float(slide_data['angle_threshold_deg']),
            vertical_min_deg=float(slide_data['vertical_min_deg']),
            vertical_max_deg=float(slide_data['vertical_max_deg']),
            frame_stride=int(slide_data['frame_stride'])
        )
    )

    logging_data = _section(data, 'logging')
    logging_cfg = LoggingConfig(
        level=str(logging_data['level']).upper(),
        format=logging_data['format']
    )

    return Cfg(
        presence=presence,
        static=static,
        movement=movement,
        logging=logging_cfg
    )


def configure_logging(cfg: Cfg, level: Optional[str] = None) -> None:
    """Route log records to stderr using the configured level and format."""
    logging.basicConfig(
        level=getattr(logging, (level or cfg.logging.level).upper()),
        format=cfg.logging.format,
        handlers=[logging.StreamHandler(sys.stderr)]
    )
