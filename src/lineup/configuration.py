# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

from lineup.model.window import DEFAULT_ZOOM, Resolution

APP_NAME = "lineup"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ITEMS_DIR: Path = DATA_PATH / "items"
DATA_VIEW_PATH: Path = DATA_PATH / "view.yaml"

# Pixels per resolution unit at zoom 1.0.
DEFAULT_UNIT_WIDTHS: dict[Resolution, float] = {
    "hour": 60.0,
    "day": 100.0,
    "week": 150.0,
    "month": 200.0,
}

# Narrowest rendered width per resolution so short items stay grabbable.
DEFAULT_MIN_WIDTHS: dict[Resolution, float] = {
    "hour": 50.0,
    "day": 80.0,
    "week": 100.0,
    "month": 120.0,
}


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    default_resolution: Resolution
    default_zoom: float
    unit_widths: dict[Resolution, float]
    min_widths: dict[Resolution, float]
    pixels_per_char: float
    log_level: str


def default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "default_resolution": "day",
        "default_zoom": DEFAULT_ZOOM,
        "unit_widths": dict(DEFAULT_UNIT_WIDTHS),
        "min_widths": dict(DEFAULT_MIN_WIDTHS),
        "pixels_per_char": 10.0,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_ITEMS_DIR, DATA_VIEW_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_ITEMS_DIR = DATA_PATH / "items"
        DATA_VIEW_PATH = DATA_PATH / "view.yaml"
