# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lineup import configuration
from lineup.model.window import Resolution


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if configuration.APP_CONFIG_PATH.is_file():
            self._config = load(
                configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
            )
        if self._config is None:
            self._config = configuration.default_configuration()
            return

        # Fill in keys added after the config file was first written
        defaults = configuration.default_configuration()
        for key, value in defaults.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]
        for resolution, width in configuration.DEFAULT_UNIT_WIDTHS.items():
            self._config["unit_widths"].setdefault(resolution, width)
        for resolution, width in configuration.DEFAULT_MIN_WIDTHS.items():
            self._config["min_widths"].setdefault(resolution, width)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        default_resolution: Optional[Resolution] = None,
        default_zoom: Optional[float] = None,
        unit_widths: Optional[dict[Resolution, float]] = None,
        min_widths: Optional[dict[Resolution, float]] = None,
        pixels_per_char: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if default_resolution is not None:
            self.config["default_resolution"] = default_resolution
        if default_zoom is not None:
            self.config["default_zoom"] = default_zoom
        if unit_widths is not None:
            self.config["unit_widths"].update(unit_widths)
        if min_widths is not None:
            self.config["min_widths"].update(min_widths)
        if pixels_per_char is not None:
            self.config["pixels_per_char"] = pixels_per_char
        if log_level is not None:
            self.config["log_level"] = log_level


CONFIGURATION_REPO = ConfigurationRepository()
