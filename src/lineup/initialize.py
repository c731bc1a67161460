# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from lineup import configuration
from lineup.logger import configure_logging
from lineup.repository.configuration import CONFIGURATION_REPO
from lineup.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_ITEMS_DIR.is_dir():
        configuration.DATA_ITEMS_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_ITEMS_DIR / ".gitkeep").touch()
