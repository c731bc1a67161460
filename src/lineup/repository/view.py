# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lineup import configuration, time
from lineup.model.window import TimeWindow


class ViewRepository:
    """The last window shown by the CLI, so zoom and pan commands can chain."""

    def __init__(self) -> None:
        self._window: Optional[TimeWindow] = None
        self._loaded = False
        self.is_dirty = False

    @property
    def window(self) -> Optional[TimeWindow]:
        if not self._loaded:
            self.__load_data()
        return self._window

    def __load_data(self) -> None:
        self._loaded = True
        if not configuration.DATA_VIEW_PATH.is_file():
            return
        raw_view = load(configuration.DATA_VIEW_PATH.read_text(), Loader=Loader)
        if raw_view is None or raw_view.get("window") is None:
            return
        self._window = self.__convert_window_for_deserialization(raw_view["window"])

    def __save_data(self, window: TimeWindow) -> None:
        configuration.DATA_VIEW_PATH.parent.mkdir(parents=True, exist_ok=True)
        view = {"window": self.__convert_window_for_serialization(deepcopy(window))}
        configuration.DATA_VIEW_PATH.write_text(dump(view, Dumper=Dumper))

    def flush(self) -> bool:
        if self._window is not None and self.is_dirty:
            self.__save_data(self._window)
            self.is_dirty = False
            return True
        return False

    def __convert_window_for_serialization(self, window: TimeWindow) -> dict[str, Any]:
        serializable_window = cast(dict[str, Any], window)
        serializable_window["start"] = time.datetime_to_iso_str(window["start"])
        serializable_window["end"] = time.datetime_to_iso_str(window["end"])
        return serializable_window

    def __convert_window_for_deserialization(self, window: dict[str, Any]) -> TimeWindow:
        window["start"] = time.datetime_from_str(window["start"])
        window["end"] = time.datetime_from_str(window["end"])
        window["zoom"] = float(window["zoom"])
        return cast(TimeWindow, window)

    def save_window(self, window: TimeWindow) -> None:
        self.is_dirty = True
        self._loaded = True
        self._window = deepcopy(window)

    def get_window(self) -> Optional[TimeWindow]:
        if self.window is None:
            return None
        return deepcopy(self.window)


VIEW_REPO = ViewRepository()
