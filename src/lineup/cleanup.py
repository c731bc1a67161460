# SPDX-License-Identifier: MIT

import atexit

from lineup.repository.configuration import CONFIGURATION_REPO
from lineup.repository.item import ITEM_REPO
from lineup.repository.view import VIEW_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ITEM_REPO.flush()
    VIEW_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
