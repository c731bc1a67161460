# SPDX-License-Identifier: MIT

from lineup.cleanup import register_cleanup
from lineup.initialize import initialize
from lineup.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
