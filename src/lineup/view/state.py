# SPDX-License-Identifier: MIT

"""Presentation state shared by the terminal reports."""

from contextvars import ContextVar

# Whether report headers are printed; defaults to showing them
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
