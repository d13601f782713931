# Copyright (C) 2026 Linuxfabrik <info@linuxfabrik.ch>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# On Debian systems, the complete text of the GNU General Public License
# version 2 can be found in /usr/share/common-licenses/GPL-2.
#
# SPDX-License-Identifier: GPL-2.0-or-later

"""BaseCompiler: error/warning tracking for the script compiler."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import NoReturn

from mfw.core._errors import CompileError

logger = logging.getLogger(__name__)


class CompilerStatus(IntEnum):
    """Compiler exit status codes."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2


def _located(msg: str, statement=None) -> str:
    if statement is not None and statement.source:
        return f'{statement.source}:{statement.lineno}: {msg}'
    return msg


class BaseCompiler:
    """Base class providing error/warning tracking for compilers."""

    def __init__(self) -> None:
        self._status: CompilerStatus = CompilerStatus.SUCCESS
        self._errors: list[str] = []
        self._warnings: list[str] = []

    @property
    def status(self) -> CompilerStatus:
        return self._status

    def reset(self) -> None:
        self._status = CompilerStatus.SUCCESS
        self._errors.clear()
        self._warnings.clear()

    def warning(self, msg: str, statement=None) -> None:
        """Record a warning, optionally tied to the statement it concerns."""
        text = _located(msg, statement)
        self._warnings.append(text)
        logger.warning(text)
        if self._status == CompilerStatus.SUCCESS:
            self._status = CompilerStatus.WARNING

    def abort(self, error: CompileError) -> NoReturn:
        """Record *error* and stop compiling by raising it."""
        self._errors.append(str(error))
        self._status = CompilerStatus.ERROR
        raise error

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def get_warnings(self) -> list[str]:
        return list(self._warnings)
