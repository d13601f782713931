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

"""Exception hierarchy shared by the loader, compiler, driver and CLIs."""

from __future__ import annotations


class MfwError(Exception):
    """Base class for every error raised by mfw."""


# -- Loading --


class LoadError(MfwError):
    """Loading the rule source failed; no statements are returned."""


class SourceNotFound(LoadError):
    def __init__(self, path) -> None:
        self.path = str(path)
        super().__init__(f'rule file not found: {self.path}')


class IncludeNotFound(SourceNotFound):
    def __init__(self, path, included_from) -> None:
        self.included_from = str(included_from)
        super().__init__(path)
        self.args = (
            f'included file not found: {self.path} (included from {self.included_from})',
        )


class SourceReadError(LoadError):
    def __init__(self, path, reason) -> None:
        self.path = str(path)
        super().__init__(f'failed to read {self.path}: {reason}')


class IncludeResolutionError(LoadError):
    def __init__(self, source, lineno: int, line: str) -> None:
        self.source = str(source)
        self.lineno = lineno
        super().__init__(
            f'{self.source}:{lineno}: include directive without a path: {line!r}'
        )


class IncludeCycle(LoadError):
    def __init__(self, chain: list) -> None:
        self.chain = [str(p) for p in chain]
        super().__init__('include cycle: ' + ' -> '.join(self.chain))


# -- Compiling --


class CompileError(MfwError):
    """Script generation was aborted; no partial script is returned."""

    def __init__(self, msg: str, statement=None) -> None:
        self.statement = statement
        if statement is not None and statement.source:
            msg = f'{statement.source}:{statement.lineno}: {msg}'
        super().__init__(msg)


class UndefinedTableContext(CompileError):
    pass


class MalformedChainDeclaration(CompileError):
    pass


class MalformedTableSwitch(CompileError):
    pass


# -- Configuration --


class SettingsError(MfwError):
    pass


# -- Execution --


class ExecutionError(MfwError):
    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f'script failed with exit code: {returncode}')


class UnsupportedPlatform(MfwError):
    def __init__(self, platform: str, reason: str = '') -> None:
        self.platform = platform
        super().__init__(
            reason
            or f'script execution is only supported on Linux (running on {platform})'
        )


# -- Port allowlist --


class PortSpecError(MfwError, ValueError):
    def __init__(self, spec: str, reason: str) -> None:
        self.spec = spec
        super().__init__(f'invalid port {spec!r}: {reason}')
