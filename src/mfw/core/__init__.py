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

"""Rule source model: statements, loader, settings and the port allowlist."""

from ._errors import (
    CompileError,
    ExecutionError,
    IncludeCycle,
    IncludeNotFound,
    IncludeResolutionError,
    LoadError,
    MalformedChainDeclaration,
    MalformedTableSwitch,
    MfwError,
    PortSpecError,
    SettingsError,
    SourceNotFound,
    SourceReadError,
    UndefinedTableContext,
    UnsupportedPlatform,
)
from ._loader import RuleLoader
from ._ports import PortRuleFile, parse_port_spec
from ._settings import (
    DEFAULT_PREFIX,
    DEFAULT_TABLE_SPEC,
    Settings,
    SettingKey,
    load_settings,
    make_table_spec,
)
from ._statement import Statement, StatementKind

__all__ = [
    'DEFAULT_PREFIX',
    'DEFAULT_TABLE_SPEC',
    'CompileError',
    'ExecutionError',
    'IncludeCycle',
    'IncludeNotFound',
    'IncludeResolutionError',
    'LoadError',
    'MalformedChainDeclaration',
    'MalformedTableSwitch',
    'MfwError',
    'PortRuleFile',
    'PortSpecError',
    'RuleLoader',
    'SettingKey',
    'Settings',
    'SettingsError',
    'SourceNotFound',
    'SourceReadError',
    'Statement',
    'StatementKind',
    'UndefinedTableContext',
    'UnsupportedPlatform',
    'load_settings',
    'make_table_spec',
    'parse_port_spec',
]
