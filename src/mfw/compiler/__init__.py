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

"""Compiler infrastructure for namespaced iptables scripts."""

from ._base import BaseCompiler, CompilerStatus
from ._rewrite import rewrite_chains
from ._script import GeneratedScript
from ._script_compiler import ScriptCompiler
from ._state import CompilationState
from ._templates import get_environment, render_template

__all__ = [
    'BaseCompiler',
    'CompilationState',
    'CompilerStatus',
    'GeneratedScript',
    'ScriptCompiler',
    'get_environment',
    'render_template',
    'rewrite_chains',
]
