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

"""Chain name rewriting inside rule bodies."""

from __future__ import annotations

import re
from collections.abc import Collection

_WHITESPACE_RE = re.compile(r'(\s+)')


def rewrite_chains(text: str, chains: Collection[str], prefix: str) -> str:
    """Prefix every whitespace-delimited token of *text* found in *chains*.

    Only whole tokens are rewritten: with ``custom`` in *chains*,
    ``-j custom`` becomes ``-j _mfw_custom`` but ``--comment custom-ssh``
    stays as it is. Whitespace between tokens is kept unchanged.

    >>> rewrite_chains('-A custom -j ACCEPT', {'custom'}, '_mfw_')
    '-A _mfw_custom -j ACCEPT'
    """
    if not chains:
        return text
    return ''.join(
        f'{prefix}{part}' if part in chains else part
        for part in _WHITESPACE_RE.split(text)
    )
