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

"""Statement: one trimmed line of the rule language, tagged by its sigil."""

from __future__ import annotations

import dataclasses
import enum


class StatementKind(enum.Enum):
    COMMENT = '#'
    TABLE = '*'
    CHAIN = ':'
    RULE = '-'
    OTHER = ''


_SIGILS = {kind.value: kind for kind in StatementKind if kind.value}


@dataclasses.dataclass(frozen=True)
class Statement:
    """A single line of rule source.

    ``source`` and ``lineno`` only serve diagnostics and are left out of
    comparisons, so an expanded include equals the same lines written inline.
    """

    kind: StatementKind
    text: str
    source: str = dataclasses.field(default='', compare=False)
    lineno: int = dataclasses.field(default=0, compare=False)

    @classmethod
    def parse(cls, line: str, source: str = '', lineno: int = 0) -> Statement:
        text = line.strip()
        kind = _SIGILS.get(text[:1], StatementKind.OTHER)
        return cls(kind=kind, text=text, source=source, lineno=lineno)

    @property
    def table_name(self) -> str:
        """First token of a ``*table ...`` line, without the asterisk."""
        tokens = self.text[1:].split()
        return tokens[0] if tokens else ''

    @property
    def chain_name(self) -> str:
        """First token of a ``:chain ...`` line, without the colon."""
        tokens = self.text.split()
        return tokens[0][1:] if tokens else ''
