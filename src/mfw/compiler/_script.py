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

"""GeneratedScript: the immutable result of a compiler invocation."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable


@dataclasses.dataclass(frozen=True)
class GeneratedScript:
    """Ordered shell command lines; ``str()`` gives the script text."""

    lines: tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> GeneratedScript:
        return cls(tuple(lines))

    @classmethod
    def from_text(cls, text: str) -> GeneratedScript:
        return cls(tuple(text.splitlines()))

    def __add__(self, other: GeneratedScript) -> GeneratedScript:
        if not isinstance(other, GeneratedScript):
            return NotImplemented
        return GeneratedScript(self.lines + other.lines)

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        if not self.lines:
            return ''
        return '\n'.join(self.lines) + '\n'