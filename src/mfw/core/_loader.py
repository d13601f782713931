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

"""Rule loader: reads a rule file and expands its include directives."""

from __future__ import annotations

import logging
import pathlib
import re

from ._errors import (
    IncludeCycle,
    IncludeNotFound,
    IncludeResolutionError,
    SourceNotFound,
    SourceReadError,
)
from ._statement import Statement

logger = logging.getLogger(__name__)

_INCLUDE_RE = re.compile(r'^#(?:include|import)(?:\s+(?P<arg>.*))?$')
_ARG_RE = re.compile(r'"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<bare>\S+)')


def parse_include(line: str) -> str | None:
    """Return the path argument of an include directive.

    Returns ``None`` if *line* is not an include directive and an empty
    string if it is one without a path.
    """
    m = _INCLUDE_RE.match(line)
    if m is None:
        return None
    arg = (m.group('arg') or '').strip()
    m = _ARG_RE.match(arg)
    if m is None:
        return ''
    return m.group('dq') or m.group('sq') or m.group('bare') or ''


class RuleLoader:
    """Loads a rule file into a flat list of statements.

    Includes are resolved relative to the directory of the file that
    contains them and expanded depth-first in place. A file that includes
    itself, directly or through other files, raises ``IncludeCycle``.
    """

    def __init__(self, encoding: str = 'utf-8') -> None:
        self.encoding = encoding

    def load(self, path) -> list[Statement]:
        path = pathlib.Path(path)
        if not path.is_file():
            raise SourceNotFound(path)
        return self._load(path, [])

    def _load(self, path: pathlib.Path, stack: list[pathlib.Path]) -> list[Statement]:
        resolved = path.resolve()
        if resolved in stack:
            raise IncludeCycle([*stack[stack.index(resolved) :], resolved])

        logger.debug('Loading rules from %s', path)
        try:
            text = path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            raise SourceNotFound(path) from None
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(path, e) from e

        stack = [*stack, resolved]
        statements = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            include = parse_include(line)
            if include is None:
                statements.append(Statement.parse(line, str(path), lineno))
                continue
            if not include:
                raise IncludeResolutionError(path, lineno, line)

            target = path.parent / include
            if not target.is_file():
                raise IncludeNotFound(target, path)
            logger.debug('%s:%d: including %s', path, lineno, target)
            statements.extend(self._load(target, stack))

        return statements
