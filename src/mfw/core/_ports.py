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

"""Port allowlist: a generated rule file that opens single ports.

The file is an ordinary rule file and is meant to be pulled into the main
rules with ``#include "ports.rule"``. Its second line keeps the list of open
ports, every other generated line is one ``ACCEPT`` rule per port.
"""

from __future__ import annotations

import logging
import os
import pathlib
import re
import tempfile

from ._errors import PortSpecError

logger = logging.getLogger(__name__)

HEADER = '#-GENERATED- allowed ports managed by mfw-ports'
ALLOWED_CHAIN = 'allowed-ports'
PROTOCOLS = ('tcp', 'udp', 'sctp', 'dccp')

_SKELETON = [
    HEADER,
    '#',
    '*filter',
    ':INPUT ACCEPT [0:0]',
    f':{ALLOWED_CHAIN} - [0:0]',
    f'-A INPUT -j {ALLOWED_CHAIN}',
]

_PORT_RE = re.compile(r'^(?P<first>\d+)(?::(?P<last>\d+))?$')


def parse_port_spec(spec: str) -> tuple[str, str]:
    """Split ``PORT[/PROTO]`` into ``(port, proto)``; proto defaults to tcp."""
    spec = spec.strip()
    port, _, proto = spec.partition('/')
    proto = proto.lower() or 'tcp'
    if proto not in PROTOCOLS:
        raise PortSpecError(spec, f'protocol must be one of {", ".join(PROTOCOLS)}')

    m = _PORT_RE.match(port)
    if m is None:
        raise PortSpecError(spec, 'port must be a number or a FIRST:LAST range')
    first = int(m.group('first'))
    last = int(m.group('last') or first)
    if not (1 <= first <= 65535 and 1 <= last <= 65535):
        raise PortSpecError(spec, 'port must be between 1 and 65535')
    if first > last:
        raise PortSpecError(spec, 'range start is greater than its end')

    # Canonical form, so 022 and 22 are the same entry.
    port = str(first) if m.group('last') is None else f'{first}:{last}'
    return port, proto


def port_rule(port: str, proto: str) -> str:
    return f'-A {ALLOWED_CHAIN} -p {proto} --dport {port} -j ACCEPT'


class PortRuleFile:
    """Reads and rewrites a port allowlist file, creating it on first use."""

    def __init__(self, path) -> None:
        self.path = pathlib.Path(path)
        if not self.path.exists():
            logger.info('Creating port allowlist %s', self.path)
            self._write(_SKELETON)

    def _read(self) -> list[str]:
        return self.path.read_text(encoding='utf-8').splitlines()

    def _write(self, lines: list[str]) -> None:
        # Whole-file rewrite through a temp file in the same directory.
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp'
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines) + '\n')
            os.replace(tmp_name, self.path)
        except BaseException:
            pathlib.Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _ports_of(lines: list[str]) -> list[str]:
        if len(lines) < 2:
            return []
        return [p for p in lines[1].lstrip('#').strip().split(',') if p]

    def list_ports(self) -> list[str]:
        return sorted(self._ports_of(self._read()))

    def add_port(self, spec: str) -> bool:
        """Open *spec*; returns ``False`` if it already was open."""
        port, proto = parse_port_spec(spec)
        token = f'{port}/{proto}'
        lines = self._read()
        while len(lines) < 2:
            lines.append('#')

        ports = self._ports_of(lines)
        if token in ports:
            return False

        ports = sorted({*ports, token})
        lines[1] = f'# {",".join(ports)}'
        lines.append(port_rule(port, proto))
        self._write(lines)
        logger.debug('Added %s to %s', token, self.path)
        return True

    def remove_port(self, spec: str) -> bool:
        """Close *spec*; returns ``False`` if it was not open."""
        port, proto = parse_port_spec(spec)
        token = f'{port}/{proto}'
        lines = self._read()

        ports = self._ports_of(lines)
        if token not in ports:
            return False

        ports.remove(token)
        lines[1] = f'# {",".join(sorted(ports))}' if ports else '#'
        rule = port_rule(port, proto)
        lines = [lines[0], lines[1], *(line for line in lines[2:] if line.strip() != rule)]
        self._write(lines)
        logger.debug('Removed %s from %s', token, self.path)
        return True
