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

"""Built-in chain table and the optional YAML settings file.

The settings file is a flat mapping. Every key is optional::

    prefix: _mfw_
    iptables: /usr/sbin/iptables
    shell: bash
    tables:
      filter: [INPUT, FORWARD, OUTPUT]
    teardown_tables: [security]

``tables`` replaces the default built-in chain table as a whole.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import re
import types
from collections.abc import Mapping
from enum import StrEnum

import yaml

from ._errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = '_mfw_'
_PREFIX_RE = re.compile(r'^[A-Za-z0-9_-]+$')

# Built-in chains per table, in the order iptables lists them.
DEFAULT_TABLE_SPEC: Mapping[str, tuple[str, ...]] = types.MappingProxyType(
    {
        'filter': ('INPUT', 'FORWARD', 'OUTPUT'),
        'nat': ('PREROUTING', 'INPUT', 'OUTPUT', 'POSTROUTING'),
        'mangle': ('PREROUTING', 'INPUT', 'FORWARD', 'OUTPUT', 'POSTROUTING'),
        'raw': ('PREROUTING', 'OUTPUT'),
    }
)

# Swept by teardown in addition to the tables above.
DEFAULT_TEARDOWN_TABLES: tuple[str, ...] = ('security',)


class SettingKey(StrEnum):
    """Keys accepted in the settings file."""

    PREFIX = 'prefix'
    IPTABLES = 'iptables'
    SHELL = 'shell'
    TABLES = 'tables'
    TEARDOWN_TABLES = 'teardown_tables'


def make_table_spec(tables: Mapping) -> Mapping[str, tuple[str, ...]]:
    """Freeze a table -> chains mapping into an immutable table spec."""
    spec = {}
    for table, chains in tables.items():
        if not isinstance(table, str) or not table:
            raise SettingsError(f'invalid table name: {table!r}')
        if chains is None:
            chains = ()
        if not isinstance(chains, (list, tuple)) or not all(
            isinstance(c, str) and c for c in chains
        ):
            raise SettingsError(
                f'built-in chains of table {table!r} must be a list of names'
            )
        spec[table] = tuple(chains)
    return types.MappingProxyType(spec)


@dataclasses.dataclass(frozen=True)
class Settings:
    prefix: str = DEFAULT_PREFIX
    iptables: str = 'iptables'
    shell: str = 'bash'
    table_spec: Mapping[str, tuple[str, ...]] = dataclasses.field(
        default_factory=lambda: DEFAULT_TABLE_SPEC
    )
    extra_teardown_tables: tuple[str, ...] = DEFAULT_TEARDOWN_TABLES

    @property
    def teardown_tables(self) -> list[str]:
        """Every table the teardown script sweeps, sorted."""
        return sorted(set(self.table_spec) | set(self.extra_teardown_tables))

    @classmethod
    def from_dict(cls, data: Mapping | None) -> Settings:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise SettingsError('settings must be a mapping')

        kwargs = {}
        for key, value in data.items():
            try:
                key = SettingKey(key)
            except ValueError:
                raise SettingsError(f'unknown setting: {key!r}') from None

            if key in (SettingKey.PREFIX, SettingKey.IPTABLES, SettingKey.SHELL):
                if not isinstance(value, str) or not value.strip():
                    raise SettingsError(f'{key} must be a non-empty string')
                kwargs[key.value] = value.strip()
            elif key == SettingKey.TABLES:
                if not isinstance(value, Mapping):
                    raise SettingsError(f'{key} must be a mapping')
                kwargs['table_spec'] = make_table_spec(value)
            elif key == SettingKey.TEARDOWN_TABLES:
                if isinstance(value, str) or not isinstance(value, list):
                    raise SettingsError(f'{key} must be a list of table names')
                kwargs['extra_teardown_tables'] = tuple(str(t) for t in value)

        if not _PREFIX_RE.match(kwargs.get('prefix', DEFAULT_PREFIX)):
            raise SettingsError(
                'prefix may only contain letters, digits, underscores and dashes'
            )
        return cls(**kwargs)


def load_settings(path=None) -> Settings:
    """Read a settings file; ``None`` returns the defaults."""
    if path is None:
        return Settings()

    path = pathlib.Path(path)
    logger.debug('Loading settings from %s', path)
    try:
        with pathlib.Path.open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise SettingsError(f'settings file not found: {path}') from None
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f'failed to read settings from {path}: {e}') from e

    return Settings.from_dict(data)
