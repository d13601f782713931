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

"""Shared pytest fixtures for loader, compiler and driver tests."""

import textwrap
from pathlib import Path

import pytest

from mfw.compiler import ScriptCompiler
from mfw.core import Statement
from mfw.driver import CompilerDriver

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
EXPECTED_OUTPUT_DIR = Path(__file__).parent / 'expected-output'


def statements(text: str) -> list[Statement]:
    """Parse *text* line by line, without include expansion."""
    return [Statement.parse(line) for line in textwrap.dedent(text).splitlines()]


def discover_test_cases(platform: str) -> list[str]:
    """Return the fixture names that have an expected output file."""
    platform_dir = EXPECTED_OUTPUT_DIR / platform
    if not platform_dir.exists():
        return []
    return [
        expected.stem
        for expected in sorted(platform_dir.glob('*.sh'))
        if (FIXTURES_DIR / f'{expected.stem}.rule').exists()
    ]


@pytest.fixture()
def write_rules(tmp_path):
    """Return a helper that writes a (dedented) rule file below tmp_path."""

    def _inner(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding='utf-8')
        return path

    return _inner


@pytest.fixture()
def compiler():
    return ScriptCompiler()


@pytest.fixture()
def driver_for():
    """Return a helper that builds a dry-run driver for a rule file."""

    def _inner(rulefile: Path, **options) -> CompilerDriver:
        driver = CompilerDriver(str(rulefile))
        driver.dry_run = options.get('dry_run', True)
        driver.no_cache = options.get('no_cache', False)
        driver.verbose = options.get('verbose', False)
        return driver

    return _inner
