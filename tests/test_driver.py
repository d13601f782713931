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

"""CompilerDriver tests: actions, execution and caching."""

import shutil
import subprocess
import sys

import pytest

from mfw.compiler import GeneratedScript
from mfw.core import ExecutionError, Settings, SourceNotFound, UnsupportedPlatform
from mfw.driver import CompilerDriver
from mfw.driver import _compiler_driver

RULES = """\
*filter
:INPUT ACCEPT [0:0]
-A INPUT -p tcp --dport 22 -j ACCEPT
"""


class _FakeRun:
    """Records subprocess.run calls and returns a fixed exit status."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(args)
        return subprocess.CompletedProcess(args, self.returncode)


@pytest.fixture()
def fake_run(monkeypatch):
    fake = _FakeRun()
    monkeypatch.setattr(_compiler_driver.subprocess, 'run', fake)
    monkeypatch.setattr(sys, 'platform', 'linux')
    return fake


def test_apply_executes_and_caches(write_rules, driver_for, fake_run):
    rulefile = write_rules('iptables.rule', RULES)
    driver = driver_for(rulefile, dry_run=False)

    script = driver.apply()

    assert fake_run.calls == [['bash', '-e', '-c', str(script)]]
    assert driver.cache_file == rulefile.parent / 'iptables.rule.sh'
    assert driver.cache_file.read_text() == str(script)
    assert 'iptables -t filter -A _mfw_INPUT -p tcp --dport 22 -j ACCEPT' in script.lines


def test_dry_run_does_not_execute(write_rules, driver_for, fake_run):
    rulefile = write_rules('iptables.rule', RULES)

    driver_for(rulefile, dry_run=True).apply()

    assert fake_run.calls == []
    assert (rulefile.parent / 'iptables.rule.sh').exists()


def test_no_cache(write_rules, driver_for, fake_run):
    rulefile = write_rules('iptables.rule', RULES)

    driver_for(rulefile, no_cache=True).apply()

    assert not (rulefile.parent / 'iptables.rule.sh').exists()


def test_failed_execution(write_rules, driver_for, fake_run):
    fake_run.returncode = 4
    rulefile = write_rules('iptables.rule', RULES)
    driver = driver_for(rulefile, dry_run=False)

    with pytest.raises(ExecutionError) as excinfo:
        driver.apply()

    assert excinfo.value.returncode == 4
    assert not driver.cache_file.exists()


def test_unsupported_platform(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, 'platform', 'darwin')
    driver = CompilerDriver(str(tmp_path / 'iptables.rule'))

    with pytest.raises(UnsupportedPlatform):
        driver.uninstall()


def test_clean_and_uninstall_skip_rule_file(tmp_path, fake_run):
    driver = CompilerDriver(str(tmp_path / 'missing.rule'))

    clean = driver.clean()
    uninstall = driver.uninstall()

    assert fake_run.calls == [
        ['bash', '-e', '-c', str(clean)],
        ['bash', '-e', '-c', str(uninstall)],
    ]
    assert '# Create prefixed chains and setup jumps' in clean.lines
    assert '# Create prefixed chains and setup jumps' not in uninstall.lines


def test_generate_missing_rule_file(tmp_path):
    with pytest.raises(SourceNotFound):
        CompilerDriver(str(tmp_path / 'missing.rule')).generate()


def test_settings_are_used(write_rules, fake_run):
    rulefile = write_rules('iptables.rule', RULES)
    driver = CompilerDriver(
        str(rulefile), Settings(prefix='fw_', iptables='iptables-nft', shell='sh')
    )
    driver.no_cache = True

    script = driver.apply()

    assert fake_run.calls[0][:3] == ['sh', '-e', '-c']
    assert 'iptables-nft -t filter -A fw_INPUT -p tcp --dport 22 -j ACCEPT' in script.lines


def test_verbose_prints_script(write_rules, driver_for, capsys):
    rulefile = write_rules('iptables.rule', RULES)

    script = driver_for(rulefile, verbose=True, no_cache=True).apply()

    assert capsys.readouterr().out == str(script)
    assert 'set -x' in script.lines


def test_unknown_table_warnings_are_collected(write_rules, driver_for):
    rulefile = write_rules('iptables.rule', '*security\n:mark -\n')
    driver = driver_for(rulefile)

    driver.generate()

    assert len(driver.warnings) == 1


@pytest.mark.skipif(
    not sys.platform.startswith('linux') or shutil.which('bash') is None,
    reason='needs bash on Linux',
)
@pytest.mark.parametrize(
    'lines',
    [
        ('false', 'true'),
        ('true', 'exit 3', 'true'),
        ('# Apply rules', 'set -e', 'false', 'echo unreachable'),
    ],
)
def test_failure_before_last_line_is_reported(lines):
    driver = CompilerDriver('iptables.rule')

    with pytest.raises(ExecutionError) as excinfo:
        driver.execute(GeneratedScript(lines))

    assert excinfo.value.returncode != 0


@pytest.mark.skipif(
    not sys.platform.startswith('linux') or shutil.which('bash') is None,
    reason='needs bash on Linux',
)
def test_tolerated_failures_do_not_stop_the_script():
    driver = CompilerDriver('iptables.rule')

    driver.execute(GeneratedScript(('false 2>/dev/null || true', 'true')))


def test_failing_rule_skips_cache(write_rules, driver_for, fake_run):
    fake_run.returncode = 1
    rulefile = write_rules('iptables.rule', RULES)
    driver = driver_for(rulefile, dry_run=False)

    with pytest.raises(ExecutionError):
        driver.apply()

    script = driver.script.lines
    assert script.index('set -e') == script.index('# Apply rules') + 1
    assert not driver.cache_file.exists()
