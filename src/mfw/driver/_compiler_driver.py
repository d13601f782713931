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

"""CompilerDriver: runs the operator-facing actions.

Handles:
- loading the rule file and compiling it
- executing the generated script with the configured shell
- caching the last applied script next to the rule file
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from mfw.compiler._script_compiler import ScriptCompiler
from mfw.core._errors import ExecutionError, UnsupportedPlatform
from mfw.core._loader import RuleLoader
from mfw.core._settings import Settings

if TYPE_CHECKING:
    from mfw.compiler._script import GeneratedScript

logger = logging.getLogger(__name__)

DEFAULT_RULEFILE = 'iptables.rule'


class CompilerDriver:
    """Loads, compiles and (optionally) runs mfw scripts."""

    def __init__(
        self,
        rulefile: str = DEFAULT_RULEFILE,
        settings: Settings | None = None,
    ) -> None:
        self.rulefile: str = rulefile
        self.settings: Settings = settings or Settings()

        # Options
        self.verbose: bool = False
        self.dry_run: bool = False
        self.no_cache: bool = False

        # Output
        self.script: GeneratedScript | None = None
        self.warnings: list[str] = []

    @property
    def cache_file(self) -> Path:
        return Path(f'{self.rulefile}.sh')

    def _compiler(self) -> ScriptCompiler:
        return ScriptCompiler.from_settings(self.settings, verbose=self.verbose)

    # -- Script generation --

    def generate(self) -> GeneratedScript:
        """Load the rule file and build the full apply script."""
        statements = RuleLoader().load(self.rulefile)
        logger.info('Loaded %d statements from %s', len(statements), self.rulefile)
        compiler = self._compiler()
        script = compiler.apply_script(statements)
        self.warnings = compiler.get_warnings()
        return script

    def clean_script(self) -> GeneratedScript:
        return self._compiler().clean_script()

    def uninstall_script(self) -> GeneratedScript:
        return self._compiler().teardown_script()

    # -- Actions --

    def apply(self) -> GeneratedScript:
        """Generate, run unless dry-run, then cache unless disabled."""
        script = self.generate()
        self._run(script)
        if not self.no_cache:
            self.write_cache(script)
        return script

    def clean(self) -> GeneratedScript:
        script = self.clean_script()
        self._run(script)
        return script

    def uninstall(self) -> GeneratedScript:
        script = self.uninstall_script()
        self._run(script)
        return script

    def _run(self, script: GeneratedScript) -> None:
        self.script = script
        if self.verbose:
            print(script, end='')
        if self.dry_run:
            logger.info('Dry run, not executing the script')
            return
        self.execute(script)

    def execute(self, script: GeneratedScript) -> None:
        """Run *script* with ``<shell> -e -c``; any failing command raises."""
        if not sys.platform.startswith('linux'):
            raise UnsupportedPlatform(sys.platform)

        logger.debug('Executing script with %s', self.settings.shell)
        try:
            result = subprocess.run(
                [self.settings.shell, '-e', '-c', str(script)],
                check=False,
            )
        except OSError as e:
            raise UnsupportedPlatform(
                sys.platform, f'cannot run {self.settings.shell}: {e}'
            ) from e
        if result.returncode != 0:
            raise ExecutionError(result.returncode)

    def write_cache(self, script: GeneratedScript) -> None:
        logger.debug('Writing %s', self.cache_file)
        self.cache_file.write_text(str(script), encoding='utf-8')
