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

"""ScriptCompiler: turns rule statements into a namespaced iptables script.

Every chain the operator declares is created as ``<prefix><name>``, and for
each built-in chain ``C`` of each table the bootstrap section creates
``<prefix>C`` plus a jump from ``C`` into it. Rule bodies are rewritten so
that references to declared chains point at the prefixed names. Everything
mfw installs can therefore be found, and removed, by its prefix alone.

The compiler only produces text. Running the script is left to the
``CompilerDriver``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from mfw.compiler._base import BaseCompiler
from mfw.compiler._rewrite import rewrite_chains
from mfw.compiler._script import GeneratedScript
from mfw.compiler._state import CompilationState
from mfw.compiler._templates import render_template
from mfw.core._errors import (
    MalformedChainDeclaration,
    MalformedTableSwitch,
    UndefinedTableContext,
)
from mfw.core._settings import (
    DEFAULT_PREFIX,
    DEFAULT_TABLE_SPEC,
    DEFAULT_TEARDOWN_TABLES,
    Settings,
)
from mfw.core._statement import Statement, StatementKind

logger = logging.getLogger(__name__)

PLATFORM = 'iptables'


class ScriptCompiler(BaseCompiler):
    """Compiles statements into teardown, bootstrap and rule commands."""

    def __init__(
        self,
        table_spec: Mapping[str, tuple[str, ...]] = DEFAULT_TABLE_SPEC,
        prefix: str = DEFAULT_PREFIX,
        iptables: str = 'iptables',
        teardown_tables: Iterable[str] = DEFAULT_TEARDOWN_TABLES,
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self.table_spec = table_spec
        self.prefix = prefix
        self.iptables = iptables
        self.teardown_tables = sorted(set(table_spec) | set(teardown_tables))
        self.verbose = verbose

    @classmethod
    def from_settings(cls, settings: Settings, verbose: bool = False) -> ScriptCompiler:
        return cls(
            table_spec=settings.table_spec,
            prefix=settings.prefix,
            iptables=settings.iptables,
            teardown_tables=settings.extra_teardown_tables,
            verbose=verbose,
        )

    # -- Rule section --

    def compile(self, statements: Iterable[Statement]) -> GeneratedScript:
        """Translate *statements* into iptables commands, in order.

        Raises a ``CompileError`` subclass on the first malformed statement;
        nothing is returned in that case.
        """
        self.reset()
        state = CompilationState()
        lines: list[str] = []

        for stmt in statements:
            if stmt.kind == StatementKind.COMMENT:
                lines.append(stmt.text)
            elif stmt.kind == StatementKind.TABLE:
                self._switch_table(state, stmt)
            elif stmt.kind == StatementKind.CHAIN:
                lines.extend(self._declare_chain(state, stmt))
            elif stmt.kind == StatementKind.RULE:
                table = self._require_table(state, stmt)
                body = rewrite_chains(stmt.text, state.defined_chains, self.prefix)
                lines.append(f'{self.iptables} -t {table} {body}')

        return GeneratedScript.from_lines(lines)

    def _switch_table(self, state: CompilationState, stmt: Statement) -> None:
        table = stmt.table_name
        if not table:
            self.abort(MalformedTableSwitch('table switch without a table name', stmt))
        state.current_table = table
        if table not in self.table_spec and table not in state.reported_tables:
            state.reported_tables.add(table)
            self.warning(
                f'unknown table {table!r}: every chain declared in it is '
                f'created as a {self.prefix} chain',
                stmt,
            )

    def _require_table(self, state: CompilationState, stmt: Statement) -> str:
        if state.current_table is None:
            self.abort(
                UndefinedTableContext(
                    f'{stmt.text!r} appears before any *table line', stmt
                )
            )
        return state.current_table

    def is_builtin_chain(self, table: str, chain: str) -> bool:
        return chain in self.table_spec.get(table, ())

    def _declare_chain(self, state: CompilationState, stmt: Statement) -> list[str]:
        table = self._require_table(state, stmt)
        chain = stmt.chain_name
        if not chain:
            self.abort(
                MalformedChainDeclaration(
                    f'chain declaration without a chain name: {stmt.text!r}', stmt
                )
            )

        lines = []
        if not self.is_builtin_chain(table, chain) and chain not in state.defined_chains:
            name = f'{self.prefix}{chain}'
            logger.debug('Creating chain %s in table %s', name, table)
            lines = [
                f'{self.iptables} -t {table} -F {name} 2>/dev/null || true',
                f'{self.iptables} -t {table} -X {name} 2>/dev/null || true',
                f'{self.iptables} -t {table} -N {name}',
            ]
        state.defined_chains.add(chain)
        return lines

    # -- Script assembly --

    def _render(self, template_name: str) -> GeneratedScript:
        text = render_template(
            PLATFORM,
            template_name,
            {
                'iptables': self.iptables,
                'prefix': self.prefix,
                'verbose': self.verbose,
                'teardown_tables': self.teardown_tables,
                'builtin_chains': [
                    (table, self.table_spec[table]) for table in sorted(self.table_spec)
                ],
            },
        )
        return GeneratedScript.from_text(text)

    def teardown_script(self) -> GeneratedScript:
        """Remove every prefixed chain and every jump into one."""
        return self._render('uninstall.sh.j2')

    def clean_script(self) -> GeneratedScript:
        """Teardown, then recreate the prefixed copies of the built-in chains."""
        return self._render('clean.sh.j2')

    def apply_script(self, statements: Iterable[Statement]) -> GeneratedScript:
        """Clean script followed by the compiled rules, stopping at the first failure."""
        rules = self.compile(statements)
        return (
            self.clean_script()
            + GeneratedScript(('', '# Apply rules', 'set -e'))
            + rules
        )
