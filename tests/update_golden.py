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

"""Recompile fixtures and update the expected output files.

Usage:
    python tests/update_golden.py                    # recompile all
    python tests/update_golden.py --fixture basic    # recompile one fixture
"""

import argparse
import sys
from pathlib import Path

# Allow running from the repo root without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / 'src'))

from mfw.core import MfwError
from mfw.driver import CompilerDriver

TESTS_DIR = Path(__file__).resolve().parent
FIXTURES_DIR = TESTS_DIR / 'fixtures'
GOLDEN_DIR = TESTS_DIR / 'expected-output' / 'ipt'


def compile_and_update(rule_path: Path) -> str | None:
    """Compile one fixture and write its expected output file.

    Returns the updated file path (relative to the repo root), or None on
    error.
    """
    driver = CompilerDriver(str(rule_path))
    driver.dry_run = True
    driver.no_cache = True
    try:
        script = driver.generate()
    except MfwError as e:
        print(f'  ERROR compiling {rule_path.name}: {e}', file=sys.stderr)
        return None

    GOLDEN_DIR.mkdir(parents=True, exist_ok=True)
    golden_path = GOLDEN_DIR / f'{rule_path.stem}.sh'
    golden_path.write_text(str(script))
    rel = str(golden_path.relative_to(TESTS_DIR.parent))
    print(f'  Updated: {rel}')
    return rel


def main():
    parser = argparse.ArgumentParser(
        description='Update expected output files for compiler regression tests.',
    )
    parser.add_argument(
        '--fixture',
        default=None,
        help='Update only the named fixture (without extension).',
    )
    args = parser.parse_args()

    if args.fixture:
        fixture = FIXTURES_DIR / f'{args.fixture}.rule'
        if not fixture.exists():
            print(f'Fixture not found: {args.fixture}.rule', file=sys.stderr)
            return 1
        fixtures = [fixture]
    else:
        # Only top-level fixtures; tests/fixtures/includes/ holds included files
        fixtures = sorted(FIXTURES_DIR.glob('*.rule'))
        if not fixtures:
            print('No fixtures found in tests/fixtures/', file=sys.stderr)
            return 1

    updated = [compile_and_update(path) for path in fixtures]
    print(f'\n{sum(1 for u in updated if u)} expected output file(s) updated.')
    return 0 if all(updated) else 1


if __name__ == '__main__':
    sys.exit(main())
