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

"""CLI entry point for the mfw rule compiler."""

import argparse
import logging
import sys

import mfw
from mfw.core import MfwError, load_settings
from mfw.driver import DEFAULT_RULEFILE, CompilerDriver

__author__ = 'Linuxfabrik GmbH, Zurich/Switzerland'

DESCRIPTION = """Compiles an iptables rule file into a script that installs every chain under
a private prefix, so the generated rules can be re-applied or removed without
touching anything else."""

COMMANDS = {
    'generate': (
        ['gen', 'preview', 'build'],
        'print the generated script, shorthand for "--verbose --dry-run apply"',
    ),
    'apply': (['deploy', 'ship', 'up'], 'apply your rules'),
    'clean': (['disable', 'down'], 'bring mfw to its clean state'),
    'uninstall': ([], 'remove every mfw rule and chain'),
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='mfw',
        description=DESCRIPTION,
    )

    parser.add_argument(
        '-r',
        '--rulefile',
        default=DEFAULT_RULEFILE,
        dest='RULEFILE',
        help='path to the rule file. Default: %(default)s',
    )

    parser.add_argument(
        '-c',
        '--config',
        default=None,
        dest='CONFIG',
        help='path to a YAML settings file (prefix, tool paths, tables)',
    )

    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        dest='VERBOSE',
        help='print the script and trace its execution (set -x)',
    )

    parser.add_argument(
        '-d',
        '--dry-run',
        action='store_true',
        dest='DRY_RUN',
        help='do not execute the script',
    )

    parser.add_argument(
        '-n',
        '--no-cache',
        action='store_true',
        dest='NO_CACHE',
        help='do not write the applied script to <rulefile>.sh',
    )

    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s: v{mfw.__version__} by {__author__}',
    )

    subparsers = parser.add_subparsers(dest='COMMAND', required=True)
    for name, (aliases, help_text) in COMMANDS.items():
        subparsers.add_parser(name, aliases=aliases, help=help_text)

    args = parser.parse_args(argv)
    # argparse stores whichever alias was typed
    for name, (aliases, _) in COMMANDS.items():
        if args.COMMAND in aliases:
            args.COMMAND = name
    return args


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        format='%(levelname)s: %(message)s',
        level=logging.DEBUG if args.VERBOSE else logging.WARNING,
        stream=sys.stderr,
    )

    try:
        driver = CompilerDriver(args.RULEFILE, load_settings(args.CONFIG))
        driver.verbose = args.VERBOSE
        driver.dry_run = args.DRY_RUN
        driver.no_cache = args.NO_CACHE

        if args.COMMAND == 'generate':
            print(driver.generate(), end='')
        elif args.COMMAND == 'apply':
            driver.apply()
            if not args.DRY_RUN:
                print(f'Rules from {args.RULEFILE} applied', file=sys.stderr)
        elif args.COMMAND == 'clean':
            driver.clean()
        elif args.COMMAND == 'uninstall':
            driver.uninstall()
    except (MfwError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
