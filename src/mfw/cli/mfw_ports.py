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

"""CLI entry point for the port allowlist manager."""

import argparse
import logging
import sys

import mfw
from mfw.core import MfwError, PortRuleFile

__author__ = 'Linuxfabrik GmbH, Zurich/Switzerland'

DESCRIPTION = """Maintains a generated rule file that opens single ports. Pull it into your
main rule file with an #include "ports.rule" line."""

DEFAULT_RULEFILE = './ports.rule'


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='mfw-ports',
        description=DESCRIPTION,
    )

    parser.add_argument(
        '-r',
        '--rulefile',
        default=DEFAULT_RULEFILE,
        dest='RULEFILE',
        help='path to the port allowlist file. Default: %(default)s',
    )

    parser.add_argument(
        '-V',
        '--version',
        action='version',
        version=f'%(prog)s: v{mfw.__version__} by {__author__}',
    )

    subparsers = parser.add_subparsers(dest='COMMAND', required=True)
    add = subparsers.add_parser('add', help='open a port, e.g. 8080/tcp')
    add.add_argument('PORT')
    remove = subparsers.add_parser('remove', help='close a port')
    remove.add_argument('PORT')
    subparsers.add_parser('list', help='list open ports')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(format='%(levelname)s: %(message)s', stream=sys.stderr)

    try:
        rule_file = PortRuleFile(args.RULEFILE)
        if args.COMMAND == 'add':
            rule_file.add_port(args.PORT)
            print(f'Port {args.PORT} added')
        elif args.COMMAND == 'remove':
            rule_file.remove_port(args.PORT)
            print(f'Port {args.PORT} removed')
        elif args.COMMAND == 'list':
            print(f'Open ports: {",".join(rule_file.list_ports())}')
    except (MfwError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
