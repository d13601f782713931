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

from setuptools import find_packages, setup

setup(
    name='mfw',
    version='0.4.0',
    description='Compile include-capable rule files into namespaced iptables scripts',
    author='Linuxfabrik GmbH, Zurich/Switzerland',
    license='GPL-2.0-or-later',
    python_requires='>=3.11',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    package_data={'mfw': ['resources/templates/*/*.j2']},
    install_requires=[
        'Jinja2>=3.1',
        'PyYAML>=6.0',
    ],
    extras_require={
        'test': ['pytest>=8'],
    },
    entry_points={
        'console_scripts': [
            'mfw = mfw.cli.mfw:main',
            'mfw-ports = mfw.cli.mfw_ports:main',
        ],
    },
)
