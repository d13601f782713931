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

"""Shell script templates.

Operators can replace any of the shipped scripts by dropping a file with the
same name into ``~/mfw/templates/<platform>/``. Lookups fall back to the
package's ``resources/templates/<platform>/``, so an override of
``uninstall.sh.j2`` is also picked up by ``clean.sh.j2``, which includes it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

logger = logging.getLogger(__name__)

# One environment per platform; jinja2 caches the compiled templates in it.
_environments: dict[str, jinja2.Environment] = {}


def user_template_dir(platform: str) -> Path:
    return Path.home() / 'mfw' / 'templates' / platform


def get_environment(platform: str) -> jinja2.Environment:
    """Return the shared template environment for *platform*."""
    env = _environments.get(platform)
    if env is None:
        override = user_template_dir(platform)
        logger.debug('Template overrides for %s are read from %s', platform, override)
        env = jinja2.Environment(
            loader=jinja2.ChoiceLoader(
                [
                    jinja2.FileSystemLoader(str(override)),
                    jinja2.PackageLoader('mfw', f'resources/templates/{platform}'),
                ]
            ),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        _environments[platform] = env
    return env


def render_template(platform: str, name: str, context: dict) -> str:
    """Render the script template *name* with *context*."""
    return get_environment(platform).get_template(name).render(context)
