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

"""Per-pass compiler state."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class CompilationState:
    """Table context and chains seen so far in one compile pass.

    ``defined_chains`` only ever grows; a chain counts as defined from the
    statement that declares it onwards.
    """

    current_table: str | None = None
    defined_chains: set[str] = dataclasses.field(default_factory=set)
    # Unknown tables already reported, so each is warned about once.
    reported_tables: set[str] = dataclasses.field(default_factory=set)
