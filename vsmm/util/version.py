# version.py - Simple VS Manager version
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

__version__ = '1.0.0'

def version() -> str:
    return __version__
