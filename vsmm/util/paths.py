# paths.py - Simple VS Manager path utilities
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import getpass
import os
import sys
import tempfile
from typing import Optional

# Name of the reserved directory holding every theme resource set
THEME_DIRNAME = 'themes'

def get_prog_root() -> str:
    if getattr(sys, 'frozen', False):
        return getattr(sys, '_MEIPASS', os.path.dirname(sys.executable))
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

def get_theme_path() -> str:
    return os.path.join(get_prog_root(), THEME_DIRNAME)

def get_locale_path() -> str:
    return os.path.join(get_prog_root(), 'locale')

def get_lock_dir() -> str:
    return tempfile.gettempdir()

def get_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):  # no passwd entry, no env vars
        return 'default'

def is_theme_path(path: Optional[str]) -> bool:
    """True if path lies somewhere under a reserved theme directory"""
    if not path:
        return False
    parts = os.path.normcase(os.path.normpath(path)).split(os.sep)
    return THEME_DIRNAME in parts[:-1]
