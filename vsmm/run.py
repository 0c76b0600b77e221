# run.py - Simple VS Manager startup
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import logging
import os
import sys
from typing import (
    List,
    Optional,
)

from .util.i18n import _

def _setuplogging() -> None:
    if os.environ.get('VSMM_DEBUG'):
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S')

def _mainwindow(themeengine):
    # the mod list window plugs in here; until then an empty shell
    from .vsqt.qtgui import QMainWindow
    window = QMainWindow()
    window.setWindowTitle(_('Simple VS Manager'))
    window.resize(1000, 700)
    return window

def main(argv: Optional[List[str]] = None) -> int:
    _setuplogging()
    from .vsqt import qtapp
    return qtapp.QtRunner()(_mainwindow, argv)

if __name__ == '__main__':
    sys.exit(main())
