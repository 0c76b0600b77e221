# qtcore.py - PyQt5/6 compatibility wrapper
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

"""Thin compatibility wrapper for QtCore"""

from __future__ import annotations

import os

def _detectapi() -> str:
    api = os.environ.get('VSMM_QT_API', '')
    if api in ('PyQt6', 'PyQt5'):
        return api
    try:
        import PyQt6.QtCore  # pytype: disable=import-error
        return 'PyQt6'
    except ImportError:
        return 'PyQt5'

QT_API = _detectapi()

if QT_API == 'PyQt6':
    from PyQt6.QtCore import *  # pytype: disable=import-error
elif QT_API == 'PyQt5':
    from PyQt5.QtCore import *  # pytype: disable=import-error
else:
    raise RuntimeError('unsupported Qt API: %s' % QT_API)
