# qtlib.py - Qt utility code
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

from typing import (
    Dict,
    Iterable,
    Optional,
    Tuple,
)

from .qtcore import (
    QSettings,
    Qt,
)
from .qtgui import (
    QMessageBox,
    QWidget,
)

# QSettings.value(key, type=...) raises TypeError on values of an unexpected
# type, so values are fetched untyped and coerced here.

def readBool(qs: QSettings, key: str, default: bool = False) -> bool:
    """Read the specified value from QSettings and coerce into bool"""
    v = qs.value(key, default)
    if isinstance(v, str):
        return v.strip().lower() not in ('', '0', 'false', 'no', 'off')
    return bool(v)

def readString(qs: QSettings, key: str, default: str = '') -> str:
    """Read the specified value from QSettings and coerce into string"""
    v = qs.value(key, default)
    if v is None:
        return default
    if isinstance(v, (list, tuple)):
        # an unquoted comma turns an INI value into a list
        return ', '.join(str(e) for e in v)
    return str(v)

def readGroup(qs: QSettings, group: str) -> Dict[str, str]:
    """All direct keys of the group as strings; subgroups are not visited"""
    values = {}
    qs.beginGroup(group)
    try:
        for key in qs.childKeys():
            values[key] = readString(qs, key)
    finally:
        qs.endGroup()
    return values


ButtonLabels = Iterable[Tuple[QMessageBox.StandardButton, str]]

def _noticeBox(
    icon: QMessageBox.Icon,
    title: str,
    main: str,
    text: str = '',
    labels: Optional[ButtonLabels] = None,
    parent: Optional[QWidget] = None,
) -> int:
    """Modal notice with a single acknowledge button

    ``labels`` renames standard buttons, e.g. ``[(Ok, 'Exit')]``. The
    detail ``text`` is shown verbatim since it may carry exception messages.
    """
    msg = QMessageBox(icon, title, main, QMessageBox.StandardButton.Ok,
                      parent)
    msg.setTextFormat(Qt.TextFormat.PlainText)
    for button, label in labels or ():
        msg.button(button).setText(label)
    if text:
        msg.setInformativeText(text)
    return msg.exec()

def InfoMsgBox(*args, **kargs) -> int:
    return _noticeBox(QMessageBox.Icon.Information, *args, **kargs)

def ErrorMsgBox(*args, **kargs) -> int:
    return _noticeBox(QMessageBox.Icon.Critical, *args, **kargs)
