# palette.py - Apply the merged theme colors to the running application
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

from typing import Optional

from .qtgui import (
    QApplication,
    QColor,
    QPalette,
)
from .theme import ResourceChain

# resource key -> [(color group, color role), ...]
_ROLEMAP = {
    'Palette.BaseSurface.Shadowed': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Window),
        (QPalette.ColorGroup.All, QPalette.ColorRole.AlternateBase),
    ],
    'Palette.BaseSurface.Raised': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Base),
        (QPalette.ColorGroup.All, QPalette.ColorRole.ToolTipBase),
    ],
    'Palette.Interactive.Surface': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Button),
    ],
    'Palette.Interactive.DisabledSurface': [
        (QPalette.ColorGroup.Disabled, QPalette.ColorRole.Button),
        (QPalette.ColorGroup.Disabled, QPalette.ColorRole.Base),
    ],
    'Palette.Accent.Primary': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Highlight),
    ],
    'Palette.Text.Primary': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.WindowText),
        (QPalette.ColorGroup.All, QPalette.ColorRole.Text),
        (QPalette.ColorGroup.All, QPalette.ColorRole.ButtonText),
        (QPalette.ColorGroup.All, QPalette.ColorRole.ToolTipText),
        (QPalette.ColorGroup.All, QPalette.ColorRole.HighlightedText),
    ],
    'Palette.Text.Link': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Link),
    ],
    'Palette.Bevel.Highlight': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Light),
    ],
    'Palette.Bevel.Shadow': [
        (QPalette.ColorGroup.All, QPalette.ColorRole.Shadow),
    ],
}

def _rgba(color: QColor) -> str:
    return 'rgba(%d, %d, %d, %d)' % (color.red(), color.green(),
                                     color.blue(), color.alpha())

def build_palette(chain: ResourceChain,
                  base: Optional[QPalette] = None) -> QPalette:
    """Palette with every role for which the chain defines a color"""
    palette = QPalette(base) if base is not None else QPalette()
    for key, roles in _ROLEMAP.items():
        color = chain.lookup(key)
        if color is None:
            continue
        for group, role in roles:
            palette.setColor(group, role, color)
    return palette

def build_stylesheet(chain: ResourceChain) -> str:
    rules = []
    hover = chain.lookup('Palette.BaseSurface.HoverGlow')
    if hover is not None:
        rules.append('QPushButton:hover, QToolButton:hover '
                     '{ background-color: %s; }' % _rgba(hover))
    tint = chain.lookup('Palette.Overlay.HoverTint')
    if tint is not None:
        rules.append('QAbstractItemView::item:hover '
                     '{ background-color: %s; }' % _rgba(tint))
    link = chain.lookup('Palette.Text.Link')
    if link is not None:
        rules.append('QLabel[link="true"] { color: %s; }' % _rgba(link))
    return '\n'.join(rules)

def apply_to_application(app: QApplication, chain: ResourceChain) -> None:
    app.setPalette(build_palette(chain, app.palette()))
    app.setStyleSheet(build_stylesheet(chain))
