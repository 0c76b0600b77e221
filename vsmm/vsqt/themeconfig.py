# themeconfig.py - Read the user's theme selection from QSettings
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import logging
from typing import (
    Dict,
    Optional,
)

from .qtcore import QSettings
from . import qtlib
from .theme import (
    DEFAULT_THEME,
    Theme,
    default_palette,
    normalize_hex_color,
)

logger = logging.getLogger(__name__)

class ThemeSettings:
    """Theme configuration provider backed by QSettings

    Layout of the settings store::

        [appearance]
        colorTheme = Dark
        useDarkVsMode = true      ; legacy, consulted if colorTheme is unset

        [themePalette]            ; user colors of the built-in themes
        Palette.Accent.Primary = #FF0078D4

        [customThemePalette]      ; user colors of the Custom theme

        [darkVsPalette]           ; legacy, read if themePalette is empty

    Read-only; settings are written by the preferences dialog.
    """

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self._settings = settings if settings is not None else QSettings()

    def theme(self) -> Theme:
        qs = self._settings
        name = qtlib.readString(qs, 'appearance/colorTheme').strip()
        if name:
            theme = Theme.fromName(name)
            if theme is None:
                logger.warning('unknown color theme %r', name)
                return DEFAULT_THEME
            return theme
        if (qs.contains('appearance/useDarkVsMode')
            and not qtlib.readBool(qs, 'appearance/useDarkVsMode', True)):
            return Theme.LIGHT
        return DEFAULT_THEME

    def paletteOverrides(self) -> Dict[str, str]:
        """Built-in palette of the theme overlaid with the user's colors"""
        theme = self.theme()
        palette = default_palette(theme)
        if theme is Theme.CUSTOM:
            palette.update(self._readPalette('customThemePalette'))
        elif qtlib.readGroup(self._settings, 'themePalette'):
            palette.update(self._readPalette('themePalette'))
        else:
            # written by releases that only knew the dark palette
            palette.update(self._readPalette('darkVsPalette'))
        return palette

    def _readPalette(self, group: str) -> Dict[str, str]:
        colors = {}
        for key, raw in qtlib.readGroup(self._settings, group).items():
            value = normalize_hex_color(raw)
            if not key.strip() or value is None:
                logger.debug('ignoring palette entry %s/%s', group, key)
                continue
            colors[key.strip()] = value
        return colors
