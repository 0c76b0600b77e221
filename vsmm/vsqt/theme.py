# theme.py - Swappable color theme support for Simple VS Manager
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.
#
# A theme is a resource set (an .ini file under the reserved themes
# directory) merged into the process-wide resource chain. Only one theme
# resource set is merged at any time; switching removes the old one before
# the new one is installed.
#
# Color formats supported in resource sets and palette overrides:
#   - #RRGGBB    (fully opaque)
#   - #AARRGGBB
#
# Theme changes are applied live.

from __future__ import annotations

import configparser
import enum
import logging
import os
import re
import weakref
from typing import (
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Union,
)

from .qtcore import (
    QObject,
    pyqtSignal,
)
from .qtgui import QColor

from ..util import paths

logger = logging.getLogger(__name__)


class Theme(enum.Enum):
    VINTAGE_STORY = 'VintageStory'
    DARK = 'Dark'
    LIGHT = 'Light'
    SURPRISE_ME = 'SurpriseMe'
    CUSTOM = 'Custom'

    @classmethod
    def fromName(cls, name: Optional[str]) -> Optional[Theme]:
        """Look up a theme by name, ignoring case; None if unknown"""
        if not name:
            return None
        name = name.strip().lower()
        for theme in cls:
            if theme.value.lower() == name:
                return theme
        return None


DEFAULT_THEME = Theme.VINTAGE_STORY


# ----------------------------------------------------------------------
# Built-in palettes.
# Every theme shares one resource set; these are the per-theme colors
# layered onto it as palette overrides.
# ----------------------------------------------------------------------

PALETTE_KEYS = (
    'Palette.BaseSurface.Shadowed',
    'Palette.BaseSurface.Raised',
    'Palette.BaseSurface.HoverGlow',
    'Palette.Interactive.Surface',
    'Palette.Interactive.DisabledSurface',
    'Palette.Accent.Primary',
    'Palette.Text.Primary',
    'Palette.Text.Link',
    'Palette.Bevel.Highlight',
    'Palette.Bevel.Shadow',
    'Palette.Overlay.HoverTint',
)

_VINTAGE_STORY_PALETTE = {
    'Palette.BaseSurface.Shadowed': '#FF403529',
    'Palette.BaseSurface.Raised': '#FF4D3D2D',
    'Palette.BaseSurface.HoverGlow': '#FF5A4530',
    'Palette.Interactive.Surface': '#FF453525',
    'Palette.Interactive.DisabledSurface': '#FF332A21',
    'Palette.Accent.Primary': '#FF479BBE',
    'Palette.Text.Primary': '#FFC8BCAE',
    'Palette.Text.Link': '#FF479BBE',
    'Palette.Bevel.Highlight': '#80FFFFFF',
    'Palette.Bevel.Shadow': '#40000000',
    'Palette.Overlay.HoverTint': '#10FFFFFF',
}

BUILTIN_PALETTES: Dict[Theme, Dict[str, str]] = {
    Theme.VINTAGE_STORY: _VINTAGE_STORY_PALETTE,
    Theme.DARK: {
        'Palette.BaseSurface.Shadowed': '#FF202020',
        'Palette.BaseSurface.Raised': '#FF2B2B2B',
        'Palette.BaseSurface.HoverGlow': '#FF323232',
        'Palette.Interactive.Surface': '#FF2E2E2E',
        'Palette.Interactive.DisabledSurface': '#FF2A2A2A',
        'Palette.Accent.Primary': '#FF0078D4',
        'Palette.Text.Primary': '#FFEDEDED',
        'Palette.Text.Link': '#FF0F6CBD',
        'Palette.Bevel.Highlight': '#21FFFFFF',
        'Palette.Bevel.Shadow': '#26000000',
        'Palette.Overlay.HoverTint': '#14FFFFFF',
    },
    Theme.LIGHT: {
        'Palette.BaseSurface.Shadowed': '#FFD0DBE5',
        'Palette.BaseSurface.Raised': '#FFFFFFFF',
        'Palette.BaseSurface.HoverGlow': '#FFE0EAF5',
        'Palette.Interactive.Surface': '#FFE5F0FA',
        'Palette.Interactive.DisabledSurface': '#FFBAC5D0',
        'Palette.Accent.Primary': '#FF0078D4',
        'Palette.Text.Primary': '#FF000000',
        'Palette.Text.Link': '#FF0078D4',
        'Palette.Bevel.Highlight': '#80FFFFFF',
        'Palette.Bevel.Shadow': '#66000000',
        'Palette.Overlay.HoverTint': '#20000000',
    },
    # SurpriseMe was never given colors of its own
    Theme.SURPRISE_ME: _VINTAGE_STORY_PALETTE,
    Theme.CUSTOM: _VINTAGE_STORY_PALETTE,
}

def default_palette(theme: Theme) -> Dict[str, str]:
    return dict(BUILTIN_PALETTES.get(theme, _VINTAGE_STORY_PALETTE))


# ----------------------------------------------------------------------
# Color parsing
# ----------------------------------------------------------------------

_HEX_RE = re.compile(r'[0-9A-Fa-f]{6}(?:[0-9A-Fa-f]{2})?')

def parse_color(value: Optional[str]) -> Optional[QColor]:
    """Parse '#RRGGBB' or '#AARRGGBB'; None if the text is not a color"""
    if not value or not value.startswith('#'):
        return None

    digits = value[1:]
    if not _HEX_RE.fullmatch(digits):
        return None

    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        r, g, b = channels
        a = 0xFF
    else:
        a, r, g, b = channels
    return QColor(r, g, b, a)

def normalize_hex_color(value: Optional[str]) -> Optional[str]:
    """Upper-case color text with surrounding whitespace removed, or None"""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if parse_color(value) is None:
        return None
    return value.upper()


# ----------------------------------------------------------------------
# Resource sets and the resource chain
# ----------------------------------------------------------------------

class ThemeLoadError(Exception):
    """Theme resource set is missing or corrupt"""


class ResourceSet(dict):
    """Mutable key -> QColor table remembering where it was loaded from"""

    def __init__(self, source: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.source = source

    # dict defines __eq__ by contents; resource sets are identified by object
    __eq__ = object.__eq__
    __ne__ = object.__ne__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return '<ResourceSet %s (%d keys)>' % (self.source, len(self))


class ResourceChain:
    """Ordered list of merged resource sets

    Lookups search the most recently merged set first.
    """

    def __init__(self) -> None:
        self._sets: List[ResourceSet] = []

    def __iter__(self) -> Iterator[ResourceSet]:
        return iter(list(self._sets))

    def __len__(self) -> int:
        return len(self._sets)

    def __contains__(self, rset: object) -> bool:
        return any(s is rset for s in self._sets)

    def append(self, rset: ResourceSet) -> None:
        self._sets.append(rset)

    def remove(self, rset: ResourceSet) -> bool:
        for i, s in enumerate(self._sets):
            if s is rset:
                del self._sets[i]
                return True
        return False

    def lookup(self, key: str, default: Optional[QColor] = None) -> Optional[QColor]:
        for rset in reversed(self._sets):
            if key in rset:
                return rset[key]
        return default


_CHAIN = ResourceChain()

def resource_chain() -> ResourceChain:
    """The application-wide resource chain"""
    return _CHAIN

def find_theme_resource_set(chain: ResourceChain) -> Optional[ResourceSet]:
    """First merged set whose source lies under the themes directory"""
    for rset in chain:
        if paths.is_theme_path(rset.source):
            return rset
    return None


# ----------------------------------------------------------------------
# Locators and loading
# ----------------------------------------------------------------------

def default_locator() -> str:
    return os.path.join(paths.get_theme_path(), 'VintageStory.ini')

def builtin_catalog() -> Dict[Theme, str]:
    # TODO: give Dark and Light resource sets of their own once they need
    # more than palette colors
    locator = default_locator()
    return {theme: locator for theme in Theme}

def resolve_theme_locator(theme: Union[Theme, str, None],
                          catalog: Optional[Mapping[Theme, str]] = None,
                          default: Optional[str] = None) -> str:
    """Map a theme to its resource-set locator

    Unknown themes resolve to the default locator.
    """
    if default is None:
        default = default_locator()
    if catalog is None:
        catalog = builtin_catalog()
    if isinstance(theme, str):
        theme = Theme.fromName(theme)
    if theme is None:
        return default
    return catalog.get(theme, default)

def load_resource_set(locator: str) -> ResourceSet:
    """Load the resource set at locator; raise ThemeLoadError on failure"""
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # keys are case sensitive
    try:
        with open(locator, encoding='utf-8') as fp:
            parser.read_file(fp)
    except (OSError, UnicodeDecodeError, configparser.Error) as inst:
        raise ThemeLoadError('cannot read theme %s: %s' % (locator, inst))

    if not parser.has_section('colors'):
        raise ThemeLoadError('theme %s has no [colors] section' % locator)

    rset = ResourceSet(os.path.abspath(locator))
    for key, value in parser.items('colors'):
        color = parse_color(value)
        if color is None:
            raise ThemeLoadError('theme %s: invalid color %r for %s'
                                 % (locator, value, key))
        rset[key] = color
    return rset

def apply_overrides(rset: ResourceSet,
                    overrides: Optional[Mapping[str, str]]) -> int:
    """Apply palette overrides in place; return the number of keys changed

    Blank keys or values, keys unknown to the set and unparsable colors
    are skipped.
    """
    if not overrides:
        return 0
    changed = 0
    for key, value in overrides.items():
        if not isinstance(key, str) or not key.strip():
            continue
        if not isinstance(value, str) or not value.strip():
            continue
        key = key.strip()
        if key not in rset:
            continue
        color = parse_color(value.strip())
        if color is None:
            logger.debug('ignoring invalid color %r for %s', value, key)
            continue
        rset[key] = color
        changed += 1
    return changed


# ----------------------------------------------------------------------
# Theme engine
# ----------------------------------------------------------------------

class EngineState(enum.Enum):
    UNINITIALIZED = 'uninitialized'
    ACTIVE = 'active'


class ThemeEngine(QObject):
    """Owns the theme resource set merged into the resource chain"""

    # emitted with the locator of the newly merged resource set
    themeChanged = pyqtSignal(str)

    def __init__(self,
                 chain: Optional[ResourceChain] = None,
                 catalog: Optional[Mapping[Theme, str]] = None,
                 defaultlocator: Optional[str] = None,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._chain = chain if chain is not None else resource_chain()
        self._defaultlocator = defaultlocator or default_locator()
        if catalog is None:
            catalog = {theme: self._defaultlocator for theme in Theme}
        self._catalog = dict(catalog)
        self._activeref: Optional[weakref.ref] = None
        self._theme: Optional[Theme] = None

    def chain(self) -> ResourceChain:
        return self._chain

    def defaultLocator(self) -> str:
        return self._defaultlocator

    def currentTheme(self) -> Optional[Theme]:
        return self._theme

    def activeResourceSet(self) -> Optional[ResourceSet]:
        rset = self._activeref() if self._activeref else None
        if rset is not None and rset in self._chain:
            return rset
        return find_theme_resource_set(self._chain)

    def state(self) -> EngineState:
        if self.activeResourceSet() is None:
            return EngineState.UNINITIALIZED
        return EngineState.ACTIVE

    def initialize(self, provider) -> None:
        """Apply the theme selected by the configuration provider

        Configuration failures fall back to the default theme without
        overrides. Never raises.
        """
        theme = DEFAULT_THEME
        overrides: Optional[Dict[str, str]] = None
        try:
            configured = provider.theme()
            palette = provider.paletteOverrides()
            if not isinstance(configured, Theme):
                raise TypeError('unexpected theme value %r' % (configured,))
            if palette is not None and not isinstance(palette, Mapping):
                raise TypeError('unexpected palette value %r' % (palette,))
            theme = configured
            overrides = dict(palette) if palette else None
        except Exception as inst:
            logger.warning('theme configuration unavailable, using %s: %s',
                           DEFAULT_THEME.value, inst)
            theme = DEFAULT_THEME
            overrides = None

        try:
            self.applyTheme(theme, overrides)
        except Exception:
            logger.exception('failed to apply initial theme')

    def applyTheme(self,
                   theme: Union[Theme, str, None],
                   overrides: Optional[Mapping[str, str]] = None) -> bool:
        """Swap the merged theme resource set for the one of theme

        Returns True if a theme resource set was merged by this call.
        """
        locator = resolve_theme_locator(theme, self._catalog,
                                        self._defaultlocator)
        if isinstance(theme, str):
            theme = Theme.fromName(theme)
        try:
            self._swap(locator, overrides)
        except Exception as inst:
            if os.path.abspath(locator) == os.path.abspath(self._defaultlocator):
                logger.error('failed to load default theme: %s', inst)
                return False
            logger.warning('failed to load theme %s, falling back to '
                           'default: %s', locator, inst)
            try:
                self._swap(self._defaultlocator, overrides)
            except Exception as inst:
                logger.error('failed to load default theme: %s', inst)
                return False
            theme = DEFAULT_THEME
        self._theme = theme or DEFAULT_THEME
        return True

    def _swap(self, locator: str, overrides: Optional[Mapping[str, str]]) -> None:
        previous = self.activeResourceSet()
        if previous is not None:
            self._chain.remove(previous)
            self._activeref = None

        rset = load_resource_set(locator)
        changed = apply_overrides(rset, overrides)
        self._chain.append(rset)
        self._activeref = weakref.ref(rset)
        logger.debug('merged theme %s (%d overrides)', rset.source, changed)
        self.themeChanged.emit(rset.source)
