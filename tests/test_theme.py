from __future__ import annotations

import os

import pytest

from vsmm.vsqt import theme
from vsmm.vsqt.qtgui import QColor
from vsmm.vsqt.theme import (
    ResourceChain,
    ResourceSet,
    Theme,
    ThemeLoadError,
)


# -------------------- color parsing

def test_parse_color_rgb_is_opaque():
    c = theme.parse_color('#FF8800')
    assert c is not None
    assert (c.red(), c.green(), c.blue(), c.alpha()) == (0xFF, 0x88, 0x00, 0xFF)


def test_parse_color_argb_reads_alpha_first():
    c = theme.parse_color('#80FF8800')
    assert c is not None
    assert (c.alpha(), c.red(), c.green(), c.blue()) == (0x80, 0xFF, 0x88, 0x00)


def test_parse_color_is_case_insensitive():
    assert theme.parse_color('#ff8800') == theme.parse_color('#FF8800')


def test_parse_color_is_literal():
    assert theme.parse_color('  #102030 ') is None
    assert theme.parse_color('#102030') == QColor(0x10, 0x20, 0x30)


@pytest.mark.parametrize('text', [
    'FF8800',      # no leading '#'
    '#FF88',       # wrong length
    '#FF88001',
    '#GGHHII',     # not hex
    '#',
    '',
    None,
    '#0xFF88',
    '#FF_880',
    '#+F8800',
    '#FF 880',
    'rgb(1, 2, 3)',
])
def test_parse_color_rejects(text):
    assert theme.parse_color(text) is None


def test_normalize_hex_color():
    assert theme.normalize_hex_color(' #80ff8800') == '#80FF8800'
    assert theme.normalize_hex_color('#ff8800') == '#FF8800'
    assert theme.normalize_hex_color('red') is None


# -------------------- themes and locators

def test_theme_from_name_ignores_case():
    assert Theme.fromName('dark') is Theme.DARK
    assert Theme.fromName(' SurpriseMe ') is Theme.SURPRISE_ME
    assert Theme.fromName('Solarized') is None
    assert Theme.fromName('') is None


def test_every_theme_resolves_to_default_locator():
    default = theme.default_locator()
    for t in Theme:
        assert theme.resolve_theme_locator(t) == default


def test_unknown_theme_resolves_to_default_locator():
    assert theme.resolve_theme_locator('NoSuchTheme', {}, 'base.ini') == 'base.ini'
    assert theme.resolve_theme_locator(None, {}, 'base.ini') == 'base.ini'
    assert theme.resolve_theme_locator(Theme.DARK, {}, 'base.ini') == 'base.ini'


def test_resolve_uses_catalog():
    catalog = {Theme.DARK: 'dark.ini'}
    assert theme.resolve_theme_locator('dark', catalog, 'base.ini') == 'dark.ini'
    assert theme.resolve_theme_locator(Theme.LIGHT, catalog, 'base.ini') == 'base.ini'


def test_default_palette_is_a_copy():
    palette = theme.default_palette(Theme.DARK)
    palette['Palette.Accent.Primary'] = '#FF000000'
    assert theme.BUILTIN_PALETTES[Theme.DARK]['Palette.Accent.Primary'] == '#FF0078D4'


def test_builtin_palettes_are_complete_and_valid():
    for t in Theme:
        palette = theme.default_palette(t)
        assert set(palette) == set(theme.PALETTE_KEYS), t
        for value in palette.values():
            assert theme.parse_color(value) is not None


def test_surprise_me_and_custom_share_vintage_story_palette():
    vs = theme.default_palette(Theme.VINTAGE_STORY)
    assert theme.default_palette(Theme.SURPRISE_ME) == vs
    assert theme.default_palette(Theme.CUSTOM) == vs


def test_shipped_default_theme_matches_builtin_palette():
    rset = theme.load_resource_set(theme.default_locator())
    assert set(rset) == set(theme.PALETTE_KEYS)
    for key, value in theme.default_palette(Theme.VINTAGE_STORY).items():
        assert rset[key] == theme.parse_color(value), key


# -------------------- loading

def test_load_resource_set(theme_dir):
    rset = theme.load_resource_set(str(theme_dir / 'Base.ini'))
    assert rset.source == os.path.abspath(str(theme_dir / 'Base.ini'))
    assert rset['Palette.Accent.Primary'] == QColor(0x47, 0x9B, 0xBE)
    assert rset['Palette.Bevel.Shadow'].alpha() == 0x40
    # keys keep their case
    assert 'palette.accent.primary' not in rset


def test_load_missing_resource_set_raises(theme_dir):
    with pytest.raises(ThemeLoadError):
        theme.load_resource_set(str(theme_dir / 'Missing.ini'))


def test_load_corrupt_resource_set_raises(theme_dir):
    with pytest.raises(ThemeLoadError):
        theme.load_resource_set(str(theme_dir / 'Broken.ini'))


def test_load_resource_set_without_colors_raises(theme_dir):
    path = theme_dir / 'Empty.ini'
    path.write_text('[other]\nkey = #FFFFFF\n', encoding='utf-8')
    with pytest.raises(ThemeLoadError):
        theme.load_resource_set(str(path))


def test_load_unparsable_ini_raises(theme_dir):
    path = theme_dir / 'Garbage.ini'
    path.write_text('Palette.Text.Primary = #FFFFFF\n', encoding='utf-8')
    with pytest.raises(ThemeLoadError):
        theme.load_resource_set(str(path))


# -------------------- overrides

def test_apply_overrides_skips_bad_entries():
    rset = ResourceSet('themes/x.ini', {
        'Palette.Text.Primary': QColor(1, 2, 3),
        'Palette.Text.Link': QColor(4, 5, 6),
    })
    changed = theme.apply_overrides(rset, {
        'Palette.Text.Primary': '#80FF8800',
        ' Palette.Text.Link ': 'bogus',
        'Palette.Unknown': '#FFFFFF',
        '': '#FFFFFF',
        '   ': '#FFFFFF',
        'Palette.Text.Link\t': '',
    })
    assert changed == 1
    assert rset['Palette.Text.Primary'] == QColor(0xFF, 0x88, 0x00, 0x80)
    assert rset['Palette.Text.Link'] == QColor(4, 5, 6)
    assert 'Palette.Unknown' not in rset


def test_apply_overrides_trims_keys_and_values():
    rset = ResourceSet('themes/x.ini', {'Palette.Text.Link': QColor(4, 5, 6)})
    assert theme.apply_overrides(rset, {' Palette.Text.Link ': ' #010203\t'}) == 1
    assert rset['Palette.Text.Link'] == QColor(1, 2, 3)


def test_apply_no_overrides():
    rset = ResourceSet('themes/x.ini', {'k': QColor(1, 2, 3)})
    assert theme.apply_overrides(rset, None) == 0
    assert theme.apply_overrides(rset, {}) == 0


# -------------------- resource chain

def test_chain_lookup_prefers_latest_set():
    chain = ResourceChain()
    first = ResourceSet('a.ini', {'k': QColor(1, 1, 1)})
    second = ResourceSet('b.ini', {'k': QColor(2, 2, 2)})
    chain.append(first)
    chain.append(second)
    assert chain.lookup('k') == QColor(2, 2, 2)
    assert chain.lookup('missing') is None


def test_chain_removes_by_identity():
    chain = ResourceChain()
    a = ResourceSet('a.ini', {'k': QColor(1, 1, 1)})
    twin = ResourceSet('a.ini', {'k': QColor(1, 1, 1)})
    chain.append(a)
    assert twin not in chain
    assert not chain.remove(twin)
    assert chain.remove(a)
    assert len(chain) == 0


def test_find_theme_resource_set_matches_theme_directory(tmp_path):
    chain = ResourceChain()
    controls = ResourceSet(str(tmp_path / 'controls' / 'Buttons.ini'))
    named = ResourceSet(str(tmp_path / 'themes.ini'))
    current = ResourceSet(str(tmp_path / 'themes' / 'Base.ini'))
    chain.append(controls)
    chain.append(named)
    chain.append(current)
    assert theme.find_theme_resource_set(chain) is current


def test_find_theme_resource_set_none():
    chain = ResourceChain()
    chain.append(ResourceSet('styles/Buttons.ini'))
    assert theme.find_theme_resource_set(chain) is None
