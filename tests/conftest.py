"""
Shared fixtures: theme resource sets on disk, a scratch resource chain and
a fake process/window platform.
"""
from __future__ import annotations

import os

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

import pytest

from vsmm.vsqt import theme, winactivate


BASE_THEME = """\
[colors]
Palette.BaseSurface.Shadowed = #FF403529
Palette.Accent.Primary = #FF479BBE
Palette.Text.Primary = #FFC8BCAE
Palette.Bevel.Shadow = #40000000
"""

BROKEN_THEME = """\
[colors]
Palette.Accent.Primary = not-a-color
"""


@pytest.fixture
def theme_dir(tmp_path):
    d = tmp_path / 'themes'
    d.mkdir()
    (d / 'Base.ini').write_text(BASE_THEME, encoding='utf-8')
    (d / 'Broken.ini').write_text(BROKEN_THEME, encoding='utf-8')
    return d


@pytest.fixture
def chain():
    return theme.ResourceChain()


@pytest.fixture
def engine(theme_dir, chain):
    return theme.ThemeEngine(chain=chain,
                             defaultlocator=str(theme_dir / 'Base.ini'))


class FakeProcess:
    def __init__(self, pid, name):
        self.pid = pid
        self._name = name

    def name(self):
        return self._name


class FakePlatform(winactivate.WindowPlatform):
    """In-memory platform: {pid: window handle or None}"""

    def __init__(self, windows, current=100, name='vsmm.exe'):
        self.windows = dict(windows)
        self.current = FakeProcess(current, name)
        self.calls = []

    def currentProcess(self):
        return self.current

    def processesByName(self, name):
        self.calls.append(('processesByName', name))
        return list(self.windows)

    def mainWindowHandle(self, pid):
        return self.windows[pid]

    def restoreWindow(self, hwnd):
        self.calls.append(('restore', hwnd))

    def foregroundWindow(self, hwnd):
        self.calls.append(('foreground', hwnd))
