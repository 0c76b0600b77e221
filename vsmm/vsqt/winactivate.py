# winactivate.py - Find and raise the window of another process
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import os
import sys
from typing import (
    List,
    Optional,
    Sequence,
)

import psutil

def entryPoint(cmdline: Sequence[str]) -> Optional[str]:
    """Script or module run by an interpreter command line

    None for inline code (-c), an interactive interpreter or an empty
    command line. Scripts compare by base name without extension, so
    'vsmm', 'vsmm.exe' and 'vsmm-script.py' are one program.
    """
    args = list(cmdline[1:])
    while args and args[0].startswith('-'):
        opt = args.pop(0)
        if opt == '-m':
            return '-m ' + args[0] if args else None
        if opt == '-c':
            return None
    if not args:
        return None
    root = os.path.splitext(os.path.basename(args[0]))[0]
    if root.endswith('-script'):
        root = root[:-len('-script')]
    return os.path.normcase(root)

class WindowPlatform:
    """Process and window operations needed to forward activation

    Window handles are opaque integers; 0 and None mean "no window".
    """

    def currentProcess(self) -> psutil.Process:
        raise NotImplementedError

    def processesByName(self, name: str) -> List[int]:
        raise NotImplementedError

    def mainWindowHandle(self, pid: int) -> Optional[int]:
        raise NotImplementedError

    def restoreWindow(self, hwnd: int) -> None:
        raise NotImplementedError

    def foregroundWindow(self, hwnd: int) -> None:
        raise NotImplementedError


class DesktopWindowPlatform(WindowPlatform):
    """psutil for processes, user32 for windows (Windows only)"""

    SW_RESTORE = 9
    GW_OWNER = 4
    ASFW_ANY = -1

    def currentProcess(self) -> psutil.Process:
        return psutil.Process(os.getpid())

    def processesByName(self, name: str) -> List[int]:
        """Pids of processes running the same program as this one

        A frozen build is identified by its executable name alone. From
        source the executable is the interpreter, so the script or module
        it runs must match as well.
        """
        name = os.path.normcase(name)
        entry = None
        if not getattr(sys, 'frozen', False):
            entry = entryPoint(self.currentProcess().cmdline())
            if entry is None:
                return []
        pids = []
        for proc in psutil.process_iter(['pid', 'name', 'cmdline']):
            pname = proc.info.get('name')
            if not pname or os.path.normcase(pname) != name:
                continue
            if (entry is not None
                and entryPoint(proc.info.get('cmdline') or ()) != entry):
                continue
            pids.append(proc.info['pid'])
        return pids

    if os.name == 'nt':

        def mainWindowHandle(self, pid: int) -> Optional[int]:
            """First visible, unowned top-level window of pid"""
            import ctypes
            from ctypes import wintypes

            user32 = ctypes.windll.user32  # pytype: disable=module-attr
            found = []

            @ctypes.WINFUNCTYPE(wintypes.BOOL, wintypes.HWND, wintypes.LPARAM)
            def callback(hwnd, lparam):
                owner = wintypes.DWORD()
                user32.GetWindowThreadProcessId(hwnd, ctypes.byref(owner))
                if (owner.value == pid and user32.IsWindowVisible(hwnd)
                    and not user32.GetWindow(hwnd, self.GW_OWNER)):
                    found.append(hwnd)
                    return False
                return True

            user32.EnumWindows(callback, 0)
            if not found:
                return None
            return int(found[0])

        def restoreWindow(self, hwnd: int) -> None:
            import ctypes
            from ctypes import wintypes
            ctypes.windll.user32.ShowWindow(  # pytype: disable=module-attr
                wintypes.HWND(hwnd), self.SW_RESTORE)

        def foregroundWindow(self, hwnd: int) -> None:
            import ctypes
            from ctypes import wintypes
            user32 = ctypes.windll.user32  # pytype: disable=module-attr
            # the target may only take the foreground if we allow it
            user32.AllowSetForegroundWindow(self.ASFW_ANY)
            if not user32.SetForegroundWindow(wintypes.HWND(hwnd)):
                raise OSError('SetForegroundWindow failed for %#x' % hwnd)

    else:
        # no portable notion of another process' main window

        def mainWindowHandle(self, pid: int) -> Optional[int]:
            return None

        def restoreWindow(self, hwnd: int) -> None:
            pass

        def foregroundWindow(self, hwnd: int) -> None:
            pass


_platform: Optional[WindowPlatform] = None

def platform() -> WindowPlatform:
    global _platform
    if _platform is None:
        _platform = DesktopWindowPlatform()
    return _platform
