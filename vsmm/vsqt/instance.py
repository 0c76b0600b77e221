# instance.py - Allow only one running Simple VS Manager per session
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import enum
import logging
import os
from typing import Optional

from .qtcore import QLockFile
from .qtgui import (
    QMessageBox,
    QWidget,
)

from ..util import paths
from ..util.i18n import _
from . import (
    qtlib,
    winactivate,
)

logger = logging.getLogger(__name__)

SINGLE_INSTANCE_NAME = 'VintageStoryModManager.SingleInstance'

EXIT_OK = 0


class AcquireResult(enum.Enum):
    ACQUIRED = 'acquired'
    ALREADY_RUNNING = 'already-running'


def lockPath(name: str = SINGLE_INSTANCE_NAME,
             lockdir: Optional[str] = None) -> str:
    return os.path.join(lockdir or paths.get_lock_dir(),
                        '%s-%s.lock' % (name, paths.get_user()))


class InstanceGuard:
    """Process-wide exclusive lock held for the lifetime of the owner

    The lock is a QLockFile; if the owner dies without releasing it, the
    next acquire() detects the stale lock and takes it over.
    """

    def __init__(self, name: str = SINGLE_INSTANCE_NAME,
                 lockdir: Optional[str] = None) -> None:
        self._path = lockPath(name, lockdir)
        self._lock: Optional[QLockFile] = None
        self._owner = False

    def path(self) -> str:
        return self._path

    def ownsLock(self) -> bool:
        return self._owner

    def acquire(self) -> AcquireResult:
        assert not self._owner, 'instance lock is not re-entrant'
        lock = QLockFile(self._path)
        if lock.tryLock(0):
            self._lock = lock
            self._owner = True
            logger.debug('acquired instance lock %s', self._path)
            return AcquireResult.ACQUIRED
        logger.debug('instance lock %s is held by another process (%s)',
                     self._path, lock.error())
        return AcquireResult.ALREADY_RUNNING

    def release(self) -> None:
        if not self._owner or self._lock is None:
            return
        lock, self._lock = self._lock, None
        self._owner = False
        lock.unlock()
        logger.debug('released instance lock %s', self._path)


def notifyAlreadyRunning(parent: Optional[QWidget] = None) -> None:
    qtlib.InfoMsgBox(_('Simple VS Manager'),
                     _('Simple VS Manager is already running.'),
                     _('This launch will be closed and the running window '
                       'brought to the front.'),
                     labels=[(QMessageBox.StandardButton.Ok, _('Exit'))],
                     parent=parent)

def activateExistingInstance(
        platform: Optional[winactivate.WindowPlatform] = None) -> bool:
    """Restore and foreground the window of another running instance

    Best effort; returns True if a window was asked to come forward.
    """
    if platform is None:
        platform = winactivate.platform()
    try:
        current = platform.currentProcess()
        for pid in platform.processesByName(current.name()):
            if pid == current.pid:
                continue
            hwnd = platform.mainWindowHandle(pid)
            if not hwnd:
                continue
            platform.restoreWindow(hwnd)
            platform.foregroundWindow(hwnd)
            logger.debug('activated window %#x of process %d', hwnd, pid)
            return True
        logger.debug('no window of a running instance found')
    except Exception as inst:
        logger.debug('cannot activate running instance: %s', inst)
    return False

def abortLaunch(platform: Optional[winactivate.WindowPlatform] = None,
                parent: Optional[QWidget] = None) -> int:
    """Tell the user, hand over to the running instance; return exit code"""
    notifyAlreadyRunning(parent)
    activateExistingInstance(platform)
    return EXIT_OK
