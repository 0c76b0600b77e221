# qtapp.py - utility to start the Qt application
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import logging
import sys
import traceback
from typing import (
    Callable,
    List,
    Optional,
)

from .qtcore import (
    QObject,
    QSettings,
    QTimer,
    Qt,
    pyqtSignal,
    pyqtSlot,
)
from .qtgui import (
    QApplication,
    QWidget,
)

from ..util import version
from ..util.i18n import _
from . import (
    instance,
    palette,
    qtlib,
    theme,
    themeconfig,
    winactivate,
)

logger = logging.getLogger(__name__)

EXIT_UNHANDLED_EXCEPTION = 3

class ExceptionCatcher(QObject):
    """Catch unhandled exception raised inside Qt event loop

    The first exception is shown to the user, then the application exits
    with EXIT_UNHANDLED_EXCEPTION.
    """

    _exceptionOccured = pyqtSignal(object, object, object)

    def __init__(self, mainapp, parent=None):
        super().__init__(parent)
        self._mainapp = mainapp
        self.errors = []
        self._shuttingdown = False

        # can be emitted by another thread; postpones it until next
        # eventloop of main (GUI) thread.
        self._exceptionOccured.connect(self.putexception,
                                       Qt.ConnectionType.QueuedConnection)

        logger.debug('setting up excepthook')
        self._origexcepthook = sys.excepthook
        sys.excepthook = self.ehook

    def release(self):
        if self._origexcepthook:
            logger.debug('restoring excepthook')
            sys.excepthook = self._origexcepthook
            self._origexcepthook = None

    def ehook(self, etype, evalue, tracebackobj):
        'Will be called by any thread, on any unhandled exception'
        if logger.isEnabledFor(logging.DEBUG):
            elist = traceback.format_exception(etype, evalue, tracebackobj)
            logger.debug(''.join(elist))
        self._exceptionOccured.emit(etype, evalue, tracebackobj)
        # not thread-safe to touch self.errors here

    @pyqtSlot(object, object, object)
    def putexception(self, etype, evalue, tracebackobj):
        'Enque exception info and display it later; run in main thread'
        if self._shuttingdown:
            logger.error('exception during shutdown: %s', evalue)
            return
        if not self.errors:
            QTimer.singleShot(10, self.excepthandler)
        self.errors.append((etype, evalue, tracebackobj))

    @pyqtSlot()
    def excepthandler(self):
        'Display exception info and quit; run in main (GUI) thread'
        if not self.errors:
            return
        self._shuttingdown = True
        etype, evalue, tracebackobj = self.errors[0]
        try:
            self._showexceptiondialog(evalue)
        except Exception:
            logger.exception('cannot show exception dialog')
        finally:
            self.errors = []

        try:
            self._mainapp.exit(EXIT_UNHANDLED_EXCEPTION)
        except Exception:
            logger.exception('cannot exit application')
            self._passthrough(etype, evalue, tracebackobj)

    def _showexceptiondialog(self, evalue):
        parent = self._mainapp.activeWindow()
        qtlib.ErrorMsgBox(_('Simple VS Manager'),
                          _('An unexpected error occurred:'),
                          str(evalue), parent=parent)

    def _passthrough(self, etype, evalue, tracebackobj):
        # leave termination to the interpreter's (or PyQt's) own hook
        hook = self._origexcepthook or sys.__excepthook__
        self.release()
        hook(etype, evalue, tracebackobj)


class QtRunner(QObject):
    """Run Qt app and hold its main window

    NOTE: This object will be instantiated before QApplication, it means
    there's a limitation on Qt's event handling.
    """

    def __init__(self,
                 platform: Optional[winactivate.WindowPlatform] = None,
                 guard: Optional[instance.InstanceGuard] = None):
        super().__init__()
        self._platform = platform
        self._guard = guard or instance.InstanceGuard()
        self._mainapp = None
        self._exccatcher = None
        self._themeengine = None
        self._mainwindow = None

    def __call__(self, windowfunc: Callable[..., QWidget],
                 argv: Optional[List[str]] = None) -> int:
        if argv is None:
            argv = sys.argv

        if self._guard.acquire() is instance.AcquireResult.ALREADY_RUNNING:
            # the notice needs an application object
            app = QApplication.instance() or QApplication(argv)
            return instance.abortLaunch(self._platform)

        try:
            QSettings.setDefaultFormat(QSettings.Format.IniFormat)
            self._mainapp = QApplication.instance() or QApplication(argv)
            self._mainapp.setApplicationName('SimpleVSManager')
            self._mainapp.setOrganizationName('SimpleVSManager')
            self._mainapp.setApplicationVersion(version.version())
            self._exccatcher = ExceptionCatcher(self._mainapp, self)

            self._themeengine = theme.ThemeEngine(parent=self)
            self._themeengine.themeChanged.connect(self._applyPalette)
            self._themeengine.initialize(themeconfig.ThemeSettings())

            self._mainwindow = windowfunc(self._themeengine)
            self._mainwindow.show()
            self._mainwindow.raise_()
            return self._mainapp.exec()
        finally:
            if self._exccatcher:
                self._exccatcher.release()
            self._guard.release()
            self._mainapp = None

    def themeEngine(self) -> Optional[theme.ThemeEngine]:
        return self._themeengine

    @pyqtSlot(str)
    def _applyPalette(self, source):
        if self._mainapp:
            palette.apply_to_application(self._mainapp,
                                         self._themeengine.chain())
