# i18n.py - Simple VS Manager internationalization code
#
# Copyright 2026 Simple VS Manager contributors
#
# This software may be used and distributed according to the terms of the
# GNU General Public License version 2 or any later version.

from __future__ import annotations

import gettext
import locale
import os
from typing import Optional

from . import paths

DOMAIN = 'vsmm'

def _uilanguage() -> Optional[str]:
    """Language explicitly requested for the UI, if any

    ``VSMM_LANG`` wins. On Windows the user's display language is used
    unless a posix-style locale variable is set, since gettext only
    consults those.
    """
    lang = os.environ.get('VSMM_LANG')
    if lang:
        return lang
    if os.name != 'nt':
        return None
    if any(os.environ.get(e)
           for e in ('LANGUAGE', 'LC_ALL', 'LC_MESSAGES', 'LANG')):
        return None
    try:
        import ctypes
        langid = ctypes.windll.kernel32.GetUserDefaultUILanguage()
    except (AttributeError, OSError):
        return None
    return locale.windows_locale.get(langid)

_catalog: gettext.NullTranslations = gettext.NullTranslations()

def setlanguage(lang: Optional[str] = None) -> None:
    """Load the message catalog of lang, or of the UI language if None

    Missing catalogs fall back to the untranslated messages.
    """
    global _catalog
    lang = lang or _uilanguage()
    _catalog = gettext.translation(DOMAIN, paths.get_locale_path(),
                                   languages=[lang] if lang else None,
                                   fallback=True)

setlanguage()

def _(message: str, context: str = '') -> str:
    if context:
        return _catalog.pgettext(context, message)
    return _catalog.gettext(message)
