"""
QApplication factory. Identity strings here also name the QSettings file.
"""
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

ORG_ID = "solargrid"
APP_ID = "solargrid"
ORG_DOMAIN = "solargrid.local"

VISIBLE_APP_NAME = "Solar Panel Grid"


def create_app() -> QApplication:
    """Build the single QApplication with HiDPI on and INI-backed settings."""
    # Must be set before the QApplication exists
    for var in ("QT_ENABLE_HIGHDPI_SCALING", "QT_AUTO_SCREEN_SCALE_FACTOR"):
        os.environ.setdefault(var, "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(sys.argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    return app
