"""
Minimal PyQt6 window for enhanced call blocking.

Shows one check box per switch left on the preference screen. The controller
refreshes switch states each time the window is shown; a click is handed to
the switch and the check box follows whatever the switch ends up holding.
"""

from __future__ import annotations

from typing import Dict

from PyQt6.QtWidgets import (
    QCheckBox,
    QGroupBox,
    QLabel,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from callguard.blocking_settings import EnhancedCallBlockingController, SwitchPreference
from callguard.log import get_logger
from callguard.models import BlockingOptionKey

logger = get_logger(__name__)


class CallBlockingWindow(QWidget):
    def __init__(self, controller: EnhancedCallBlockingController, parent: QWidget | None = None):
        super().__init__(parent)
        self.controller = controller
        self.controller.on_create()

        self.setWindowTitle("Enhanced call blocking")
        self.resize(420, 260)

        layout = QVBoxLayout(self)
        intro = QLabel("Block calls from:", self)
        layout.addWidget(intro)

        box = QGroupBox("Callers")
        box_layout = QVBoxLayout(box)
        self.checkboxes: Dict[BlockingOptionKey, QCheckBox] = {}
        for pref in self.controller.screen:
            cb = QCheckBox(pref.title, self)
            cb.clicked.connect(lambda checked, p=pref: self._on_clicked(p, checked))
            box_layout.addWidget(cb)
            self.checkboxes[pref.key] = cb
        layout.addWidget(box)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.refresh()

    def refresh(self) -> None:
        self.controller.on_resume()
        self._sync()

    def _sync(self) -> None:
        for pref in self.controller.screen:
            cb = self.checkboxes.get(pref.key)
            if cb is not None:
                cb.setChecked(pref.checked)

    def _on_clicked(self, pref: SwitchPreference, checked: bool) -> None:
        try:
            pref.request_change(checked)
        except Exception as e:
            logger.exception("Failed to change %s", pref.key.key)
            QMessageBox.critical(self, "Error", f"Could not save the setting: {e}")
        finally:
            self._sync()
