from __future__ import annotations

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QWidget

from symptom_map.container import Container
from symptom_map.ui.bodymap.body_selection_wizard import BodySelectionWizard


class MainWindow(QMainWindow):
    def __init__(self, container: Container, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.container = container
        self.setWindowTitle("Symptom Map - Where do you feel it?")
        self.wizard = BodySelectionWizard(
            resolver=container.symptom_resolver_service,
            store=container.selection_store,
        )
        self.wizard.selectionChanged.connect(self._on_selection_changed)
        self.setCentralWidget(self.wizard)
        self._on_selection_changed(self.wizard.state)

    def _on_selection_changed(self, state) -> None:
        self.statusBar().showMessage(state.summary())

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.wizard.dispose()
        super().closeEvent(event)
