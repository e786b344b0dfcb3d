from __future__ import annotations

from PySide6.QtWidgets import QLabel, QSizePolicy

STATUS_COLORS = {
    "success": "#9AD8A6",
    "warning": "#F4D58D",
    "error": "#E18A85",
    "info": "#7A7A78",
}


def _refresh_status_style(label: QLabel) -> None:
    style = label.style()
    style.unpolish(label)
    style.polish(label)
    label.update()


def set_status(label: QLabel, message: str, level: str = "info") -> None:
    if not message:
        clear_status(label)
        return
    normalized_level = level if level in STATUS_COLORS else "info"
    label.setText(message)
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", normalized_level)
    label.setStyleSheet(f"color: {STATUS_COLORS[normalized_level]};")
    label.setWordWrap(True)
    label.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Preferred)
    _refresh_status_style(label)


def clear_status(label: QLabel) -> None:
    label.clear()
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", "")
    label.setStyleSheet("")
    _refresh_status_style(label)
