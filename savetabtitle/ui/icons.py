"""Toggle button icons, drawn at runtime for every size in ICON_SIZES."""

from PyQt5.QtCore import QRectF, Qt
from PyQt5.QtGui import QColor, QFont, QIcon, QPainter, QPixmap

from ..watcher import ToggleState

ICON_SIZES = (16, 32, 64)


def _draw(size: int, color: str) -> QPixmap:
    pix = QPixmap(size, size)
    pix.fill(Qt.transparent)

    painter = QPainter(pix)
    try:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(color))
        radius = size / 5
        painter.drawRoundedRect(QRectF(0, 0, size, size), radius, radius)

        font = QFont()
        font.setBold(True)
        font.setPixelSize(int(size * 0.7))
        painter.setFont(font)
        painter.setPen(QColor("#ffffff"))
        painter.drawText(QRectF(0, 0, size, size), Qt.AlignCenter, "T")
    finally:
        painter.end()
    return pix


def make_icon(state: ToggleState) -> QIcon:
    """Return the icon set for a toggle state."""
    icon = QIcon()
    for size in ICON_SIZES:
        icon.addPixmap(_draw(size, state.icon_color))
    return icon
