from PyQt5.QtWidgets import QApplication


class QtClipboard:
    """Put plain text on the system clipboard through Qt."""

    def set_text(self, text: str) -> None:
        QApplication.clipboard().setText(text)
