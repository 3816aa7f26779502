"""UI layer - PySide6 application shell."""

from .main_window import MainWindow

__all__ = ["MainWindow"]
