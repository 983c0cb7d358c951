"""PySide6 host for ASCIIGround: Qt frame scheduler and viewer widget."""
