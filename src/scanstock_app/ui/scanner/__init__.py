from scanstock_app.ui.scanner.scanner_view import ScannerController

__all__ = ["ScannerController"]
