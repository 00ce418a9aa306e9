#!/usr/bin/env python3
"""
vttthumbs Desktop UI - Scrub a thumbnail track and inspect what it resolves to.

Usage:
    python vttthumbs_gui.py

Logs are written to: ~/.vttthumbs/gui.log
"""

import logging
import sys
import threading
import traceback
from datetime import datetime
from pathlib import Path

# Setup logging before other imports
LOG_DIR = Path.home() / ".vttthumbs"
LOG_DIR.mkdir(exist_ok=True)
LOG_FILE = LOG_DIR / "gui.log"

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[
        logging.FileHandler(LOG_FILE),
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)
logger.info(f"=== vttthumbs GUI started at {datetime.now().isoformat()} ===")

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QFileDialog, QProgressBar, QMessageBox, QFrame, QSlider
)
from PyQt5.QtCore import Qt, pyqtSignal, QObject
from PyQt5.QtGui import QDragEnterEvent, QDropEvent, QFont

from vttthumbs import (
    PAGE_LOCATION,
    ThumbnailTrack,
    css_for_image,
    format_timestamp,
    generate_preview,
    holder_offset,
    time_at,
)
from vttthumbs.constants import SLIDER_STEPS

logger.info("All imports successful")

DROP_ZONE_STYLE = """
    DropZone {
        border: 2px dashed #888;
        border-radius: 8px;
        background: #f5f5f5;
    }
    DropZone:hover {
        border-color: #4a90d9;
        background: #e8f0fe;
    }
"""


class WorkerSignals(QObject):
    """Signals for thread communication."""
    status = pyqtSignal(str)
    loaded = pyqtSignal(int)
    finished = pyqtSignal(str)
    error = pyqtSignal(str)


class DropZone(QFrame):
    """Drag and drop area for track files."""

    fileDropped = pyqtSignal(Path)

    def __init__(self):
        super().__init__()
        self.setAcceptDrops(True)
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Sunken)
        self.setMinimumHeight(80)
        self.setStyleSheet(DROP_ZONE_STYLE)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        self.label = QLabel("📁 Drop .vtt thumbnail track here\nor click Browse")
        self.label.setAlignment(Qt.AlignCenter)
        self.label.setStyleSheet("color: #666; font-size: 14px;")
        layout.addWidget(self.label)

    def dragEnterEvent(self, event: QDragEnterEvent):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event: QDropEvent):
        urls = event.mimeData().urls()
        if urls:
            path = Path(urls[0].toLocalFile())
            if path.suffix.lower() == '.vtt':
                self.fileDropped.emit(path)

    def setFile(self, path: Path):
        self.label.setText(f"🎞️ {path.name}")
        self.label.setStyleSheet("color: #2e7d32; font-size: 14px; font-weight: bold;")


class ThumbsWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.track_path = None
        self.processing = False
        self.track = ThumbnailTrack(page_location=PAGE_LOCATION)
        self.signals = WorkerSignals()

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        self.setWindowTitle("vttthumbs")
        self.setFixedSize(520, 380)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        title = QLabel("🎞️ vttthumbs")
        title.setFont(QFont("", 20, QFont.Bold))
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        self.drop_zone = DropZone()
        self.drop_zone.fileDropped.connect(self._set_track)
        layout.addWidget(self.drop_zone)

        btn_layout = QHBoxLayout()
        browse_btn = QPushButton("Browse...")
        browse_btn.clicked.connect(self._browse_file)
        btn_layout.addWidget(browse_btn)

        self.preview_btn = QPushButton("👁️ HTML Preview")
        self.preview_btn.setEnabled(False)
        self.preview_btn.clicked.connect(self._preview)
        btn_layout.addWidget(self.preview_btn)
        layout.addLayout(btn_layout)

        # Scrubber
        self.slider = QSlider(Qt.Horizontal)
        self.slider.setRange(0, SLIDER_STEPS)
        self.slider.setEnabled(False)
        self.slider.valueChanged.connect(self._on_scrub)
        layout.addWidget(self.slider)

        self.time_label = QLabel(format_timestamp(0))
        self.time_label.setStyleSheet("font-family: monospace;")
        layout.addWidget(self.time_label)

        self.image_label = QLabel("")
        self.image_label.setWordWrap(True)
        self.image_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.image_label)

        self.status_label = QLabel("Select a thumbnail track to begin")
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet("color: #666;")
        layout.addWidget(self.status_label)

        self.progress = QProgressBar()
        self.progress.setRange(0, 0)  # Indeterminate
        self.progress.setVisible(False)
        layout.addWidget(self.progress)

    def _connect_signals(self):
        self.signals.status.connect(self._on_status)
        self.signals.loaded.connect(self._on_loaded)
        self.signals.finished.connect(self._on_finished)
        self.signals.error.connect(self._on_error)

    def _browse_file(self):
        if self.processing:
            return

        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Thumbnail Track",
            "",
            "WebVTT Files (*.vtt);;All Files (*)"
        )
        if path:
            self._set_track(Path(path))

    def _set_track(self, path: Path):
        if self.processing:
            return

        self.track_path = path
        self.drop_zone.setFile(path)
        src = path.absolute().as_uri()
        logger.info(f"Loading track: {src}")

        def task():
            try:
                self.signals.status.emit(f"Loading {path.name}...")
                cues = self.track.set_source(src)
                self.signals.loaded.emit(len(cues))
            except Exception as e:
                logger.error(f"Track load failed: {e}")
                logger.error(traceback.format_exc())
                self.signals.error.emit(str(e))

        self._set_processing(True)
        threading.Thread(target=task, daemon=True).start()

    def _set_processing(self, active: bool):
        self.processing = active
        self.preview_btn.setEnabled(not active and self.track_path is not None)
        self.progress.setVisible(active)

    def _preview(self):
        if not self.track_path or self.processing:
            return

        logger.info(f"Starting preview for: {self.track_path}")

        def task():
            try:
                self.signals.status.emit("Generating preview...")
                preview_path = generate_preview(
                    self.track_path.absolute().as_uri(),
                    page_location=self.track.page_location,
                )
                logger.info(f"Preview generated: {preview_path}")
                self.signals.finished.emit(f"Preview ready: {preview_path.name}")
            except Exception as e:
                logger.error(f"Preview failed: {e}")
                logger.error(traceback.format_exc())
                self.signals.error.emit(str(e))

        self._set_processing(True)
        threading.Thread(target=task, daemon=True).start()

    def _on_scrub(self, value: int):
        percent = value / SLIDER_STEPS
        t = time_at(percent, self.track.duration)
        self.time_label.setText(format_timestamp(t))

        image = self.track.resolve(t)
        if image is None:
            self.image_label.setText("(no thumbnail)")
            return
        css = css_for_image(image)
        x_pos, margin = holder_offset(percent, self.slider.width(), css)
        lines = [f"{k}: {v}" for k, v in css.items()]
        lines.append(f"transform: translateX({x_pos:g}px); margin-left: {margin:g}px")
        self.image_label.setText("\n".join(lines))

    def _on_status(self, message: str):
        logger.debug(f"Status: {message}")
        self.status_label.setText(message)

    def _on_loaded(self, count: int):
        logger.info(f"Loaded {count} cues")
        self._set_processing(False)
        self.slider.setEnabled(count > 0)
        if count:
            self.status_label.setText(f"{count} cues, {format_timestamp(self.track.duration)}")
        else:
            self.status_label.setText("No thumbnails in track")
        self._on_scrub(self.slider.value())

    def _on_finished(self, message: str):
        logger.info(f"Finished: {message}")
        self._set_processing(False)
        self.status_label.setText(message)

    def _on_error(self, error: str):
        logger.error(f"Error shown to user: {error}")
        self._set_processing(False)
        self.status_label.setText(f"Error: {error}")
        QMessageBox.critical(self, "Error", error)


def main():
    logger.info("Creating QApplication")
    app = QApplication(sys.argv)
    logger.info("Creating ThumbsWindow")
    window = ThumbsWindow()
    window.show()
    logger.info("Window shown, entering event loop")
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
