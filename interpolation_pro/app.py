"""
Interpolation Pro — desktop front end.

Enter x and y values (or load a CSV), draw one interpolation method or all
four, inspect the error against Lagrange, and export the data, the formula
report or the graphs.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QMarginsF, QRectF, Qt
from PySide6.QtGui import QFont, QPageLayout, QPageSize, QPainter, QPdfWriter
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from interpolation_pro.errors import InterpolationError
from interpolation_pro.export import (
    build_report,
    data_table,
    default_report_name,
    read_csv,
    report_header,
    report_lines,
    write_csv,
)
from interpolation_pro.formula import FORMULA_STYLES, format_number
from interpolation_pro.methods import Method
from interpolation_pro.samples import parse_values
from interpolation_pro.sampling import SampledCurve
from interpolation_pro.session import InterpolationSession
from interpolation_pro.settings import AppSettings

logger = logging.getLogger(__name__)

DEFAULT_X: str = "0, 1, 2, 3"
DEFAULT_Y: str = "1, 2, 5, 10"
REPORT_FILE_NAME: str = "interpolation.pdf"


# ===========================================================================
# Settings dialog
# ===========================================================================

class SettingsDialog(QDialog):

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self._settings = settings
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QGridLayout(self)

        self._steps_sb = QSpinBox()
        self._steps_sb.setRange(1, 100_000)
        self._steps_sb.setValue(self._settings.n_steps)

        self._style_cb = QComboBox()
        self._style_cb.addItems(list(FORMULA_STYLES))
        self._style_cb.setCurrentText(self._settings.formula_style)

        self._latex_approx_cb = QCheckBox("Approximate coefficients (decimals)")
        self._latex_approx_cb.setChecked(self._settings.latex_approx)
        self._latex_approx_cb.setToolTip(
            "ON  — coefficients shown as rounded decimals, e.g. 3.142\n"
            "OFF — exact rational fractions, e.g. 355/113"
        )

        self._latex_decimals_sb = QSpinBox()
        self._latex_decimals_sb.setRange(0, 10)
        self._latex_decimals_sb.setValue(self._settings.latex_decimals)
        self._latex_approx_cb.toggled.connect(self._latex_decimals_sb.setEnabled)
        self._latex_decimals_sb.setEnabled(self._settings.latex_approx)

        # -1 stands for "print numbers in full"
        self._text_decimals_sb = QSpinBox()
        self._text_decimals_sb.setRange(-1, 15)
        self._text_decimals_sb.setSpecialValueText("full")
        self._text_decimals_sb.setValue(
            -1 if self._settings.text_decimals is None else self._settings.text_decimals
        )

        fields: list[tuple[str, QWidget]] = [
            ("Graph steps:", self._steps_sb),
            ("Formula style:", self._style_cb),
            ("Text digits:", self._text_decimals_sb),
        ]
        for row, (label, widget) in enumerate(fields):
            layout.addWidget(QLabel(label), row, 0)
            layout.addWidget(widget, row, 1)

        sep_row = len(fields)
        sep = QLabel("─── LaTeX Output Format ───")
        sep.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(sep, sep_row, 0, 1, 2)
        layout.addWidget(self._latex_approx_cb, sep_row + 1, 0, 1, 2)
        layout.addWidget(QLabel("Digits after decimal point:"), sep_row + 2, 0)
        layout.addWidget(self._latex_decimals_sb, sep_row + 2, 1)

        btn_row = QHBoxLayout()
        ok_btn = QPushButton("OK")
        cancel_btn = QPushButton("Cancel")
        ok_btn.clicked.connect(self.accept)
        cancel_btn.clicked.connect(self.reject)
        btn_row.addWidget(ok_btn)
        btn_row.addWidget(cancel_btn)
        layout.addLayout(btn_row, sep_row + 3, 0, 1, 2)

    def get_settings(self) -> Optional[AppSettings]:
        text_decimals = int(self._text_decimals_sb.value())
        try:
            return AppSettings(
                n_steps=int(self._steps_sb.value()),
                formula_style=self._style_cb.currentText(),
                latex_approx=bool(self._latex_approx_cb.isChecked()),
                latex_decimals=int(self._latex_decimals_sb.value()),
                text_decimals=None if text_decimals < 0 else text_decimals,
            )
        except (ValueError, TypeError):
            return None


# ===========================================================================
# Main window
# ===========================================================================

class InterpolationApp(QMainWindow):

    _METHOD_COLORS: dict[Method, tuple[int, int, int]] = {
        Method.LAGRANGE: (59, 130, 246),        # blue
        Method.NEWTON_DIVIDED: (16, 185, 129),  # green
        Method.NEWTON_FORWARD: (245, 158, 11),  # orange
        Method.BEZIER: (139, 92, 246),          # purple
    }
    # Dash pattern per method when all four share the plot.
    _METHOD_DASHES: dict[Method, list[float]] = {
        Method.LAGRANGE: [],
        Method.NEWTON_DIVIDED: [5, 5],
        Method.NEWTON_FORWARD: [10, 5],
        Method.BEZIER: [2, 2],
    }
    _POINT_COLOR: tuple[int, int, int] = (239, 68, 68)

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Interpolation Pro")
        self.setGeometry(100, 100, 1300, 820)

        self._session = InterpolationSession()
        self._build_ui()
        self._configure_plots()

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)

        # ── plots ─────────────────────────────────────────────────────
        left = QVBoxLayout()
        self._plot_widget = pg.PlotWidget()
        self._legend = self._plot_widget.addLegend(offset=(10, 10))
        self._error_widget = pg.PlotWidget()
        self._error_legend = self._error_widget.addLegend(offset=(10, 10))
        left.addWidget(self._plot_widget, 3)
        left.addWidget(self._error_widget, 2)
        root.addLayout(left, 3)

        # ── inputs and actions ────────────────────────────────────────
        right = QVBoxLayout()
        grid = QGridLayout()
        self._x_edit = QLineEdit(DEFAULT_X)
        self._y_edit = QLineEdit(DEFAULT_Y)
        grid.addWidget(QLabel("x values:"), 0, 0)
        grid.addWidget(self._x_edit, 0, 1)
        grid.addWidget(QLabel("y values:"), 1, 0)
        grid.addWidget(self._y_edit, 1, 1)
        right.addLayout(grid)

        method_row = QHBoxLayout()
        for method in Method:
            btn = QPushButton(method.display_name)
            btn.clicked.connect(lambda _checked=False, m=method: self.draw_method(m))
            method_row.addWidget(btn)
        all_btn = QPushButton("All")
        all_btn.clicked.connect(self.draw_all)
        method_row.addWidget(all_btn)
        right.addLayout(method_row)

        action_row = QHBoxLayout()
        buttons: list[tuple[str, object]] = [
            ("Table", self.show_table),
            ("Formula", self.show_formula),
            ("Load CSV", self.load_csv),
            ("Export CSV", self.export_csv),
            ("Export Report", self.export_report),
            ("Save Graphs", self.save_graphs),
            ("Settings", self.show_settings),
        ]
        for label, slot in buttons:
            btn = QPushButton(label)
            btn.clicked.connect(slot)
            action_row.addWidget(btn)
        right.addLayout(action_row)

        self._status_lbl = QLabel("Ready")
        self._status_lbl.setStyleSheet("color: gray; font-style: italic;")
        right.addWidget(self._status_lbl)

        self._table = QTableWidget(0, 3)
        self._table.setHorizontalHeaderLabels(["#", "x", "y"])
        self._table.setVisible(False)
        right.addWidget(self._table)

        self._formula_box = QTextEdit()
        self._formula_box.setReadOnly(True)
        self._formula_box.setFontFamily("Courier New")
        self._formula_box.setVisible(False)
        right.addWidget(self._formula_box)
        right.addStretch(1)
        root.addLayout(right, 2)

    def _configure_plots(self) -> None:
        for widget, title in ((self._plot_widget, "Interpolation"),
                              (self._error_widget, "Error vs Lagrange")):
            widget.setTitle(title)
            widget.setLabel("left", "y")
            widget.setLabel("bottom", "x")
            widget.showGrid(x=True, y=True, alpha=0.3)

    # ------------------------------------------------------------------
    # Data input
    # ------------------------------------------------------------------

    def _load_inputs(self) -> bool:
        try:
            self._session.set_data(parse_values(self._x_edit.text()),
                                   parse_values(self._y_edit.text()))
        except InterpolationError as exc:
            QMessageBox.warning(self, "Invalid Input", f"Enter x and y values correctly.\n{exc}")
            return False
        return True

    def _set_status(self, text: str, color: str) -> None:
        self._status_lbl.setText(text)
        self._status_lbl.setStyleSheet(f"color: {color}; font-style: italic;")

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _pen(self, method: Method, width: int, dashed: bool) -> object:
        pen = pg.mkPen(self._METHOD_COLORS[method], width=width)
        if dashed and self._METHOD_DASHES[method]:
            pen.setStyle(Qt.PenStyle.CustomDashLine)
            pen.setDashPattern(self._METHOD_DASHES[method])
        return pen

    def _plot_curve(self, curve: SampledCurve) -> None:
        self._plot_widget.clear()
        self._legend.clear()
        self._error_widget.clear()
        self._error_legend.clear()

        samples = self._session.samples
        r, g, b = self._POINT_COLOR
        self._plot_widget.plot(
            np.asarray(samples.x), np.asarray(samples.y), pen=None, symbol="o",
            symbolSize=10, symbolBrush=(r, g, b), name="Data Points",
        )

        for method in curve.methods:
            name = (f"{method.display_name} Interpolation"
                    if not curve.is_all or method in (Method.LAGRANGE, Method.BEZIER)
                    else method.display_name)
            width = 4 if curve.is_all and method is Method.LAGRANGE else 3
            self._plot_widget.plot(curve.queries, curve.series[method],
                                   pen=self._pen(method, width, curve.is_all), name=name)
            if curve.is_all and method is Method.LAGRANGE:
                continue
            label = f"{method.display_name} vs Lagrange" if curve.is_all else "Error vs Lagrange"
            self._error_widget.plot(curve.queries, curve.error_series[method],
                                    pen=pg.mkPen(self._METHOD_COLORS[method], width=2), name=label)

    def draw_method(self, method: Method) -> None:
        if not self._load_inputs():
            return
        try:
            curve = self._session.draw(method)
        except InterpolationError as exc:
            QMessageBox.critical(self, "Interpolation Error", str(exc))
            return
        self._plot_curve(curve)
        self._set_status(f"{method.display_name}: {len(curve)} points", "green")

    def draw_all(self) -> None:
        if not self._load_inputs():
            return
        try:
            curve = self._session.draw_all()
        except InterpolationError as exc:
            QMessageBox.critical(self, "Interpolation Error", str(exc))
            return
        self._plot_curve(curve)
        self._set_status(f"All methods: {len(curve)} points", "green")

    # ------------------------------------------------------------------
    # Table / formula
    # ------------------------------------------------------------------

    def show_table(self) -> None:
        if not self._load_inputs():
            return
        rows = data_table(self._session.samples)
        self._table.setRowCount(len(rows))
        for row, (i, xv, yv) in enumerate(rows):
            for col, text in enumerate((str(i), format_number(xv), format_number(yv))):
                self._table.setItem(row, col, QTableWidgetItem(text))
        self._table.setVisible(True)
        self._formula_box.setVisible(False)

    def show_formula(self) -> None:
        if not self._load_inputs():
            return
        try:
            text = self._session.formula()
        except InterpolationError as exc:
            QMessageBox.critical(self, "Formula Error", str(exc))
            return
        self._formula_box.setPlainText(text)
        self._formula_box.setVisible(True)
        self._table.setVisible(False)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def load_csv(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Load CSV", "", "CSV files (*.csv)")
        if not path:
            return
        try:
            xs, ys = read_csv(path)
        except (InterpolationError, OSError) as exc:
            QMessageBox.critical(self, "Load Error", str(exc))
            return
        self._x_edit.setText(", ".join(format_number(v) for v in xs))
        self._y_edit.setText(", ".join(format_number(v) for v in ys))
        self._set_status(f"Loaded {len(xs)} points", "gray")

    def export_csv(self) -> None:
        if not self._load_inputs():
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export CSV", "interpolation_data.csv",
                                              "CSV files (*.csv)")
        if not path:
            return
        try:
            write_csv(path, self._session.samples)
        except OSError as exc:
            QMessageBox.critical(self, "Export Error", str(exc))

    def export_report(self) -> None:
        if not self._load_inputs():
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Report", REPORT_FILE_NAME,
            "PDF files (*.pdf);;Text files (*.txt)",
        )
        if not path:
            return
        try:
            if path.lower().endswith(".txt"):
                text = build_report(self._session)
                with open(path, "w", encoding="utf-8") as fh:
                    fh.write(text)
            else:
                self._write_report_pdf(path, report_lines(self._session))
        except (InterpolationError, OSError) as exc:
            QMessageBox.critical(self, "Export Error", str(exc))
            return
        logger.info("Report written to %s", path)

    def _write_report_pdf(self, path: str, lines: list[str]) -> None:
        writer = QPdfWriter(path)
        writer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
        writer.setPageMargins(QMarginsF(15, 15, 15, 15), QPageLayout.Unit.Millimeter)
        writer.setResolution(150)

        painter = QPainter(writer)
        try:
            page = painter.viewport()
            width = float(page.width())
            line_height = 28.0
            painter.setFont(QFont("Courier New", 9))
            y = 0.0
            for line in lines:
                if y + line_height > page.height():
                    writer.newPage()
                    y = 0.0
                painter.drawText(QRectF(0, y, width, line_height), Qt.AlignmentFlag.AlignLeft, line)
                y += line_height
        finally:
            painter.end()

    def save_graphs(self) -> None:
        if self._session.last_curve is None:
            QMessageBox.warning(self, "No Graphs",
                                "Please generate graphs first before downloading!")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Graphs", default_report_name(self._session, "pdf"), "PDF files (*.pdf)",
        )
        if not path:
            return
        self._write_pdf(path, datetime.now())
        logger.info("Graphs written to %s", path)

    def _write_pdf(self, path: str, now: datetime) -> None:
        writer = QPdfWriter(path)
        writer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
        writer.setPageMargins(QMarginsF(15, 15, 15, 15), QPageLayout.Unit.Millimeter)
        writer.setResolution(150)

        painter = QPainter(writer)
        try:
            page = painter.viewport()
            width = float(page.width())
            y = 0.0

            header = report_header(self._session, now)
            painter.setFont(QFont("Helvetica", 18, QFont.Weight.Bold))
            painter.drawText(QRectF(0, y, width, 60), Qt.AlignmentFlag.AlignHCenter,
                             f"{header[0]} Graphs")
            y += 80
            painter.setFont(QFont("Helvetica", 10))
            for line in header[1:4]:
                painter.drawText(QRectF(0, y, width, 30), Qt.AlignmentFlag.AlignLeft, line)
                y += 30
            y += 20

            for widget, title, frac in ((self._plot_widget, "Interpolation Graph", 0.40),
                                        (self._error_widget, "Error Analysis Graph", 0.30)):
                painter.setFont(QFont("Helvetica", 13, QFont.Weight.Bold))
                painter.drawText(QRectF(0, y, width, 40), Qt.AlignmentFlag.AlignHCenter, title)
                y += 45
                pixmap = widget.grab()
                height = page.height() * frac
                painter.drawPixmap(QRectF(0, y, width, height).toRect(), pixmap)
                y += height + 20

            painter.setFont(QFont("Helvetica", 8))
            for line in ["Generated by Interpolation Pro", *header[4:]]:
                painter.drawText(QRectF(0, y, width, 24), Qt.AlignmentFlag.AlignLeft, line)
                y += 24
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def show_settings(self) -> None:
        dlg = SettingsDialog(self._session.settings, self)
        if dlg.exec():
            new_s = dlg.get_settings()
            if new_s is None:
                QMessageBox.critical(self, "Invalid Settings", "One or more values are invalid.")
                return
            self._session.settings = new_s
            if self._formula_box.isVisible():
                self.show_formula()


# ===========================================================================
# Entry point
# ===========================================================================

def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = InterpolationApp()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
