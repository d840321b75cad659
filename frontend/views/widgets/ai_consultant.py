# frontend/views/widgets/ai_consultant.py
import html
import time

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit,
    QPushButton, QTextEdit, QProgressBar
)
from PySide6.QtCore import Qt, QThread, Signal

from frontend.services.ai_client import ask_ai
from frontend.services.api_client import UnauthorizedError


class AIWorker(QThread):
    """Runs one /ai/insights call off the UI thread."""
    answered = Signal(str, bool, float)  # answer, used_fallback, seconds
    failed = Signal(str)
    unauthorized = Signal()

    def __init__(self, question: str):
        super().__init__()
        self.question = question

    def run(self):
        start_time = time.time()
        try:
            answer, used_fallback = ask_ai(self.question)
            self.answered.emit(answer, used_fallback, time.time() - start_time)
        except UnauthorizedError:
            self.unauthorized.emit()
        except Exception as e:
            self.failed.emit(str(e))


class AIConsultant(QWidget):
    """Chat panel: questions about the saved cities' current weather."""
    session_expired = Signal()

    QUICK_QUESTIONS = ["Which city is warmest?", "Where should I bring an umbrella?", "Average temperature?"]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._busy = False
        self.worker = None
        self._build_ui()
        self._style()

    def _build_ui(self):
        root = QVBoxLayout(self)

        header = QHBoxLayout()
        title = QLabel("AI weather insights")
        title.setStyleSheet("font-size: 16px; font-weight: bold; color: #059669;")
        header.addWidget(title)
        self.status_label = QLabel("Ready")
        self.status_label.setStyleSheet("color: #059669; font-size: 12px;")
        header.addStretch()
        header.addWidget(self.status_label)
        root.addLayout(header)

        self.progress = QProgressBar()
        self.progress.setVisible(False)
        root.addWidget(self.progress)

        quick_row = QHBoxLayout()
        for q_text in self.QUICK_QUESTIONS:
            btn = QPushButton(q_text)
            btn.setObjectName("QuickBtn")
            btn.clicked.connect(lambda checked, txt=q_text: self._ask_quick(txt))
            quick_row.addWidget(btn)
        quick_row.addStretch()
        root.addLayout(quick_row)

        row = QHBoxLayout()
        self.q = QLineEdit(placeholderText="Ask about your cities' weather...")
        self.send_btn = QPushButton("Ask")
        row.addWidget(self.q, 1)
        row.addWidget(self.send_btn, 0)
        root.addLayout(row)

        self.out = QTextEdit(readOnly=True)
        self.out.setPlaceholderText("Answers appear here.")
        root.addWidget(self.out, 1)

        self.send_btn.clicked.connect(self._send)
        self.q.returnPressed.connect(self._send)

    def _style(self):
        self.setStyleSheet("""
            QTextEdit { background: #fff; border: 1px solid #059669; border-radius: 8px; padding: 8px; font-size: 13px; }
            QLineEdit { border: 1px solid #059669; border-radius: 8px; padding: 8px; font-size: 13px; }
            QPushButton { background: #059669; color: #fff; border: none; border-radius: 8px; padding: 8px 16px; font-weight: bold; }
            QPushButton:hover { background: #047857; }
            QPushButton#QuickBtn { background: #f0fdf4; color: #059669; border: 1px solid #059669; padding: 4px 8px; font-size: 11px; }
            QPushButton#QuickBtn:hover { background: #dcfce7; }
        """)

    def _ask_quick(self, question: str):
        self.q.setText(question)
        self._send()

    def _send(self):
        if self._busy:
            return
        text = self.q.text().strip()
        if not text:
            return

        self.out.append(f"<b>You:</b> {html.escape(text)}")
        self.q.clear()
        self._set_busy(True)
        self.status_label.setText("Thinking…")

        self.worker = AIWorker(text)
        self.worker.answered.connect(self._on_answer)
        self.worker.failed.connect(self._on_error)
        self.worker.unauthorized.connect(self._on_unauthorized)
        self.worker.start()

    def _on_answer(self, answer: str, used_fallback: bool, duration: float):
        body = html.escape(answer).replace("\n", "<br>")
        self.out.append(f"<b>AI:</b> {body}")
        note = "heuristic summary" if used_fallback else "AI answer"
        self.out.append(f"<i style='color:#666'>{note}, {duration:.1f}s</i><br>")
        self.status_label.setText("Fallback" if used_fallback else "Done")
        self._set_busy(False)

    def _on_error(self, error: str):
        self.out.append(f"<b>Error:</b> {html.escape(error)}")
        self.status_label.setText("Failed")
        self._set_busy(False)

    def _on_unauthorized(self):
        self._set_busy(False)
        self.session_expired.emit()

    def _set_busy(self, busy: bool):
        self._busy = busy
        self.send_btn.setEnabled(not busy)
        self.progress.setVisible(busy)
        if busy:
            self.progress.setRange(0, 0)  # indeterminate
        else:
            self.progress.setRange(0, 100)
            self.progress.setValue(100)
