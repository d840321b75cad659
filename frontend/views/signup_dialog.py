# frontend/views/signup_dialog.py
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QLineEdit, QPushButton, QFrame
)
from PySide6.QtCore import Qt

from frontend.services.auth_service import AuthService

MIN_PASSWORD = 6


class SignUpDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Create account – Weather Dashboard")
        self.resize(620, 600)
        self.setMinimumSize(520, 520)

        self.auth = AuthService()
        self.created_email = None
        self.created_password = None

        self.setStyleSheet("""
            QDialog { background: #f3f4f6; font-family: 'Segoe UI', Arial, sans-serif; }
            QFrame#Card { background: #fff; border-radius: 16px; border: 1px solid rgba(0,0,0,0.06); }
            QLabel#Title { font-size: 22px; font-weight: 800; color: #1f2937; }
            QLabel#Error { color: #dc2626; font-size: 13px; padding: 8px; background: #fef2f2; border-radius: 8px; }
            QLineEdit { padding: 10px 12px; border: 1px solid #e2e8f0; border-radius: 8px; font-size: 14px; }
            QLineEdit:focus { border-color: #3b82f6; }
            QPushButton { padding: 12px 16px; border-radius: 10px; font-weight: 700; border: none; }
            QPushButton#Primary { background: #2563eb; color: #fff; }
            QPushButton#Primary:hover { background: #1d4ed8; }
            QPushButton#Ghost { background: transparent; color: #2563eb; }
        """)

        root = QVBoxLayout(self)
        root.setContentsMargins(20, 20, 20, 20)

        card = QFrame(objectName="Card")
        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        layout.addWidget(QLabel("Create account", objectName="Title", alignment=Qt.AlignCenter))

        self.edt_name = QLineEdit(placeholderText="Full name")
        self.edt_email = QLineEdit(placeholderText="Email")
        self.edt_pass = QLineEdit(placeholderText=f"Password (at least {MIN_PASSWORD} characters)")
        self.edt_pass.setEchoMode(QLineEdit.Password)
        self.edt_pass2 = QLineEdit(placeholderText="Repeat password")
        self.edt_pass2.setEchoMode(QLineEdit.Password)
        for w in (self.edt_name, self.edt_email, self.edt_pass, self.edt_pass2):
            layout.addWidget(w)

        self.lbl_msg = QLabel("", objectName="Error", alignment=Qt.AlignCenter)
        self.lbl_msg.setWordWrap(True)
        self.lbl_msg.hide()
        layout.addWidget(self.lbl_msg)

        btn_create = QPushButton("Create account", objectName="Primary")
        btn_cancel = QPushButton("Back to sign in", objectName="Ghost")
        layout.addWidget(btn_create)
        layout.addWidget(btn_cancel)

        root.addStretch(1)
        root.addWidget(card)
        root.addStretch(1)

        btn_create.clicked.connect(self._submit)
        btn_cancel.clicked.connect(self.reject)
        self.edt_pass2.returnPressed.connect(self._submit)

    def _error(self, text: str):
        self.lbl_msg.setText(text)
        self.lbl_msg.show()

    def _submit(self):
        name = self.edt_name.text().strip()
        email = self.edt_email.text().strip()
        password = self.edt_pass.text()

        if not name or not email or not password:
            self._error("All fields are required")
            return
        if len(password) < MIN_PASSWORD:
            self._error(f"Password must be at least {MIN_PASSWORD} characters")
            return
        if password != self.edt_pass2.text():
            self._error("Passwords do not match")
            return

        ok, _user, err = self.auth.register(name, email, password)
        if not ok:
            self._error(err or "Registration failed")
            return

        self.created_email = email
        self.created_password = password
        self.accept()
