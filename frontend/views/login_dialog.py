# frontend/views/login_dialog.py
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QLineEdit, QPushButton, QFrame
)
from PySide6.QtCore import Qt

from frontend.services.auth_service import AuthService


class LoginDialog(QDialog):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Sign in – Weather Dashboard")
        self.resize(720, 560)
        self.setMinimumSize(520, 460)

        self.auth = AuthService()
        self.user = None

        self.setStyleSheet("""
            QDialog { background: #f3f4f6; font-family: 'Segoe UI', Arial, sans-serif; }
            QFrame#Card { background: rgba(255,255,255,0.96); border-radius: 14px; padding: 32px; }
            QLabel#Title { font-size: 30px; font-weight: 800; color: #111827; }
            QLabel#Sub { color: #6b7280; font-size: 14px; margin: 8px 0 24px; }
            QLineEdit { padding: 14px; font-size: 15px; border: 1px solid #d1d5db; border-radius: 8px; background: #eef2ff; }
            QPushButton { padding: 12px 16px; border-radius: 10px; font-weight: 600; border: none; }
            QPushButton#Primary { background: #2563eb; color: #fff; }
            QPushButton#Primary:hover { background: #1d4ed8; }
            QPushButton#Ghost { background: transparent; color: #2563eb; text-decoration: underline; }
            QLabel#Error { color: #dc2626; font-size: 13px; padding: 8px; background: #fef2f2; border-radius: 8px; }
        """)

        root = QVBoxLayout(self)
        root.setContentsMargins(20, 20, 20, 20)

        card = QFrame(objectName="Card")
        v = QVBoxLayout(card)
        v.setSpacing(16)

        title = QLabel("Sign in", objectName="Title", alignment=Qt.AlignCenter)
        sub = QLabel("Your cities, their weather, and quick AI insights", objectName="Sub", alignment=Qt.AlignCenter)
        v.addWidget(title)
        v.addWidget(sub)

        # form
        self.edt_email = QLineEdit(placeholderText="Email")
        self.edt_pass = QLineEdit(placeholderText="Password")
        self.edt_pass.setEchoMode(QLineEdit.Password)
        v.addWidget(self.edt_email)
        v.addWidget(self.edt_pass)

        self.lbl_msg = QLabel("", alignment=Qt.AlignCenter, objectName="Error")
        self.lbl_msg.setWordWrap(True)
        self.lbl_msg.hide()
        v.addWidget(self.lbl_msg)

        btn_login = QPushButton("Sign in", objectName="Primary")
        v.addWidget(btn_login)

        btn_signup = QPushButton("Create an account", objectName="Ghost")
        v.addWidget(btn_signup)

        root.addStretch(1)
        root.addWidget(card, alignment=Qt.AlignCenter)
        root.addStretch(1)

        btn_signup.clicked.connect(self._open_signup)
        btn_login.clicked.connect(self._do_login)
        self.edt_pass.returnPressed.connect(self._do_login)

    def _show_error(self, text: str):
        self.lbl_msg.setText(text)
        self.lbl_msg.show()

    def _open_signup(self):
        from frontend.views.signup_dialog import SignUpDialog
        dlg = SignUpDialog(self)
        if dlg.exec():
            # prefill the freshly created account
            self.edt_email.setText(dlg.created_email or "")
            self.edt_pass.setText(dlg.created_password or "")
            self.lbl_msg.hide()

    def _do_login(self):
        email = self.edt_email.text().strip()
        password = self.edt_pass.text()

        if not email or not password:
            self._show_error("Please enter your email and password")
            return

        ok, user, err = self.auth.login(email, password)
        if ok:
            self.user = user
            self.accept()
        else:
            self._show_error(err or "Invalid email or password")
