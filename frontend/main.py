# frontend/main.py
import sys

from PySide6.QtWidgets import QApplication

from frontend.services.auth_service import AuthService
from frontend.views.login_dialog import LoginDialog
from frontend.views.main_window import MainWindow


def main():
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    auth = AuthService()

    while True:
        login = LoginDialog()
        if login.exec() != LoginDialog.Accepted or not login.user:
            # window closed
            sys.exit(0)

        w = MainWindow(current_user=login.user)
        logged_out = []
        w.logout_requested.connect(lambda: logged_out.append(True))
        w.show()
        app.exec()

        if not logged_out:
            # main window closed without logging out
            sys.exit(0)
        auth.logout()


if __name__ == "__main__":
    main()
