# frontend/views/main_window.py
from typing import Any, Callable, Dict, List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QLabel, QVBoxLayout, QHBoxLayout, QFrame, QLineEdit,
    QPushButton, QScrollArea, QComboBox, QListWidget, QMessageBox, QSplitter, QButtonGroup
)
from PySide6.QtCore import Qt, QThread, Signal

from frontend.services import cities_service
from frontend.services.api_client import UnauthorizedError
from frontend.views.widgets.ai_consultant import AIConsultant
from frontend.views.widgets.city_card import CityCard


class CallWorker(QThread):
    """Runs one service call off the UI thread."""
    done = Signal(object)
    failed = Signal(str)
    unauthorized = Signal()

    def __init__(self, fn: Callable, *args):
        super().__init__()
        self.fn = fn
        self.args = args

    def run(self):
        try:
            self.done.emit(self.fn(*self.args))
        except UnauthorizedError:
            self.unauthorized.emit()
        except Exception as e:
            self.failed.emit(str(e))


class MainWindow(QMainWindow):
    """Dashboard: saved cities with weather on the left, AI insights on the right."""
    logout_requested = Signal()

    def __init__(self, current_user: Dict[str, Any]):
        super().__init__()
        self.user = current_user
        self.cities: List[Dict[str, Any]] = []
        self.cards: Dict[int, CityCard] = {}
        self.weather: Dict[int, Dict[str, Any]] = {}
        self._expired = False
        self.favorites_only = False
        self._workers = set()

        self.setWindowTitle("Weather Dashboard")
        self.resize(1180, 760)

        central = QWidget(self)
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        # ==== header ====
        header = QFrame(objectName="Header")
        header.setFixedHeight(72)
        h = QHBoxLayout(header)
        h.setContentsMargins(24, 12, 24, 12)
        title = QLabel("Weather Dashboard", objectName="Title")
        hello = QLabel(f"Signed in as {current_user.get('name') or current_user.get('email')}")
        btn_logout = QPushButton("Log out")
        h.addWidget(title)
        h.addStretch()
        h.addWidget(hello)
        h.addWidget(btn_logout)
        root.addWidget(header)

        splitter = QSplitter(Qt.Horizontal)
        root.addWidget(splitter, 1)

        # ==== cities column ====
        left = QWidget()
        lv = QVBoxLayout(left)
        lv.setContentsMargins(16, 16, 16, 16)

        add_row = QHBoxLayout()
        self.edt_city = QLineEdit(placeholderText="City name")
        self.edt_country = QLineEdit(placeholderText="Country (e.g. GB)")
        self.edt_country.setMaxLength(2)
        self.edt_country.setFixedWidth(120)
        btn_suggest = QPushButton("Suggest")
        btn_add = QPushButton("Add city", objectName="Primary")
        add_row.addWidget(self.edt_city, 1)
        add_row.addWidget(self.edt_country)
        add_row.addWidget(btn_suggest)
        add_row.addWidget(btn_add)
        lv.addLayout(add_row)

        self.lst_suggest = QListWidget()
        self.lst_suggest.setMaximumHeight(110)
        self.lst_suggest.hide()
        lv.addWidget(self.lst_suggest)

        view_row = QHBoxLayout()
        self.btn_all = QPushButton("All")
        self.btn_fav = QPushButton("Favorites")
        group = QButtonGroup(self)
        for b in (self.btn_all, self.btn_fav):
            b.setCheckable(True)
            group.addButton(b)
            view_row.addWidget(b)
        self.btn_all.setChecked(True)
        self.edt_search = QLineEdit(placeholderText="Search your cities")
        self.edt_search.setClearButtonEnabled(True)
        btn_refresh_all = QPushButton("Refresh weather")
        view_row.addWidget(self.edt_search, 1)
        view_row.addWidget(btn_refresh_all)
        lv.addLayout(view_row)

        self.lbl_msg = QLabel("", objectName="Error")
        self.lbl_msg.setWordWrap(True)
        self.lbl_msg.hide()
        lv.addWidget(self.lbl_msg)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        self.list_host = QWidget()
        self.list_layout = QVBoxLayout(self.list_host)
        self.list_layout.addStretch()
        scroll.setWidget(self.list_host)
        lv.addWidget(scroll, 1)
        splitter.addWidget(left)

        # ==== AI column ====
        self.ai_panel = AIConsultant()
        splitter.addWidget(self.ai_panel)
        splitter.setSizes([700, 480])

        self.setStyleSheet("""
            QLabel#Title { font-size: 24px; font-weight: bold; color: #111; }
            QFrame#Header { background: rgba(255, 255, 255, 210); border-bottom: 1px solid #ddd; }
            QFrame#CityCard { background: #fff; border: 1px solid #e5e7eb; border-radius: 10px; }
            QPushButton { padding: 6px 12px; border-radius: 6px; }
            QPushButton#Primary { background: #2563eb; color: #fff; }
            QPushButton#Danger { color: #dc2626; }
            QPushButton:checked { background: #dbeafe; }
            QLabel#Error { color: #dc2626; padding: 6px; background: #fef2f2; border-radius: 6px; }
        """)

        # ==== events ====
        btn_logout.clicked.connect(self._logout)
        btn_add.clicked.connect(self._add_city)
        self.edt_city.returnPressed.connect(self._add_city)
        btn_suggest.clicked.connect(self._suggest)
        self.lst_suggest.itemDoubleClicked.connect(self._pick_suggestion)
        self.btn_all.clicked.connect(lambda: self._set_view(False))
        self.btn_fav.clicked.connect(lambda: self._set_view(True))
        btn_refresh_all.clicked.connect(self._refresh_all)
        self.edt_search.textChanged.connect(self._on_search)
        self.ai_panel.session_expired.connect(self._session_expired)

        self._load_cities()

    # ---------- plumbing ----------
    def _run(self, fn: Callable, *args, on_done: Optional[Callable] = None, on_error: Optional[Callable] = None):
        w = CallWorker(fn, *args)
        if on_done:
            w.done.connect(on_done)
        w.failed.connect(on_error or self._show_error)
        w.unauthorized.connect(self._session_expired)
        w.finished.connect(lambda: self._workers.discard(w))
        self._workers.add(w)
        w.start()

    def _show_error(self, text: str):
        self.lbl_msg.setText(text)
        self.lbl_msg.show()

    def _clear_error(self):
        self.lbl_msg.hide()

    # ---------- cities ----------
    def _load_cities(self):
        self._run(cities_service.list_cities, on_done=self._on_cities)

    def _on_cities(self, cities: List[Dict[str, Any]]):
        self.cities = cities or []
        self._render()
        self._refresh_all()

    def _visible(self) -> List[Dict[str, Any]]:
        return cities_service.visible_cities(self.cities, self.favorites_only, self.edt_search.text())

    def _on_search(self, _text: str):
        self._render()
        for city_id in self.cards:
            if city_id not in self.weather:
                self._refresh_weather(city_id)

    def _render(self):
        for card in self.cards.values():
            self.list_layout.removeWidget(card)
            card.deleteLater()
        self.cards = {}

        for city in self._visible():
            card = CityCard(city)
            card.refresh_requested.connect(self._refresh_weather)
            card.favorite_toggled.connect(self._toggle_favorite)
            card.delete_requested.connect(self._delete_city)
            self.list_layout.insertWidget(self.list_layout.count() - 1, card)
            self.cards[card.city_id] = card
            if card.city_id in self.weather:
                card.set_weather(self.weather[card.city_id])

    def _set_view(self, favorites_only: bool):
        self.favorites_only = favorites_only
        self._render()
        self._refresh_all()

    def _add_city(self):
        name = self.edt_city.text().strip()
        country = self.edt_country.text().strip().upper() or None
        if not name:
            self._show_error("City name is required")
            return
        self._clear_error()
        self._run(cities_service.add_city, name, country, on_done=self._on_city_added)

    def _on_city_added(self, city: Dict[str, Any]):
        self.edt_city.clear()
        self.edt_country.clear()
        self.lst_suggest.hide()
        self.cities.insert(0, city)
        self._render()
        self._refresh_weather(int(city["id"]))
        self.statusBar().showMessage(f"Added {city['name']}", 4000)

    def _suggest(self):
        name = self.edt_city.text().strip()
        if not name:
            self._show_error("Type a city name first")
            return
        self._clear_error()
        country = self.edt_country.text().strip().upper() or None
        self._run(cities_service.suggest_cities, name, country, on_done=self._on_suggestions)

    def _on_suggestions(self, items: List[Dict[str, Any]]):
        self.lst_suggest.clear()
        if not items:
            self.lst_suggest.hide()
            self.statusBar().showMessage("No matching cities", 4000)
            return
        for s in items:
            self.lst_suggest.addItem(f"{s['name']}, {s.get('country') or '?'}")
        self.lst_suggest.show()

    def _pick_suggestion(self, item):
        name, _, country = item.text().rpartition(", ")
        self.edt_city.setText(name)
        self.edt_country.setText("" if country == "?" else country)
        self.lst_suggest.hide()

    def _toggle_favorite(self, city_id: int, value: bool):
        self._run(cities_service.set_favorite, city_id, value, on_done=self._on_city_updated)

    def _on_city_updated(self, city: Dict[str, Any]):
        self.cities = [city if c["id"] == city["id"] else c for c in self.cities]
        if self.favorites_only and not city.get("isFavorite"):
            self._render()
        elif city["id"] in self.cards:
            self.cards[city["id"]].set_city(city)

    def _delete_city(self, city_id: int):
        reply = QMessageBox.question(self, "Delete city", "Remove this city from your list?",
                                     QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if reply != QMessageBox.Yes:
            return
        self._run(cities_service.delete_city, city_id, on_done=lambda _r: self._on_city_deleted(city_id))

    def _on_city_deleted(self, city_id: int):
        self.weather.pop(city_id, None)
        self.cities = [c for c in self.cities if c["id"] != city_id]
        self._render()

    # ---------- weather ----------
    def _refresh_all(self):
        for city_id in list(self.cards):
            self._refresh_weather(city_id)

    def _refresh_weather(self, city_id: int):
        self._run(
            cities_service.get_weather, city_id,
            on_done=lambda w: self._on_weather(city_id, w),
            on_error=lambda err: self._on_weather_error(city_id, err),
        )

    def _on_weather(self, city_id: int, weather: Dict[str, Any]):
        self.weather[city_id] = weather
        card = self.cards.get(city_id)
        if card:
            card.set_weather(weather)

    def _on_weather_error(self, city_id: int, err: str):
        card = self.cards.get(city_id)
        if card:
            card.set_weather(error=err)

    # ---------- session ----------
    def _session_expired(self):
        if self._expired:
            return
        self._expired = True
        QMessageBox.warning(self, "Session expired", "Please sign in again.")
        self._logout()

    def _logout(self):
        self.logout_requested.emit()
        self.close()
