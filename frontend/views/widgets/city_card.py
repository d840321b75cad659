# frontend/views/widgets/city_card.py
from typing import Any, Dict, Optional

from PySide6.QtWidgets import QFrame, QHBoxLayout, QVBoxLayout, QLabel, QPushButton
from PySide6.QtCore import Signal


class CityCard(QFrame):
    """One saved city: name, last loaded weather, and its actions."""
    refresh_requested = Signal(int)
    favorite_toggled = Signal(int, bool)
    delete_requested = Signal(int)

    def __init__(self, city: Dict[str, Any], parent=None):
        super().__init__(parent)
        self.setObjectName("CityCard")
        self.city = city
        self.city_id = int(city["id"])

        root = QHBoxLayout(self)
        root.setContentsMargins(12, 10, 12, 10)

        info = QVBoxLayout()
        country = f", {city['country']}" if city.get("country") else ""
        self.lbl_name = QLabel(f"{city['name']}{country}")
        self.lbl_name.setStyleSheet("font-size: 15px; font-weight: 700; color: #111827;")
        self.lbl_weather = QLabel("Weather not loaded")
        self.lbl_weather.setStyleSheet("color: #4b5563;")
        info.addWidget(self.lbl_name)
        info.addWidget(self.lbl_weather)
        root.addLayout(info, 1)

        self.btn_fav = QPushButton()
        self.btn_refresh = QPushButton("Refresh")
        self.btn_delete = QPushButton("Delete")
        self.btn_delete.setObjectName("Danger")
        for b in (self.btn_fav, self.btn_refresh, self.btn_delete):
            root.addWidget(b)
        self._sync_favorite()

        self.btn_refresh.clicked.connect(lambda: self.refresh_requested.emit(self.city_id))
        self.btn_fav.clicked.connect(
            lambda: self.favorite_toggled.emit(self.city_id, not bool(self.city.get("isFavorite")))
        )
        self.btn_delete.clicked.connect(lambda: self.delete_requested.emit(self.city_id))

    def _sync_favorite(self):
        self.btn_fav.setText("★ Favorite" if self.city.get("isFavorite") else "☆ Favorite")

    def set_city(self, city: Dict[str, Any]):
        self.city = city
        self._sync_favorite()

    def set_weather(self, weather: Optional[Dict[str, Any]] = None, error: Optional[str] = None):
        if error:
            self.lbl_weather.setText(error)
            self.lbl_weather.setStyleSheet("color: #dc2626;")
            return
        parts = [f"{weather['temperature']:.1f}°C", weather.get("description") or ""]
        if weather.get("humidity") is not None:
            parts.append(f"humidity {weather['humidity']}%")
        if weather.get("windSpeed") is not None:
            parts.append(f"wind {weather['windSpeed']} m/s")
        self.lbl_weather.setText(" · ".join(p for p in parts if p))
        self.lbl_weather.setStyleSheet("color: #4b5563;")
