# backend/schemas/weather.py
from typing import Optional

from pydantic import BaseModel


class WeatherOut(BaseModel):
    """Current conditions for one city, in metric units."""
    cityName: str
    country: Optional[str] = None
    temperature: float          # °C
    description: str = ""
    icon: str = ""              # OpenWeather icon code, e.g. "04d"
    humidity: Optional[int] = None
    windSpeed: Optional[float] = None   # m/s

    def summary_line(self) -> str:
        country = f" ({self.country})" if self.country else ""
        return f"City: {self.cityName}{country} | {self.temperature:.1f}°C, {self.description}"
