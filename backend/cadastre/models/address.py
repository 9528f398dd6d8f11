"""Geocoder hit, shared by the Mapbox and Nominatim search providers."""

from __future__ import annotations

from pydantic import BaseModel

from cadastre.utils.types import GeoPoint


class AddressResult(BaseModel):
    text: str
    context: str = ""
    latitude: float
    longitude: float
    place_type: str = ""
    source: str = ""

    @property
    def coordinates(self) -> GeoPoint:
        return GeoPoint(self.longitude, self.latitude)

    @property
    def display_text(self) -> str:
        if not self.context:
            return self.text
        return f"{self.text}, {self.context}"
