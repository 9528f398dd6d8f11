"""Cadastral parcel record, as returned by the API Carto cadastre endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Surfaces from one hectare up are shown in hectares.
HECTARE_M2 = 10_000.0


class ParcelRecord(BaseModel):
    idu: str = Field(default="", description="Unique parcel identifier (IDU)")
    code_insee: str = Field(default="", description="INSEE code of the commune")
    nom_commune: str = ""
    section: str = ""
    numero: str = ""
    prefixe: str = ""
    surface: float = Field(default=0.0, description="Declared surface (contenance), m²")
    source: str = "cadastre_officiel"
    updated_at: datetime = Field(default_factory=datetime.now)
    geometry: dict[str, Any] | None = None

    @property
    def formatted_id(self) -> str:
        return f"{self.section} {self.numero}"

    @property
    def formatted_surface(self) -> str:
        if self.surface >= HECTARE_M2:
            return f"{self.surface / HECTARE_M2:,.2f} ha"
        return f"{self.surface:,.0f} m²"

    def __str__(self) -> str:
        return f"[Parcel] {self.formatted_id} - {self.nom_commune} ({self.formatted_surface})"
