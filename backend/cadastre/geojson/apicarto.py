"""API Carto (IGN) cadastre responses → ParcelRecord.

Only decoding lives here. The HTTP round-trip belongs to the caller, which
sends :func:`point_query` as the ``geom`` parameter to both endpoints,
usually in parallel.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from cadastre.models.parcel import ParcelRecord

logger = logging.getLogger(__name__)

APICARTO_PARCELLE = "https://apicarto.ign.fr/api/cadastre/parcelle"
APICARTO_COMMUNE = "https://apicarto.ign.fr/api/cadastre/commune"


def point_query(latitude: float, longitude: float) -> str:
    """GeoJSON Point for a point-in-parcel lookup (lon/lat order)."""
    return json.dumps({"type": "Point", "coordinates": [longitude, latitude]}, separators=(",", ":"))


def query_params(latitude: float, longitude: float) -> dict[str, str]:
    return {"geom": point_query(latitude, longitude)}


def lookup_urls(latitude: float, longitude: float) -> tuple[str, str]:
    """(parcelle, commune) request URLs for the parcel under a point."""
    query = urlencode(query_params(latitude, longitude))
    return f"{APICARTO_PARCELLE}?{query}", f"{APICARTO_COMMUNE}?{query}"


def _first_feature(document: str | bytes | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if document is None:
        return None
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("API Carto response is not valid JSON: %s", e)
            return None
    if not isinstance(document, Mapping):
        return None
    features = document.get("features")
    if not isinstance(features, list) or not features:
        return None
    feature = features[0]
    return feature if isinstance(feature, Mapping) else None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _surface(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_parcel_response(
    document: str | bytes | Mapping[str, Any] | None,
    commune_name: str = "",
) -> ParcelRecord | None:
    """First feature of a parcel FeatureCollection, or None when the lookup found nothing."""
    feature = _first_feature(document)
    if feature is None:
        return None

    props = feature.get("properties")
    if not isinstance(props, Mapping):
        props = {}
    geometry = feature.get("geometry")

    record = ParcelRecord(
        idu=_text(props.get("id")),
        code_insee=_text(props.get("commune")),
        nom_commune=commune_name,
        section=_text(props.get("section")),
        numero=_text(props.get("numero")),
        prefixe=_text(props.get("prefixe")),
        surface=_surface(props.get("contenance")),
        geometry=dict(geometry) if isinstance(geometry, Mapping) else None,
    )
    logger.info("Parcel decoded: %s", record)
    return record


def parse_commune_response(document: str | bytes | Mapping[str, Any] | None) -> str:
    """Commune name (``nom_com``) of the first feature, "" when absent."""
    feature = _first_feature(document)
    if feature is None:
        return ""
    props = feature.get("properties")
    if not isinstance(props, Mapping):
        return ""
    return _text(props.get("nom_com"))
