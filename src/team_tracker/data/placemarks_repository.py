"""Load named placemarks from a KML document."""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..models.domain import PlacemarkRecord

logger = logging.getLogger(__name__)


def _local_name(tag: str) -> str:
    # "{http://www.opengis.net/kml/2.2}Placemark" -> "Placemark"
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _find_path(element: ET.Element, *names: str) -> Optional[ET.Element]:
    current: Optional[ET.Element] = element
    for name in names:
        if current is None:
            return None
        current = _child(current, name)
    return current


def parse_coordinate(text: str) -> tuple[float, float]:
    """Parse one ``lon,lat[,alt]`` tuple and return it as (lat, lon)."""

    parts = text.strip().split(",")
    if len(parts) < 2:
        raise ValueError(f"Expected 'lon,lat' but got '{text.strip()}'")
    try:
        lon = float(parts[0].strip())
        lat = float(parts[1].strip())
    except ValueError as exc:
        raise ValueError(f"Unable to parse coordinate '{text.strip()}'") from exc
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"Coordinate is not a finite number: '{text.strip()}'")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise ValueError(f"Coordinate out of range: '{text.strip()}'")
    return lat, lon


def _placemark_coordinate_text(placemark: ET.Element) -> Optional[str]:
    point = _find_path(placemark, "Point", "coordinates")
    if point is not None and (point.text or "").strip():
        return point.text.strip()

    ring = _find_path(placemark, "Polygon", "outerBoundaryIs", "LinearRing", "coordinates")
    if ring is not None and (ring.text or "").strip():
        # Representative point is the first vertex of the ring, not a centroid.
        return ring.text.split()[0]
    return None


def _iter_placemarks(root: ET.Element) -> Iterator[ET.Element]:
    for element in root.iter():
        if _local_name(element.tag) == "Placemark":
            yield element


def extract_records(placemarks: Iterable[ET.Element]) -> list[PlacemarkRecord]:
    records: list[PlacemarkRecord] = []
    for placemark in placemarks:
        name_element = _child(placemark, "name")
        name = (name_element.text or "").strip() if name_element is not None else ""
        if not name:
            continue

        coordinate_text = _placemark_coordinate_text(placemark)
        if coordinate_text is None:
            logger.debug(f"Placemark '{name}' has no point or polygon geometry, skipping")
            continue

        try:
            lat, lon = parse_coordinate(coordinate_text)
        except ValueError as exc:
            logger.warning(f"Skipping placemark '{name}': {exc}")
            continue

        records.append(PlacemarkRecord(name=name, latitude=lat, longitude=lon))
    return records


def parse_placemarks(document: str | bytes) -> tuple[PlacemarkRecord, ...]:
    """Parse an in-memory KML document."""

    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise ValueError(f"Failed to parse KML: {exc}") from exc
    return tuple(extract_records(_iter_placemarks(root)))


def load_placemarks(source: Path) -> tuple[PlacemarkRecord, ...]:
    """Load placemarks from a KML file, in document order, folders included."""

    kml_path = Path(source)
    if not kml_path.exists():
        raise FileNotFoundError(f"KML file not found: {kml_path}")

    logger.info(f"Opening KML file: {kml_path}")
    try:
        tree = ET.parse(kml_path)
    except ET.ParseError as exc:
        raise ValueError(f"Failed to parse KML file '{kml_path}': {exc}") from exc

    records = extract_records(_iter_placemarks(tree.getroot()))
    logger.info(f"Parsed {len(records)} placemarks from {kml_path.name}")
    return tuple(records)
