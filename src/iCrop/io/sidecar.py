"""Persist edit attributes in a JSON file stored next to the photo."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import SIDECAR_SUFFIX
from ..core.attributes import EditAttributes
from ..errors import ParametersInvalidError
from ..utils.jsonio import read_json, write_json

_LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def sidecar_path_for(image_path: Path) -> Path:
    """Return the sidecar location for *image_path* (``photo.jpg.icrop.json``)."""

    return image_path.with_name(image_path.name + SIDECAR_SUFFIX)


def load_attributes(image_path: Path) -> EditAttributes:
    """Read the stored attributes for *image_path*.

    Raises :class:`~iCrop.errors.ParametersInvalidError` when the sidecar is
    missing, unreadable or written by a newer schema.
    """

    path = sidecar_path_for(image_path)
    data = read_json(path)
    schema = data.get("schema", SCHEMA_VERSION)
    if not isinstance(schema, int) or schema > SCHEMA_VERSION:
        raise ParametersInvalidError(f"Unsupported sidecar schema {schema!r} in {path}")
    attributes = data.get("attributes", {})
    if not isinstance(attributes, dict):
        raise ParametersInvalidError(f"Malformed attributes in {path}")
    return EditAttributes.from_dict(attributes)


def load_attributes_or_default(image_path: Path) -> EditAttributes:
    """Return the stored attributes, or a fresh snapshot when none are usable."""

    try:
        return load_attributes(image_path)
    except ParametersInvalidError as exc:
        if sidecar_path_for(image_path).exists():
            _LOGGER.warning("Ignoring stored edits for %s: %s", image_path, exc)
        return EditAttributes()


def save_attributes(image_path: Path, attributes: EditAttributes) -> Path:
    """Write *attributes* next to *image_path* and return the sidecar path.

    Unedited snapshots remove the sidecar instead of writing defaults.
    """

    path = sidecar_path_for(image_path)
    if attributes.is_default:
        path.unlink(missing_ok=True)
        return path
    payload = {"schema": SCHEMA_VERSION, "attributes": attributes.with_rounded_zoom().to_dict()}
    write_json(path, payload)
    _LOGGER.debug("Stored edit attributes for %s", image_path)
    return path


__all__ = [
    "SCHEMA_VERSION",
    "load_attributes",
    "load_attributes_or_default",
    "save_attributes",
    "sidecar_path_for",
]
