# // ecg_synthesizer/configuration.py
"""
Creating and changing ECG configurations.

Configurations are frozen; every helper here returns a new instance with
``revision`` bumped by one. Top-level fields named in a change replace the
old value wholesale, except the ST map: its elevation and depression
sub-maps are merged lead by lead unless ``replace_st_segment=True`` is passed.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from .api_models import ConfigurationOverrides, ECGConfiguration, Lead, STSegmentMap
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ConfigurationChanges = Union[ConfigurationOverrides, Mapping[str, Any]]

DEFAULT_CONFIGURATION = ECGConfiguration()


def _validate(fields: Dict[str, Any]) -> ECGConfiguration:
    try:
        return ECGConfiguration.model_validate(fields)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid ECG configuration: {exc}") from exc


def _as_dict(value: Any) -> Any:
    return value.model_dump() if isinstance(value, BaseModel) else value


def merge_st_segment(
    base: STSegmentMap,
    overlay: Union[STSegmentMap, Mapping[str, Mapping[Union[Lead, str], float]]],
) -> STSegmentMap:
    """
    Merge two ST maps lead by lead; leads present in the overlay win.

    Raises:
        ConfigurationError: if the overlay names an unknown lead.
    """
    overlay_fields = _as_dict(overlay)
    try:
        overlay_map = STSegmentMap.model_validate(overlay_fields)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid ST segment map: {exc}") from exc
    return STSegmentMap(
        elevation={**base.elevation, **overlay_map.elevation},
        depression={**base.depression, **overlay_map.depression},
    )


def create_configuration(changes: Optional[ConfigurationChanges] = None, **field_changes: Any) -> ECGConfiguration:
    """Defaults merged with caller overrides (ST map merged onto the empty default)."""
    return update_configuration(DEFAULT_CONFIGURATION, changes, **field_changes).model_copy(update={"revision": 0})


def update_configuration(
    config: ECGConfiguration,
    changes: Optional[ConfigurationChanges] = None,
    *,
    replace_st_segment: bool = False,
    **field_changes: Any,
) -> ECGConfiguration:
    """
    Return a new configuration with the given top-level fields replaced.

    Args:
        config: configuration to start from (left untouched)
        changes: ConfigurationOverrides or a mapping of field name to value
        replace_st_segment: replace the ST map wholesale instead of merging
            it lead by lead
        **field_changes: more field changes, applied after ``changes``

    Raises:
        ConfigurationError: on unknown fields or values that fail validation
    """
    if isinstance(changes, ConfigurationOverrides):
        updates = changes.to_changes()
    else:
        updates = dict(changes or {})
    updates.update(field_changes)
    updates.pop("revision", None)

    fields = config.model_dump()
    for name, value in updates.items():
        if name == "st_segment" and not replace_st_segment and value is not None:
            fields[name] = merge_st_segment(config.st_segment, value).model_dump()
        else:
            fields[name] = _as_dict(value)
    fields["revision"] = config.revision + 1

    updated = _validate(fields)
    logger.debug("Configuration updated to revision %d (fields: %s)", updated.revision, sorted(updates))
    return updated


def set_st_offsets(
    config: ECGConfiguration,
    elevation: Optional[Mapping[Union[Lead, str], float]] = None,
    depression: Optional[Mapping[Union[Lead, str], float]] = None,
) -> ECGConfiguration:
    """Set per-lead ST elevation/depression, keeping offsets for other leads."""
    overlay = {"elevation": dict(elevation or {}), "depression": dict(depression or {})}
    return update_configuration(config, st_segment=overlay)
