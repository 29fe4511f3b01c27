# // ecg_synthesizer/api_models.py
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, NamedTuple, Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .constants import (
    DEFAULT_ECG_PARAMS, DEFAULT_P_WAVE, DEFAULT_QRS_COMPLEX, DEFAULT_T_WAVE,
    DEFAULT_QRS_MORPHOLOGY,
)
from .exceptions import UnknownLeadError

_FROZEN_MODEL = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class Lead(str, Enum):
    """The 12 standard leads, in canonical order."""
    I = "I"
    II = "II"
    III = "III"
    aVR = "aVR"
    aVL = "aVL"
    aVF = "aVF"
    V1 = "V1"
    V2 = "V2"
    V3 = "V3"
    V4 = "V4"
    V5 = "V5"
    V6 = "V6"


def resolve_lead(lead: Union[Lead, str]) -> Lead:
    """
    Resolve a lead identifier ("V1", Lead.V1) to a Lead.

    Raises:
        UnknownLeadError: if the identifier is not one of the 12 standard leads.
    """
    if isinstance(lead, Lead):
        return lead
    try:
        return Lead(lead)
    except ValueError:
        raise UnknownLeadError(lead, [l.value for l in Lead]) from None


WaveformShape = Literal["gaussian", "triangular", "custom"]


class QRSMorphology(BaseModel):
    model_config = _FROZEN_MODEL

    q_offset_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["q_offset_frac"], description="Q center offset as a fraction of QRS duration.")
    r_offset_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["r_offset_frac"])
    s_offset_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["s_offset_frac"])
    q_width_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["q_width_frac"], ge=0, description="Q width as a fraction of QRS duration.")
    r_width_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["r_width_frac"], ge=0)
    s_width_frac: float = Field(DEFAULT_QRS_MORPHOLOGY["s_width_frac"], ge=0)
    q_amp_mul: float = Field(DEFAULT_QRS_MORPHOLOGY["q_amp_mul"], description="Q amplitude relative to the QRS base amplitude.")
    r_amp_mul: float = Field(DEFAULT_QRS_MORPHOLOGY["r_amp_mul"])
    s_amp_mul: float = Field(DEFAULT_QRS_MORPHOLOGY["s_amp_mul"])


class WaveformSpec(BaseModel):
    model_config = _FROZEN_MODEL

    amplitude_mv: float = Field(0.0, description="Peak amplitude in mV (negative for inverted waves).")
    duration_sec: float = Field(0.1, ge=0, description="Total wave duration in seconds.")
    shape: WaveformShape = Field("gaussian", description="Descriptive shape tag.")
    qrs: Optional[QRSMorphology] = Field(None, description="QRS-only sub-component control; ignored by P and T waves.")

    @property
    def qrs_morphology(self) -> QRSMorphology:
        return self.qrs if self.qrs is not None else QRSMorphology()


class STSegmentMap(BaseModel):
    model_config = _FROZEN_MODEL

    elevation: Mapping[Lead, float] = Field(default_factory=dict, description="Per-lead ST elevation in mV.")
    depression: Mapping[Lead, float] = Field(default_factory=dict, description="Per-lead ST depression in mV.")

    @field_validator("elevation", "depression", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[Lead, float]) -> Mapping[Lead, float]:
        return MappingProxyType(dict(value))

    @field_serializer("elevation", "depression")
    def _serialize_offsets(self, value: Mapping[Lead, float]) -> Dict[Lead, float]:
        return dict(value)

    def elevation_for(self, lead: Lead) -> float:
        return self.elevation.get(lead, 0.0)

    def depression_for(self, lead: Lead) -> float:
        return self.depression.get(lead, 0.0)

    def offset_for(self, lead: Lead) -> float:
        """Net ST offset (elevation minus depression) before amplitude scaling."""
        return self.elevation_for(lead) - self.depression_for(lead)


class ECGConfiguration(BaseModel):
    """Immutable snapshot of everything a synthesis call needs."""
    model_config = _FROZEN_MODEL

    heart_rate_bpm: float = Field(DEFAULT_ECG_PARAMS["heart_rate_bpm"], gt=0, description="Heart rate in beats per minute.")
    duration_sec: float = Field(DEFAULT_ECG_PARAMS["duration_sec"], ge=0, description="Total trace duration in seconds.")
    sampling_rate_hz: float = Field(DEFAULT_ECG_PARAMS["sampling_rate_hz"], gt=0, description="Samples per second.")
    amplitude: float = Field(DEFAULT_ECG_PARAMS["amplitude"], description="Global amplitude scalar applied to every component.")

    p_wave: WaveformSpec = Field(default_factory=lambda: WaveformSpec(**DEFAULT_P_WAVE))
    qrs_complex: WaveformSpec = Field(default_factory=lambda: WaveformSpec(**DEFAULT_QRS_COMPLEX))
    t_wave: WaveformSpec = Field(default_factory=lambda: WaveformSpec(**DEFAULT_T_WAVE))
    st_segment: STSegmentMap = Field(default_factory=STSegmentMap)

    pr_interval_sec: float = Field(DEFAULT_ECG_PARAMS["pr_interval_sec"], ge=0, description="Beat start to QRS center.")
    qt_interval_sec: float = Field(DEFAULT_ECG_PARAMS["qt_interval_sec"], ge=0, description="Beat start to T-wave center.")
    qrs_width_sec: float = Field(DEFAULT_ECG_PARAMS["qrs_width_sec"], ge=0, description="QRS width used to place the ST window.")

    revision: int = Field(0, ge=0, description="Incremented by every configuration change.")

    @property
    def beat_duration_sec(self) -> float:
        return 60.0 / self.heart_rate_bpm


class ConfigurationOverrides(BaseModel):
    """Partial configuration: only the fields that were set are applied."""
    model_config = _FROZEN_MODEL

    heart_rate_bpm: Optional[float] = Field(None, gt=0)
    duration_sec: Optional[float] = Field(None, ge=0)
    sampling_rate_hz: Optional[float] = Field(None, gt=0)
    amplitude: Optional[float] = None
    p_wave: Optional[WaveformSpec] = None
    qrs_complex: Optional[WaveformSpec] = None
    t_wave: Optional[WaveformSpec] = None
    st_segment: Optional[STSegmentMap] = None
    pr_interval_sec: Optional[float] = Field(None, ge=0)
    qt_interval_sec: Optional[float] = Field(None, ge=0)
    qrs_width_sec: Optional[float] = Field(None, ge=0)

    def to_changes(self) -> Dict[str, object]:
        """Top-level fields that were explicitly provided, as model instances."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ECGPoint(NamedTuple):
    time: float
    amplitude: float


class LeadTrace(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    lead: Lead
    time: Tuple[float, ...] = Field(default_factory=tuple, description="Sample times in seconds.")
    amplitude: Tuple[float, ...] = Field(default_factory=tuple, description="Sample amplitudes in mV.")

    @model_validator(mode="after")
    def _check_samples(self) -> "LeadTrace":
        if len(self.time) != len(self.amplitude):
            raise ValueError(
                f"Lead {self.lead.value}: {len(self.time)} times but {len(self.amplitude)} amplitudes"
            )
        if len(self.time) > 1 and np.any(np.diff(np.asarray(self.time)) < 0):
            raise ValueError(f"Lead {self.lead.value}: sample times must be non-decreasing")
        return self

    @property
    def points(self) -> List[ECGPoint]:
        return [ECGPoint(t, a) for t, a in zip(self.time, self.amplitude)]

    @property
    def sample_count(self) -> int:
        return len(self.time)


class ECGData(BaseModel):
    """Multi-lead synthesis output. Never modified after creation."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    leads: Tuple[LeadTrace, ...]
    configuration: ECGConfiguration
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def get_lead(self, lead: Union[Lead, str]) -> LeadTrace:
        resolved = resolve_lead(lead)
        for trace in self.leads:
            if trace.lead == resolved:
                return trace
        raise UnknownLeadError(resolved.value, [trace.lead.value for trace in self.leads])


class PathologyPreset(BaseModel):
    model_config = _FROZEN_MODEL

    name: str
    description: str
    overrides: ConfigurationOverrides


class SynthesisRequest(BaseModel):
    configuration: Optional[ConfigurationOverrides] = Field(None, description="Fields to change from the default configuration.")
    pattern: Optional[str] = Field(None, description="Clinical pattern overlaid on top of the configuration.")
