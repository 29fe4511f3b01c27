# // ecg_synthesizer/beat_generation.py
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple, Union

from .api_models import ECGConfiguration, Lead, WaveformSpec
from .constants import (
    BASELINE_MV, P_WAVE_ONSET_OFFSET_SEC,
    STEMI_ELEVATION_THRESHOLD_MV, STEMI_S_WAVE_GAIN, STEMI_T_WAVE_GAIN,
    STEMI_ST_CURVATURE, STEMI_ALPHA_TAKEOFF,
)
from .full_ecg.lead_projection import get_lead_amplitude_multiplier, resolve_lead
from .st_segment import STModel, STShapeParams, generate_st_segment
from .waveform_primitives import Waveform, generate_p_wave, generate_qrs_complex, generate_t_wave


class MorphologyKind(str, Enum):
    NORMAL = "normal"
    STEMI = "stemi"


@dataclass(frozen=True)
class BeatMorphology:
    """
    Per-lead beat variant chosen before synthesis.

    The STEMI variant lifts the S-wave, adds a hyperacute T-wave and swaps
    the ST model for a convex sigmoid arc; the normal variant changes nothing.
    """
    kind: MorphologyKind
    st_elevation_mv: float = 0.0
    st_params: STShapeParams = STShapeParams()

    def adjust_qrs(self, spec: WaveformSpec) -> WaveformSpec:
        if self.kind is not MorphologyKind.STEMI:
            return spec
        morphology = spec.qrs_morphology
        lifted = morphology.model_copy(
            update={"s_amp_mul": morphology.s_amp_mul + STEMI_S_WAVE_GAIN * self.st_elevation_mv}
        )
        return spec.model_copy(update={"qrs": lifted})

    def adjust_t_wave(self, spec: WaveformSpec) -> WaveformSpec:
        if self.kind is not MorphologyKind.STEMI:
            return spec
        return spec.model_copy(
            update={"amplitude_mv": spec.amplitude_mv + STEMI_T_WAVE_GAIN * self.st_elevation_mv}
        )


NORMAL_MORPHOLOGY = BeatMorphology(MorphologyKind.NORMAL)


def select_beat_morphology(st_elevation_mv: float) -> BeatMorphology:
    """Pick the STEMI variant when the raw ST elevation exceeds 0.2 mV."""
    if st_elevation_mv > STEMI_ELEVATION_THRESHOLD_MV:
        return BeatMorphology(
            kind=MorphologyKind.STEMI,
            st_elevation_mv=st_elevation_mv,
            st_params=STShapeParams(
                model=STModel.SIGMOID_ARC,
                curvature=STEMI_ST_CURVATURE,
                alpha_takeoff=STEMI_ALPHA_TAKEOFF,
            ),
        )
    return NORMAL_MORPHOLOGY


class BeatTiming(NamedTuple):
    p_center: float
    qrs_center: float
    st_start: float
    st_end: float
    t_center: float


def calculate_beat_timing(config: ECGConfiguration, beat_start: float) -> BeatTiming:
    qrs_center = beat_start + config.pr_interval_sec
    return BeatTiming(
        p_center=beat_start + P_WAVE_ONSET_OFFSET_SEC,
        qrs_center=qrs_center,
        st_start=qrs_center + config.qrs_width_sec / 2,
        st_end=beat_start + config.qt_interval_sec - config.t_wave.duration_sec / 2,
        t_center=beat_start + config.qt_interval_sec,
    )


def _scaled(spec: WaveformSpec, scale: float) -> WaveformSpec:
    return spec.model_copy(update={"amplitude_mv": spec.amplitude_mv * scale})


def overlay_component(
    baseline: np.ndarray,
    beat_start: float,
    component: Waveform,
    sampling_rate: float,
) -> None:
    """
    Add a component onto the baseline in place.

    Each component sample lands on the baseline sample whose time is within
    half a sampling period; samples with no such neighbour are dropped.
    Repeated component times (overlapping QRS sub-pulses) all accumulate.
    """
    t_points, values = component
    if t_points.size == 0 or baseline.size == 0:
        return
    indices = np.rint((t_points - beat_start) * sampling_rate).astype(np.int64)
    in_range = (indices >= 0) & (indices < baseline.size)
    baseline_times = beat_start + np.clip(indices, 0, baseline.size - 1) / sampling_rate
    matched = in_range & (np.abs(baseline_times - t_points) < 0.5 / sampling_rate)
    np.add.at(baseline, indices[matched], values[matched])


def generate_single_beat(
    config: ECGConfiguration,
    lead: Union[Lead, str],
    beat_start: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Synthesize one cardiac cycle for one lead.

    Args:
        config: configuration snapshot
        lead: target lead
        beat_start: beat start time in seconds

    Returns:
        (time, amplitude) arrays with floor(60 / heart_rate * fs) samples,
        sorted by time
    """
    lead = resolve_lead(lead)
    fs = config.sampling_rate_hz
    scale = config.amplitude * get_lead_amplitude_multiplier(lead)
    timing = calculate_beat_timing(config, beat_start)

    st_elevation = config.st_segment.elevation_for(lead)
    st_offset = config.st_segment.offset_for(lead) * scale
    morphology = select_beat_morphology(st_elevation)

    p_wave = generate_p_wave(timing.p_center, _scaled(config.p_wave, scale), fs)
    qrs = generate_qrs_complex(timing.qrs_center, _scaled(morphology.adjust_qrs(config.qrs_complex), scale), fs)
    st_segment = generate_st_segment(timing.st_start, timing.st_end, st_offset, fs, morphology.st_params)
    t_wave = generate_t_wave(timing.t_center, _scaled(morphology.adjust_t_wave(config.t_wave), scale), fs)

    num_samples = int(np.floor(config.beat_duration_sec * fs))
    t_axis = beat_start + np.arange(num_samples) / fs
    beat_waveform = np.full(num_samples, BASELINE_MV)

    for component in (p_wave, qrs, st_segment, t_wave):
        overlay_component(beat_waveform, beat_start, component, fs)

    order = np.argsort(t_axis, kind="stable")
    return t_axis[order], beat_waveform[order]