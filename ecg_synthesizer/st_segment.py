# // ecg_synthesizer/st_segment.py
"""
ST-segment interpolation between the J-point and the T-wave.

Two models are available:

- ``STModel.HERMITE``: a cubic Hermite spline that matches value and slope at
  both ends of the window (C1 continuity). Used for normal morphology.
- ``STModel.SIGMOID_ARC``: quintic smoothstep takeoff, raised-cosine dome and
  quintic smoothstep fall. The dome starts and ends on the plateau and bulges
  above it by ``0.35 * curvature * elevation`` at its middle, so positive
  curvature gives the convex, "tombstone" look of a STEMI. Every phase joins
  the next with matching value and zero slope.

Both models always return at least one sample, even for an empty window.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .constants import (
    ST_TAKEOFF_MS, ST_FALL_MS, ST_CURVATURE, ST_ALPHA_TAKEOFF,
    ST_MAX_PHASE_FRACTION, ST_DOME_CURVATURE_GAIN, ST_MIN_WINDOW_SEC,
)
from .waveform_primitives import Waveform


class STModel(str, Enum):
    HERMITE = "hermite"
    SIGMOID_ARC = "sigmoid_arc"


@dataclass(frozen=True)
class STShapeParams:
    model: STModel = STModel.HERMITE
    takeoff_ms: float = ST_TAKEOFF_MS
    fall_ms: float = ST_FALL_MS
    curvature: float = ST_CURVATURE
    alpha_takeoff: float = ST_ALPHA_TAKEOFF
    s1_override: Optional[float] = None  # End slope in mV/s


@dataclass(frozen=True)
class STContext:
    """What is known about the neighbouring waves at the window edges."""
    v0: float = 0.0                           # J-point value
    t_wave_peak_time: Optional[float] = None
    t_wave_sigma: Optional[float] = None
    t_wave_start_value: Optional[float] = None  # T-wave value at the window end


def _window_samples(start_time: float, end_time: float, sampling_rate: float):
    duration = max(0.0, end_time - start_time)
    num_samples = max(1, int(np.floor(duration * sampling_rate)))
    t_points = start_time + np.arange(num_samples) / sampling_rate
    u = np.arange(num_samples) / (num_samples - 1) if num_samples > 1 else np.zeros(1)
    return duration, t_points, u


def _quintic_smoothstep(w: np.ndarray) -> np.ndarray:
    return 6 * w ** 5 - 15 * w ** 4 + 10 * w ** 3


def _end_slope(end_time: float, params: STShapeParams, context: STContext) -> float:
    if params.s1_override is not None:
        return params.s1_override
    if (context.t_wave_peak_time is not None and context.t_wave_sigma
            and context.t_wave_start_value is not None):
        sigma = context.t_wave_sigma
        dt = end_time - context.t_wave_peak_time
        return context.t_wave_start_value * (-dt / sigma ** 2) * np.exp(-(dt ** 2) / (2 * sigma ** 2))
    return 0.0


def hermite_st_segment(
    start_time: float,
    end_time: float,
    elevation: float,
    sampling_rate: float,
    params: STShapeParams = STShapeParams(),
    context: STContext = STContext(),
) -> Waveform:
    duration, t_points, u = _window_samples(start_time, end_time, sampling_rate)
    v0 = context.v0
    v_peak = v0 + elevation

    # Takeoff slope in mV/s derived from the takeoff time, softened by alpha
    s0 = elevation / max(1.0, params.takeoff_ms) * 1000.0 * params.alpha_takeoff
    s1 = _end_slope(end_time, params, context)

    window = max(ST_MIN_WINDOW_SEC, duration)
    m0 = s0 * window
    m1 = s1 * window

    u2 = u * u
    u3 = u2 * u
    h00 = 2 * u3 - 3 * u2 + 1
    h10 = u3 - 2 * u2 + u
    h01 = -2 * u3 + 3 * u2
    h11 = u3 - u2
    return t_points, h00 * v0 + h10 * m0 + h01 * v_peak + h11 * m1


def sigmoid_arc_st_segment(
    start_time: float,
    end_time: float,
    elevation: float,
    sampling_rate: float,
    params: STShapeParams = STShapeParams(model=STModel.SIGMOID_ARC),
    context: STContext = STContext(),
) -> Waveform:
    duration, t_points, u = _window_samples(start_time, end_time, sampling_rate)
    v0 = context.v0
    v_peak = v0 + elevation
    v_end = context.t_wave_start_value if context.t_wave_start_value is not None else v0

    window = max(ST_MIN_WINDOW_SEC, duration)
    rise = min(ST_MAX_PHASE_FRACTION, (params.takeoff_ms / 1000.0) / window)
    fall = min(ST_MAX_PHASE_FRACTION, (params.fall_ms / 1000.0) / window)
    mid_length = max(ST_MIN_WINDOW_SEC, 1 - rise - fall)

    in_rise = (u <= rise) & (rise > 0)
    in_fall = ~in_rise & (u >= 1 - fall) & (fall > 0)

    rise_w = np.clip(u / rise, 0.0, 1.0) if rise > 0 else np.zeros_like(u)
    fall_w = np.clip((u - (1 - fall)) / fall, 0.0, 1.0) if fall > 0 else np.zeros_like(u)
    rise_values = v0 + (v_peak - v0) * _quintic_smoothstep(rise_w)
    fall_s = _quintic_smoothstep(fall_w)
    fall_values = v_peak * (1 - fall_s) + v_end * fall_s

    # Raised-cosine bump on top of the plateau; zero value and slope at both ends
    dome_s = np.clip((u - rise) / mid_length, 0.0, 1.0)
    dome = (1 - np.cos(2 * np.pi * dome_s)) / 2
    dome_values = v_peak + (v_peak - v0) * ST_DOME_CURVATURE_GAIN * params.curvature * dome

    return t_points, np.where(in_rise, rise_values, np.where(in_fall, fall_values, dome_values))


def generate_st_segment(
    start_time: float,
    end_time: float,
    elevation: float,
    sampling_rate: float,
    params: Optional[STShapeParams] = None,
    context: Optional[STContext] = None,
) -> Waveform:
    """
    Bridge the J-point (context.v0) to v0 + elevation over [start_time, end_time].

    Args:
        start_time: ST window start (end of QRS) in seconds
        end_time: ST window end (T-wave onset) in seconds
        elevation: ST offset in mV, already scaled for the lead
        sampling_rate: samples per second
        params: model selection and shape controls
        context: neighbouring-wave values; defaults to a zero J-point and no T-wave info

    Returns:
        (time, amplitude) arrays with max(1, floor(duration * sampling_rate)) samples
    """
    params = params or STShapeParams()
    context = context or STContext()
    if params.model == STModel.SIGMOID_ARC:
        return sigmoid_arc_st_segment(start_time, end_time, elevation, sampling_rate, params, context)
    return hermite_st_segment(start_time, end_time, elevation, sampling_rate, params, context)
