# // ecg_synthesizer/waveform_primitives.py
import numpy as np
from typing import Tuple

from .api_models import WaveformSpec
from .constants import P_WAVE_SIGMA_DIVISOR, T_WAVE_SIGMA_DIVISOR

Waveform = Tuple[np.ndarray, np.ndarray]  # (time_sec, amplitude_mv)


def _pulse_time_axis(center: float, duration: float, sampling_rate: float) -> np.ndarray:
    num_samples = max(0, int(np.floor(duration * sampling_rate)))
    start_time = center - duration / 2
    return start_time + np.arange(num_samples) / sampling_rate


# --- Waveform Primitives ---
def gaussian_pulse(center: float, amplitude: float, sigma: float, duration: float, sampling_rate: float) -> Waveform:
    """
    Sample a Gaussian pulse over [center - duration/2, center + duration/2).

    A non-positive sigma degenerates to a single spike at the sample closest
    to the center (all other samples are zero).
    """
    t_points = _pulse_time_axis(center, duration, sampling_rate)
    offsets = t_points - center
    if sigma <= 0:
        values = np.zeros_like(t_points)
        if t_points.size:
            values[np.argmin(np.abs(offsets))] = amplitude
        return t_points, values
    return t_points, amplitude * np.exp(-(offsets ** 2) / (2 * sigma ** 2))


def triangular_pulse(center: float, amplitude: float, duration: float, sampling_rate: float) -> Waveform:
    t_points = _pulse_time_axis(center, duration, sampling_rate)
    if t_points.size == 0:
        return t_points, np.zeros(0)
    half_duration = duration / 2
    distance = np.abs(t_points - center)
    values = np.where(distance <= half_duration, amplitude * (1 - distance / half_duration), 0.0)
    return t_points, values


# --- Complex Synthesizers ---
def generate_p_wave(center: float, spec: WaveformSpec, sampling_rate: float) -> Waveform:
    sigma = spec.duration_sec / P_WAVE_SIGMA_DIVISOR
    return gaussian_pulse(center, spec.amplitude_mv, sigma, spec.duration_sec, sampling_rate)


def generate_qrs_complex(center: float, spec: WaveformSpec, sampling_rate: float) -> Waveform:
    """
    Build the QRS complex from three triangular sub-pulses (Q, R, S).

    Each sub-pulse is placed at center + duration * offset_frac with width
    duration * width_frac and amplitude base * amp_mul. The sub-pulses are
    generated independently, so the concatenated samples are re-sorted by
    time (stable, so overlapping samples keep Q-R-S order).

    Args:
        center: QRS center time in seconds
        spec: QRS waveform spec; spec.qrs overrides the default sub-components
        sampling_rate: samples per second

    Returns:
        (time, amplitude) arrays sorted by time; may contain repeated times
        where sub-pulses overlap
    """
    qrs_width = spec.duration_sec
    morphology = spec.qrs_morphology
    components = [
        (morphology.q_offset_frac, morphology.q_width_frac, morphology.q_amp_mul),
        (morphology.r_offset_frac, morphology.r_width_frac, morphology.r_amp_mul),
        (morphology.s_offset_frac, morphology.s_width_frac, morphology.s_amp_mul),
    ]
    times, values = [], []
    for offset_frac, width_frac, amp_mul in components:
        t_points, wave = triangular_pulse(
            center + qrs_width * offset_frac,
            spec.amplitude_mv * amp_mul,
            qrs_width * width_frac,
            sampling_rate,
        )
        times.append(t_points)
        values.append(wave)

    all_times = np.concatenate(times)
    all_values = np.concatenate(values)
    order = np.argsort(all_times, kind="stable")
    return all_times[order], all_values[order]


def generate_t_wave(center: float, spec: WaveformSpec, sampling_rate: float) -> Waveform:
    sigma = spec.duration_sec / T_WAVE_SIGMA_DIVISOR
    return gaussian_pulse(center, spec.amplitude_mv, sigma, spec.duration_sec, sampling_rate)
