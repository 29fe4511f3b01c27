# // ecg_synthesizer/rhythm_logic.py
import logging
import math
from datetime import datetime, timezone
from typing import Optional, Union

import numpy as np

from .api_models import ECGConfiguration, ECGData, Lead, LeadTrace
from .beat_generation import generate_single_beat
from .full_ecg.lead_projection import LEADS, resolve_lead

logger = logging.getLogger(__name__)


def calculate_beat_count(config: ECGConfiguration) -> int:
    """ceil(duration / beat duration); beats are laid out at perfectly regular intervals."""
    return math.ceil(config.duration_sec / config.beat_duration_sec)


def generate_lead_trace(config: ECGConfiguration, lead: Union[Lead, str]):
    """
    Repeat the beat composer across the configured duration for one lead.

    Each beat is generated independently (no inter-beat variability); samples
    later than the configured duration are discarded.

    Returns:
        (time, amplitude) numpy arrays, non-decreasing in time
    """
    lead = resolve_lead(lead)
    beat_duration = config.beat_duration_sec
    num_beats = calculate_beat_count(config)

    beat_times, beat_values = [], []
    for beat_index in range(num_beats):
        t_axis, waveform = generate_single_beat(config, lead, beat_index * beat_duration)
        beat_times.append(t_axis)
        beat_values.append(waveform)

    if not beat_times:
        return np.zeros(0), np.zeros(0)

    full_time_axis = np.concatenate(beat_times)
    full_signal = np.concatenate(beat_values)
    keep = full_time_axis <= config.duration_sec
    logger.debug("Lead %s: %d beats, %d samples", lead.value, num_beats, int(keep.sum()))
    return full_time_axis[keep], full_signal[keep]


def generate_single_lead(config: ECGConfiguration, lead: Union[Lead, str]) -> LeadTrace:
    lead = resolve_lead(lead)
    time_axis, signal = generate_lead_trace(config, lead)
    return LeadTrace(lead=lead, time=time_axis.tolist(), amplitude=signal.tolist())


def synthesize(config: ECGConfiguration, timestamp: Optional[datetime] = None) -> ECGData:
    """
    Generate all 12 leads for a configuration snapshot.

    Leads are computed independently and returned in canonical order. The
    only part of the result that differs between two calls with the same
    configuration is the timestamp.
    """
    leads = [generate_single_lead(config, lead) for lead in LEADS]
    logger.info(
        "Synthesized %d leads: %.1f bpm, %.2f s, %d beats, %d samples/lead",
        len(leads), config.heart_rate_bpm, config.duration_sec,
        calculate_beat_count(config), leads[0].sample_count,
    )
    return ECGData(
        leads=leads,
        configuration=config,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
