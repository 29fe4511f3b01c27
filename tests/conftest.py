"""
Pytest configuration and shared fixtures for ECG synthesizer tests.
"""
import pytest
from ecg_synthesizer.api_models import ECGConfiguration, ECGData, Lead, LeadTrace
from ecg_synthesizer.clinical_patterns import apply_pattern
from ecg_synthesizer.configuration import create_configuration


@pytest.fixture
def default_config():
    """60 bpm for 10 seconds: exactly 1000 samples per beat at 1000 Hz."""
    return create_configuration(heart_rate_bpm=60, duration_sec=10.0)


@pytest.fixture
def fast_config():
    """Fast rate for beat-count scaling."""
    return create_configuration(heart_rate_bpm=120, duration_sec=10.0)


@pytest.fixture
def short_config():
    """Short trace for tests that synthesize all 12 leads repeatedly."""
    return create_configuration(heart_rate_bpm=60, duration_sec=2.0)


@pytest.fixture
def stemi_anterior_config(short_config):
    """Anterior STEMI overlaid on the short trace."""
    return apply_pattern(short_config, "stemi-anterior")


@pytest.fixture
def two_lead_ecg_data():
    """Two leads, three samples each, at 1 ms spacing."""
    times = [0.0, 0.001, 0.002]
    return ECGData(
        leads=[
            LeadTrace(lead=Lead.I, time=times, amplitude=[0.0, 0.5, 0.0]),
            LeadTrace(lead=Lead.II, time=times, amplitude=[0.0, 0.8, 0.0]),
        ],
        configuration=ECGConfiguration(),
    )


@pytest.fixture
def tolerance_config():
    """Standard tolerance values for numerical comparisons."""
    return {
        'timing_tolerance_sec': 0.001,  # One sample at 1000 Hz
        'amplitude_tolerance_mv': 1e-9,
        'peak_tolerance_mv': 0.01,
    }
