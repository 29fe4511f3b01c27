# // ecg_synthesizer/clinical_patterns.py
import logging
from typing import Dict, List

from .api_models import (
    ConfigurationOverrides, ECGConfiguration, PathologyPreset, QRSMorphology,
    STSegmentMap, WaveformSpec,
)
from .configuration import update_configuration
from .exceptions import UnknownPatternError

logger = logging.getLogger(__name__)


def _qrs(amplitude_mv: float, duration_sec: float, **morphology) -> WaveformSpec:
    return WaveformSpec(
        amplitude_mv=amplitude_mv, duration_sec=duration_sec, shape="triangular",
        qrs=QRSMorphology(**morphology) if morphology else None,
    )


def _gaussian(amplitude_mv: float, duration_sec: float) -> WaveformSpec:
    return WaveformSpec(amplitude_mv=amplitude_mv, duration_sec=duration_sec, shape="gaussian")


# --- Clinical Pattern Definitions ---
NORMAL_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=75,
    st_segment=STSegmentMap(),
    p_wave=_gaussian(0.2, 0.08),
    qrs_complex=_qrs(1.0, 0.08),
    t_wave=_gaussian(0.3, 0.16),
)

STEMI_ANTERIOR_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=85,
    st_segment=STSegmentMap(
        elevation={"V1": 0.3, "V2": 0.4, "V3": 0.5, "V4": 0.4},
        depression={"II": 0.1, "III": 0.1, "aVF": 0.1},
    ),
    qrs_complex=_qrs(1.2, 0.08, s_amp_mul=0.1),  # Positive S-wave in STEMI leads
    t_wave=_gaussian(0.7, 0.20),                 # Peaked, hyperacute T-wave
)

STEMI_INFERIOR_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=65,
    st_segment=STSegmentMap(
        elevation={"II": 0.4, "III": 0.5, "aVF": 0.4},
        depression={"I": 0.1, "aVL": 0.15, "V2": 0.1},  # Reciprocal changes
    ),
    qrs_complex=_qrs(1.1, 0.08, s_amp_mul=0.05),
    t_wave=_gaussian(0.6, 0.17),
)

STEMI_LATERAL_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=90,
    st_segment=STSegmentMap(
        elevation={"I": 0.3, "aVL": 0.4, "V5": 0.4, "V6": 0.3},
        depression={"II": 0.1, "III": 0.1, "aVF": 0.1},
    ),
    qrs_complex=_qrs(1.3, 0.08, s_amp_mul=0.1),
    t_wave=_gaussian(0.6, 0.16),
)

NSTEMI_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=88,
    st_segment=STSegmentMap(depression={"V4": 0.2, "V5": 0.2, "V6": 0.15}),
    t_wave=_gaussian(-0.2, 0.16),  # T-wave inversion
    qrs_complex=_qrs(1.0, 0.08),
)

PERICARDITIS_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=95,
    st_segment=STSegmentMap(
        elevation={
            "I": 0.15, "II": 0.2, "III": 0.15,
            "aVL": 0.1, "aVF": 0.2,
            "V2": 0.2, "V3": 0.25, "V4": 0.2, "V5": 0.15, "V6": 0.1,
        },
        depression={"aVR": 0.1},
    ),
    pr_interval_sec=0.18,
    t_wave=_gaussian(0.25, 0.16),
)

LVH_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=70,
    st_segment=STSegmentMap(depression={"V5": 0.1, "V6": 0.1}),  # Strain pattern
    qrs_complex=_qrs(1.8, 0.10),
    t_wave=_gaussian(-0.3, 0.16),
)

RBBB_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=75,
    st_segment=STSegmentMap(),
    qrs_complex=_qrs(1.0, 0.12),  # Wide QRS (>=120ms)
    t_wave=_gaussian(-0.2, 0.16),
)

LBBB_PATTERN = ConfigurationOverrides(
    heart_rate_bpm=75,
    st_segment=STSegmentMap(),
    qrs_complex=_qrs(1.0, 0.14),
    t_wave=_gaussian(-0.3, 0.16),
    pr_interval_sec=0.18,
)

CLINICAL_PATTERNS: Dict[str, PathologyPreset] = {
    preset.name: preset for preset in (
        PathologyPreset(name="normal", overrides=NORMAL_PATTERN,
                        description="Normal sinus rhythm with typical PQRST morphology"),
        PathologyPreset(name="stemi-anterior", overrides=STEMI_ANTERIOR_PATTERN,
                        description="ST-elevation myocardial infarction affecting anterior wall (V1-V4)"),
        PathologyPreset(name="stemi-inferior", overrides=STEMI_INFERIOR_PATTERN,
                        description="ST-elevation myocardial infarction affecting inferior wall (II, III, aVF)"),
        PathologyPreset(name="stemi-lateral", overrides=STEMI_LATERAL_PATTERN,
                        description="ST-elevation myocardial infarction affecting lateral wall (I, aVL, V5-V6)"),
        PathologyPreset(name="nstemi", overrides=NSTEMI_PATTERN,
                        description="Non-ST elevation myocardial infarction with T-wave inversions"),
        PathologyPreset(name="pericarditis", overrides=PERICARDITIS_PATTERN,
                        description="Acute pericarditis with widespread ST elevation and PR depression"),
        PathologyPreset(name="lvh", overrides=LVH_PATTERN,
                        description="Left ventricular hypertrophy with increased QRS amplitude"),
        PathologyPreset(name="rbbb", overrides=RBBB_PATTERN,
                        description="Right bundle branch block with widened QRS complex"),
        PathologyPreset(name="lbbb", overrides=LBBB_PATTERN,
                        description="Left bundle branch block with widened QRS complex and T-wave inversions"),
    )
}


def list_patterns() -> List[str]:
    return list(CLINICAL_PATTERNS)


def get_preset(pattern_name: str) -> PathologyPreset:
    try:
        return CLINICAL_PATTERNS[pattern_name]
    except KeyError:
        raise UnknownPatternError(pattern_name, CLINICAL_PATTERNS) from None


def get_pattern(pattern_name: str) -> ConfigurationOverrides:
    """Partial configuration for a named pattern. Raises UnknownPatternError."""
    return get_preset(pattern_name).overrides


def get_pattern_description(pattern_name: str) -> str:
    return get_preset(pattern_name).description


def apply_pattern(base_config: ECGConfiguration, pattern_name: str) -> ECGConfiguration:
    """
    Overlay a clinical pattern onto a configuration.

    Every field the pattern sets replaces the base value, except the ST map,
    whose elevation/depression entries are merged per lead so base offsets on
    leads the pattern does not mention survive.
    """
    overrides = get_pattern(pattern_name)
    config = update_configuration(base_config, overrides)
    logger.debug("Applied clinical pattern '%s' (revision %d)", pattern_name, config.revision)
    return config
