# --- ECG Synthesis Constants ---
FS = 1000  # Default sampling rate (Hz)
BASELINE_MV = 0.0

# --- Default Configuration Values ---
DEFAULT_ECG_PARAMS = {
    "heart_rate_bpm": 75.0,
    "duration_sec": 10.0,
    "sampling_rate_hz": float(FS),
    "amplitude": 1.0,
    "pr_interval_sec": 0.16,
    "qt_interval_sec": 0.40,
    "qrs_width_sec": 0.08,
}

DEFAULT_P_WAVE = {"amplitude_mv": 0.2, "duration_sec": 0.08, "shape": "gaussian"}
DEFAULT_QRS_COMPLEX = {"amplitude_mv": 1.0, "duration_sec": 0.08, "shape": "triangular"}
DEFAULT_T_WAVE = {"amplitude_mv": 0.3, "duration_sec": 0.16, "shape": "gaussian"}

# --- Component Placement Within A Beat ---
P_WAVE_ONSET_OFFSET_SEC = 0.02  # P-wave center relative to beat start
P_WAVE_SIGMA_DIVISOR = 6.0      # sigma = duration / 6
T_WAVE_SIGMA_DIVISOR = 4.0      # sigma = duration / 4

# --- QRS Sub-Component Defaults ---
# Offsets and widths are fractions of the QRS duration, amplitudes are
# multipliers of the QRS base amplitude.
DEFAULT_QRS_MORPHOLOGY = {
    "q_offset_frac": -0.3, "r_offset_frac": 0.0, "s_offset_frac": 0.3,
    "q_width_frac": 0.2, "r_width_frac": 0.4, "s_width_frac": 0.2,
    "q_amp_mul": -0.3, "r_amp_mul": 1.0, "s_amp_mul": -0.2,
}

# --- ST Segment Shaping ---
ST_TAKEOFF_MS = 30.0            # 20-40 ms typical J-point takeoff
ST_FALL_MS = 30.0               # 20-40 ms typical fall into T onset
ST_CURVATURE = 0.6
ST_ALPHA_TAKEOFF = 1.0
ST_MAX_PHASE_FRACTION = 0.45    # Rise/fall phases never exceed 45% of the window
ST_DOME_CURVATURE_GAIN = 0.35   # Dome bulge above the plateau = 0.35 * curvature * elevation
ST_MIN_WINDOW_SEC = 1e-6

# --- STEMI Morphology ---
STEMI_ELEVATION_THRESHOLD_MV = 0.2  # Clinically significant ST elevation
STEMI_S_WAVE_GAIN = 0.5             # S multiplier += 0.5 * elevation
STEMI_T_WAVE_GAIN = 0.8             # T amplitude += 0.8 * elevation (hyperacute T)
STEMI_ST_CURVATURE = 0.8
STEMI_ALPHA_TAKEOFF = 0.9

# --- Export Constants ---
FHIR_LOWER_LIMIT_MV = -5.0
FHIR_UPPER_LIMIT_MV = 5.0
CSV_FLOAT_FORMAT = "{:.6f}"
FHIR_FLOAT_FORMAT = "{:.3f}"
