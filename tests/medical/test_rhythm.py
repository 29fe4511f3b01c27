"""
Tests for the rhythm sequencer and multi-lead output.
Validates beat counts, lead completeness, time bounds and determinism.
"""
import pytest
import numpy as np
from ecg_synthesizer.api_models import ECGPoint, Lead
from ecg_synthesizer.configuration import create_configuration, update_configuration
from ecg_synthesizer.exceptions import UnknownLeadError
from ecg_synthesizer.rhythm_logic import (
    calculate_beat_count,
    generate_lead_trace,
    generate_single_lead,
    synthesize,
)


class TestHeartRateScaling:
    """Beats are laid out at 60 / heart_rate second intervals."""

    @pytest.mark.medical
    def test_beat_count_at_60_bpm(self, default_config):
        assert calculate_beat_count(default_config) == 10

    @pytest.mark.medical
    def test_beat_count_at_120_bpm(self, fast_config):
        assert calculate_beat_count(fast_config) == 20

    @pytest.mark.medical
    def test_partial_beat_rounds_up(self):
        assert calculate_beat_count(create_configuration(heart_rate_bpm=75, duration_sec=10.0)) == 13

    @pytest.mark.medical
    def test_r_peaks_follow_heart_rate(self, fast_config, tolerance_config):
        t, v = generate_lead_trace(fast_config, "II")

        # Only the R apex in lead II (1.2 mV) clears 1.15 mV
        peak_times = t[v > 1.15]
        assert len(peak_times) == 20
        assert np.allclose(np.diff(peak_times), 0.5, atol=tolerance_config['timing_tolerance_sec'])
        assert peak_times[0] == pytest.approx(0.16, abs=tolerance_config['timing_tolerance_sec'])


class TestMultiLeadSynthesis:
    """Shape of the synthesized 12-lead output."""

    @pytest.mark.medical
    def test_twelve_leads_in_canonical_order(self, short_config):
        data = synthesize(short_config)

        assert [trace.lead for trace in data.leads] == list(Lead)
        assert data.configuration == short_config

    @pytest.mark.medical
    def test_times_sorted_and_bounded(self, default_config):
        data = synthesize(default_config)

        for trace in data.leads:
            t = np.asarray(trace.time)
            assert trace.sample_count == 10000
            assert np.all(np.diff(t) >= 0), f"Lead {trace.lead.value} is not sorted in time"
            assert t[-1] <= default_config.duration_sec

    @pytest.mark.medical
    def test_trailing_partial_beat_is_clipped(self):
        config = create_configuration(heart_rate_bpm=75, duration_sec=2.0)
        t, _ = generate_lead_trace(config, "V1")

        assert t[-1] <= 2.0
        assert len(t) == 2001  # 0.000 .. 2.000 s inclusive

    @pytest.mark.medical
    def test_zero_duration_gives_empty_leads(self):
        data = synthesize(create_configuration(duration_sec=0.0))

        assert len(data.leads) == 12
        assert all(trace.sample_count == 0 for trace in data.leads)

    @pytest.mark.medical
    def test_tiny_duration_still_produces_samples(self):
        data = synthesize(create_configuration(heart_rate_bpm=60, duration_sec=0.001))

        assert all(trace.time == (0.0, 0.001) for trace in data.leads)

    @pytest.mark.medical
    def test_output_samples_are_read_only(self, short_config):
        data = synthesize(short_config)
        trace = data.leads[0]

        with pytest.raises(AttributeError):
            trace.time.append(-5.0)
        with pytest.raises(TypeError):
            trace.amplitude[0] = 1.0
        with pytest.raises(AttributeError):
            data.leads.append(trace)
        assert trace.time[0] == 0.0

    @pytest.mark.medical
    def test_points_pair_time_with_amplitude(self, two_lead_ecg_data):
        points = two_lead_ecg_data.get_lead("II").points

        assert len(points) == 3
        assert points[1] == ECGPoint(time=0.001, amplitude=0.8)
        assert points[1].amplitude == 0.8

    @pytest.mark.medical
    def test_synthesis_is_idempotent(self, short_config):
        first = synthesize(short_config)
        second = synthesize(short_config)

        assert first.leads == second.leads
        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})

    @pytest.mark.medical
    def test_single_lead_matches_full_synthesis(self, short_config):
        data = synthesize(short_config)
        assert generate_single_lead(short_config, "aVL") == data.get_lead(Lead.aVL)

    @pytest.mark.medical
    def test_lead_lookup(self, short_config):
        data = synthesize(short_config)

        assert data.get_lead("V5").lead is Lead.V5
        with pytest.raises(UnknownLeadError):
            data.get_lead("V7")
        with pytest.raises(UnknownLeadError):
            generate_single_lead(short_config, "V7")

    @pytest.mark.medical
    def test_sampling_rate_sets_sample_count(self):
        config = create_configuration(heart_rate_bpm=60, duration_sec=2.0, sampling_rate_hz=250)
        t, _ = generate_lead_trace(config, "I")

        assert len(t) == 500
        assert np.allclose(np.diff(t), 0.004)

    @pytest.mark.medical
    def test_global_amplitude_scales_every_lead(self, short_config):
        base = synthesize(short_config)
        doubled = synthesize(update_configuration(short_config, amplitude=2.0))

        for a, b in zip(base.leads, doubled.leads):
            assert np.allclose(np.asarray(b.amplitude), 2.0 * np.asarray(a.amplitude))
