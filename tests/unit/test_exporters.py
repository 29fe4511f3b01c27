"""
Tests for JSON, CSV and FHIR export.
"""
import json

import pytest
from ecg_synthesizer.api_models import ECGConfiguration, ECGData, Lead, LeadTrace
from ecg_synthesizer.exceptions import ExportFormatError, UnknownLeadError
from ecg_synthesizer.exporters import (
    from_json,
    get_lead_snomed_code,
    to_csv,
    to_fhir,
    to_json,
)
from ecg_synthesizer.rhythm_logic import synthesize


class TestCSVExport:
    """One row per sample, time from the first lead."""

    @pytest.mark.unit
    def test_two_lead_csv(self, two_lead_ecg_data):
        assert to_csv(two_lead_ecg_data) == (
            "time,I,II\n"
            "0.000000,0.000000,0.000000\n"
            "0.001000,0.500000,0.800000\n"
            "0.002000,0.000000,0.000000\n"
        )

    @pytest.mark.unit
    def test_shorter_leads_are_padded(self):
        data = ECGData(
            leads=[
                LeadTrace(lead=Lead.V1, time=[0.0, 0.001], amplitude=[0.1, 0.2]),
                LeadTrace(lead=Lead.V2, time=[0.0, 0.001, 0.002], amplitude=[0.3, 0.4, -0.5]),
            ],
            configuration=ECGConfiguration(),
        )
        lines = to_csv(data).splitlines()

        assert lines[0] == "time,V1,V2"
        assert lines[-1] == ",,-0.500000"

    @pytest.mark.unit
    def test_no_leads_gives_empty_document(self):
        assert to_csv(ECGData(leads=[], configuration=ECGConfiguration())) == ""

    @pytest.mark.unit
    def test_full_synthesis_row_count(self, short_config):
        lines = to_csv(synthesize(short_config)).splitlines()

        assert lines[0].split(",") == ["time"] + [lead.value for lead in Lead]
        assert len(lines) == 1 + 2000


class TestJSONExport:
    """Round trip through pydantic JSON."""

    @pytest.mark.unit
    def test_round_trip_preserves_everything(self, stemi_anterior_config):
        data = synthesize(stemi_anterior_config)
        restored = from_json(to_json(data))

        assert restored == data
        assert restored.configuration.st_segment.elevation[Lead.V3] == pytest.approx(0.5)
        assert restored.timestamp == data.timestamp

    @pytest.mark.unit
    def test_json_is_pretty_printed(self, two_lead_ecg_data):
        text = to_json(two_lead_ecg_data)
        parsed = json.loads(text)

        assert "\n  " in text
        assert [lead["lead"] for lead in parsed["leads"]] == ["I", "II"]
        assert parsed["leads"][1]["amplitude"] == [0.0, 0.8, 0.0]

    @pytest.mark.unit
    @pytest.mark.parametrize("payload", ["not json", "{}", '{"leads": [], "configuration": {"heart_rate_bpm": 0}}'])
    def test_invalid_json_raises_export_error(self, payload):
        with pytest.raises(ExportFormatError) as exc_info:
            from_json(payload)

        assert isinstance(exc_info.value, ValueError)
        assert str(exc_info.value).startswith("Invalid ECG JSON data:")


class TestFHIRExport:
    """FHIR-style Observation resource."""

    @pytest.mark.unit
    def test_observation_structure(self, short_config):
        data = synthesize(short_config)
        resource = to_fhir(data)

        assert resource["resourceType"] == "Observation"
        assert resource["status"] == "final"
        assert resource["code"]["coding"][0]["code"] == "11524-6"
        assert "subject" not in resource
        assert len(resource["component"]) == 12

        first = resource["component"][0]
        sampled = first["valueSampledData"]
        assert first["code"]["coding"][0]["display"] == "Lead I"
        assert sampled["period"] == pytest.approx(1.0)
        assert sampled["origin"]["value"] == 0
        assert (sampled["lowerLimit"], sampled["upperLimit"]) == (-5.0, 5.0)
        assert len(sampled["data"].split(" ")) == data.leads[0].sample_count

    @pytest.mark.unit
    def test_amplitudes_use_three_decimals(self, two_lead_ecg_data):
        resource = to_fhir(two_lead_ecg_data, patient_id="patient-42")

        assert resource["subject"] == {"reference": "Patient/patient-42"}
        assert resource["component"][1]["valueSampledData"]["data"] == "0.000 0.800 0.000"

    @pytest.mark.unit
    def test_period_follows_sampling_rate(self):
        data = ECGData(
            leads=[LeadTrace(lead=Lead.II, time=[0.0, 0.002], amplitude=[0.0, 1.2346])],
            configuration=ECGConfiguration(sampling_rate_hz=500),
        )
        sampled = to_fhir(data)["component"][0]["valueSampledData"]

        assert sampled["period"] == pytest.approx(2.0)
        assert sampled["data"] == "0.000 1.235"

    @pytest.mark.unit
    def test_snomed_codes(self):
        assert get_lead_snomed_code("I") == "251199002"
        assert get_lead_snomed_code(Lead.V6) == "251210008"
        with pytest.raises(UnknownLeadError):
            get_lead_snomed_code("V7")
