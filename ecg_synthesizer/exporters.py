# // ecg_synthesizer/exporters.py
import csv
import io
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .api_models import ECGData, Lead
from .constants import CSV_FLOAT_FORMAT, FHIR_FLOAT_FORMAT, FHIR_LOWER_LIMIT_MV, FHIR_UPPER_LIMIT_MV
from .exceptions import ExportFormatError
from .full_ecg.lead_projection import resolve_lead

LEAD_SNOMED_CODES: Dict[Lead, str] = {
    Lead.I: "251199002",
    Lead.II: "251200004",
    Lead.III: "251201000",
    Lead.aVR: "251202007",
    Lead.aVL: "251203002",
    Lead.aVF: "251204008",
    Lead.V1: "251205009",
    Lead.V2: "251206005",
    Lead.V3: "251207001",
    Lead.V4: "251208006",
    Lead.V5: "251209003",
    Lead.V6: "251210008",
}


def to_json(ecg_data: ECGData, indent: Optional[int] = 2) -> str:
    return ecg_data.model_dump_json(indent=indent)


def from_json(json_string: Union[str, bytes]) -> ECGData:
    try:
        return ECGData.model_validate_json(json_string)
    except ValidationError as exc:
        raise ExportFormatError(f"Invalid ECG JSON data: {exc}") from exc


def to_csv(ecg_data: ECGData) -> str:
    """
    One row per sample index: the time column comes from the first lead,
    followed by one amplitude column per lead. Leads shorter than the longest
    one are padded with empty cells.
    """
    leads = ecg_data.leads
    if not leads:
        return ""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["time"] + [trace.lead.value for trace in leads])

    reference_times = leads[0].time
    max_length = max(trace.sample_count for trace in leads)
    for i in range(max_length):
        row = [CSV_FLOAT_FORMAT.format(reference_times[i]) if i < len(reference_times) else ""]
        for trace in leads:
            row.append(CSV_FLOAT_FORMAT.format(trace.amplitude[i]) if i < trace.sample_count else "")
        writer.writerow(row)
    return buffer.getvalue()


def get_lead_snomed_code(lead: Union[Lead, str]) -> str:
    return LEAD_SNOMED_CODES[resolve_lead(lead)]


def to_fhir(ecg_data: ECGData, patient_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a FHIR-style Observation with one sampled-data component per lead.

    The sampling period is expressed in milliseconds; amplitudes are in mV
    with an origin of 0.
    """
    config = ecg_data.configuration
    resource: Dict[str, Any] = {
        "resourceType": "Observation",
        "id": f"ecg-{int(ecg_data.timestamp.timestamp() * 1000)}",
        "status": "final",
        "category": [{
            "coding": [{
                "system": "http://terminology.hl7.org/CodeSystem/observation-category",
                "code": "survey",
                "display": "Survey",
            }]
        }],
        "code": {
            "coding": [{
                "system": "http://loinc.org",
                "code": "11524-6",
                "display": "12-lead EKG",
            }]
        },
        "effectiveDateTime": ecg_data.timestamp.isoformat(),
        "component": [
            {
                "code": {
                    "coding": [{
                        "system": "http://snomed.info/sct",
                        "code": LEAD_SNOMED_CODES[trace.lead],
                        "display": f"Lead {trace.lead.value}",
                    }]
                },
                "valueSampledData": {
                    "origin": {
                        "value": 0,
                        "unit": "mV",
                        "system": "http://unitsofmeasure.org",
                        "code": "mV",
                    },
                    "period": 1000.0 / config.sampling_rate_hz,
                    "factor": 1,
                    "lowerLimit": FHIR_LOWER_LIMIT_MV,
                    "upperLimit": FHIR_UPPER_LIMIT_MV,
                    "dimensions": 1,
                    "data": " ".join(FHIR_FLOAT_FORMAT.format(value) for value in trace.amplitude),
                },
            }
            for trace in ecg_data.leads
        ],
        "note": [{
            "text": f"Generated ECG with heart rate {config.heart_rate_bpm:g} bpm, duration {config.duration_sec:g}s"
        }],
    }
    if patient_id:
        resource["subject"] = {"reference": f"Patient/{patient_id}"}
    return resource
