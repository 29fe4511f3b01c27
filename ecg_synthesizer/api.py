# // ecg_synthesizer/api.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .api_models import ECGData, SynthesisRequest
from .clinical_patterns import CLINICAL_PATTERNS, apply_pattern, get_preset
from .configuration import DEFAULT_CONFIGURATION, update_configuration
from .exceptions import ConfigurationError, UnknownLeadError, UnknownPatternError
from .exporters import get_lead_snomed_code, to_csv, to_fhir
from .full_ecg.lead_projection import LEADS, get_lead_projection, resolve_lead
from .rhythm_logic import synthesize

logger = logging.getLogger(__name__)

app = FastAPI(title="ECG Synthesizer", version="1.0.0")


@app.exception_handler(UnknownPatternError)
@app.exception_handler(UnknownLeadError)
async def lookup_error_handler(request: Request, exc: LookupError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _synthesize_request(request: SynthesisRequest) -> ECGData:
    config = DEFAULT_CONFIGURATION
    if request.configuration is not None:
        config = update_configuration(config, request.configuration)
    if request.pattern:
        config = apply_pattern(config, request.pattern)
    logger.info("Generating 12-lead ECG (pattern=%s, revision %d)", request.pattern, config.revision)
    return synthesize(config)


# Synthesis is CPU-bound; plain def routes run in the threadpool instead of the event loop

@app.post("/generate_12_lead", response_model=ECGData)
def generate_12_lead(request: SynthesisRequest):
    return _synthesize_request(request)


@app.post("/generate_12_lead/csv", response_class=PlainTextResponse)
def generate_12_lead_csv(request: SynthesisRequest):
    return PlainTextResponse(to_csv(_synthesize_request(request)), media_type="text/csv")


@app.post("/generate_12_lead/fhir")
def generate_12_lead_fhir(request: SynthesisRequest, patient_id: Optional[str] = None):
    return to_fhir(_synthesize_request(request), patient_id=patient_id)


@app.get("/patterns")
async def list_clinical_patterns():
    return {
        "patterns": [
            {"name": preset.name, "description": preset.description}
            for preset in CLINICAL_PATTERNS.values()
        ]
    }


@app.get("/patterns/{pattern_name}")
async def get_clinical_pattern(pattern_name: str):
    preset = get_preset(pattern_name)
    return {
        "name": preset.name,
        "description": preset.description,
        "overrides": preset.overrides.model_dump(mode="json", exclude_none=True),
    }


def _lead_info(lead) -> dict:
    projection = get_lead_projection(lead)
    return {
        "lead": lead.value,
        "amplitude_multiplier": projection.amplitude_multiplier,
        "vector": projection.vector.tolist(),
        "region": projection.region,
        "snomed_code": get_lead_snomed_code(lead),
    }


@app.get("/leads")
async def list_leads():
    return {"leads": [_lead_info(lead) for lead in LEADS]}


@app.get("/leads/{lead_name}")
async def get_lead_info(lead_name: str):
    return _lead_info(resolve_lead(lead_name))
