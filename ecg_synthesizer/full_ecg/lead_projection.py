# ecg_synthesizer/full_ecg/lead_projection.py
import numpy as np
from typing import Dict, List, NamedTuple, Union

from ..api_models import Lead, resolve_lead

# Lead orientation vectors use this coordinate system:
# X-axis: Patient's Right to Left (positive Left)
# Y-axis: Patient's Inferior to Superior (positive Superior)
# Z-axis: Patient's Anterior to Posterior (positive Posterior)
# The vectors are stored for a future vector-projection model; the current
# amplitude math only uses the scalar multiplier.


class LeadProjection(NamedTuple):
    amplitude_multiplier: float
    vector: np.ndarray
    region: str


LEADS: List[Lead] = list(Lead)
LIMB_LEADS: List[Lead] = [Lead.I, Lead.II, Lead.III, Lead.aVR, Lead.aVL, Lead.aVF]
PRECORDIAL_LEADS: List[Lead] = [Lead.V1, Lead.V2, Lead.V3, Lead.V4, Lead.V5, Lead.V6]

LEAD_PROJECTIONS: Dict[Lead, LeadProjection] = {
    # Frontal plane leads (Einthoven triangle + Goldberger augmented leads)
    Lead.I:   LeadProjection(1.0,  np.array([1.0, 0.0, 0.0]),      "lateral"),
    Lead.II:  LeadProjection(1.2,  np.array([0.5, -0.866, 0.0]),   "inferior"),
    Lead.III: LeadProjection(0.8,  np.array([-0.5, -0.866, 0.0]),  "inferior"),
    Lead.aVR: LeadProjection(-0.5, np.array([-0.866, 0.5, 0.0]),   "right"),   # Inverted relative to the mean axis
    Lead.aVL: LeadProjection(0.6,  np.array([0.866, 0.5, 0.0]),    "lateral"),
    Lead.aVF: LeadProjection(0.9,  np.array([0.0, -1.0, 0.0]),     "inferior"),

    # Precordial leads - R-wave progression peaks around V4
    Lead.V1:  LeadProjection(0.4,  np.array([0.1, 0.0, -0.9]),    "septal"),
    Lead.V2:  LeadProjection(0.8,  np.array([0.3, 0.0, -0.8]),    "septal"),
    Lead.V3:  LeadProjection(1.3,  np.array([0.5, 0.0, -0.5]),    "anterior"),
    Lead.V4:  LeadProjection(1.5,  np.array([0.7, 0.0, 0.0]),     "anterior"),
    Lead.V5:  LeadProjection(1.2,  np.array([0.8, 0.2, 0.3]),     "lateral"),
    Lead.V6:  LeadProjection(0.9,  np.array([0.9, 0.4, 0.2]),     "lateral"),
}

for _projection in LEAD_PROJECTIONS.values():
    _projection.vector.setflags(write=False)


def get_lead_projection(lead: Union[Lead, str]) -> LeadProjection:
    return LEAD_PROJECTIONS[resolve_lead(lead)]


def get_lead_amplitude_multiplier(lead: Union[Lead, str]) -> float:
    return get_lead_projection(lead).amplitude_multiplier


def get_lead_vector(lead: Union[Lead, str]) -> np.ndarray:
    """Anatomical orientation vector (x, y, z). Read-only."""
    return get_lead_projection(lead).vector


def get_anatomical_region(lead: Union[Lead, str]) -> str:
    return get_lead_projection(lead).region


def leads_in_region(region: str) -> List[Lead]:
    """
    All leads looking at the given anatomical region, in canonical order.

    Args:
        region: one of "lateral", "inferior", "septal", "anterior", "right"

    Returns:
        List of leads (empty if no lead carries that region label)
    """
    return [lead for lead in LEADS if LEAD_PROJECTIONS[lead].region == region]
