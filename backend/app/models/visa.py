"""Visa requirement models."""

from typing import Literal

from pydantic import Field

from backend.app.models.common import CamelModel

VisaStatus = Literal[
    "visa_free",
    "visa_on_arrival",
    "e_visa",
    "eta",
    "visa_required",
    "covid_ban",
    "no_admission",
    "unknown",
]

VisaSource = Literal["corridor", "passport_index", "api"]

STATUS_LABELS: dict[str, str] = {
    "visa_free": "Visa Free",
    "visa_on_arrival": "Visa on Arrival",
    "e_visa": "e-Visa Required",
    "eta": "ETA Required",
    "visa_required": "Visa Required",
    "covid_ban": "Travel Restricted",
    "no_admission": "No Admission",
    "unknown": "Unknown",
}


def status_label(status: str, days: int | None = None) -> str:
    """Human-readable label, e.g. 'Visa Free (90 days)'."""
    if status == "visa_free" and days:
        return f"Visa Free ({days} days)"
    return STATUS_LABELS.get(status, "Unknown")


class VisaRequirement(CamelModel):
    """Resolved visa requirement for one corridor."""

    passport: str
    passport_code: str
    destination: str
    destination_code: str
    status: VisaStatus
    status_label: str
    days: int | None = None
    source: VisaSource
    processing_days_min: int | None = None
    processing_days_max: int | None = None
    cost: float | None = None
    cost_currency: str | None = None
    application_url: str | None = None
    documents_required: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    @property
    def is_easy(self) -> bool:
        """True when no advance application is needed."""
        return self.status in ("visa_free", "visa_on_arrival", "eta")
