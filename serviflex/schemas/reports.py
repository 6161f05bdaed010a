"""
Schemas for professional and establishment reports.
"""

from typing import Dict, List

from pydantic import BaseModel

from serviflex.schemas.ratings import RatingResponse


class RevenueReport(BaseModel):
    appointment_count: int
    total_revenue: float


class ProfessionalRevenueReport(RevenueReport):
    professional_id: str


class EstablishmentRevenueReport(RevenueReport):
    establishment_id: str


class RatingsReport(BaseModel):
    rating_count: int
    average_score: float
    ratings: List[RatingResponse]


class ProfessionalRatingsReport(RatingsReport):
    professional_id: str


class EstablishmentRatingsReport(RatingsReport):
    establishment_id: str


class MonthlyAppointmentsReport(BaseModel):
    """Appointment counts keyed by "YYYY-MM" for the last 12 months."""
    appointments_per_month: Dict[str, int]


class ProfessionalMonthlyReport(MonthlyAppointmentsReport):
    professional_id: str


class EstablishmentMonthlyReport(MonthlyAppointmentsReport):
    establishment_id: str
