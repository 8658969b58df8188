"""DKAFlow: pediatric DKA fluid, insulin and potassium order assistant."""

from dkaflow.constants import VERSION, FluidType, Locale
from dkaflow.engine import DKAEngine, assess
from dkaflow.models import (
    AssessmentFlags,
    DataTypeError,
    InsulinRoute,
    InvalidInputError,
    Labs,
    OrderInputs,
    PatientProfile,
    Severity,
    TherapySettings,
)
from dkaflow.orders import compose_order_set, compose_orders
from dkaflow.severity import classify_severity

__version__ = VERSION
