"""
Shipping rate and delivery-estimate calculation.

Pure lookups over constant tables: a base and per-kilogram charge per service
tier, a region-pair distance multiplier, and a region-pair transit-day range.
Region-pair tables are keyed by direction; a missing forward pair falls back to
the reversed pair and then to a default.
"""
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from types import MappingProxyType
from typing import Any, Dict, Optional
import logging

from core.config import settings
from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

SERVICE_RATES = MappingProxyType({
    "express": MappingProxyType({"base": Decimal("150"), "per_kg": Decimal("50")}),
    "regular": MappingProxyType({"base": Decimal("100"), "per_kg": Decimal("30")}),
    "economy": MappingProxyType({"base": Decimal("80"), "per_kg": Decimal("20")}),
})
DEFAULT_SERVICE = "regular"

REGION_MULTIPLIERS = MappingProxyType({
    "NCR-NCR": Decimal("1.0"),
    "NCR-SOUTH LUZON": Decimal("1.2"),
    "NCR-NORTH LUZON": Decimal("1.2"),
    "NCR-VISAYAS": Decimal("1.8"),
    "NCR-MINDANAO": Decimal("2.2"),
    "SOUTH LUZON-VISAYAS": Decimal("1.6"),
    "NORTH LUZON-VISAYAS": Decimal("1.6"),
    "VISAYAS-MINDANAO": Decimal("1.4"),
})
DEFAULT_MULTIPLIER = Decimal("1.5")

# Weight up to this many kilograms is covered by the base charge
INCLUDED_WEIGHT_KG = Decimal("1")
# Largest weight an order can store (Numeric(10, 2))
MAX_WEIGHT_KG = Decimal("99999999.99")

DELIVERY_DAYS = MappingProxyType({
    "NCR": MappingProxyType({
        "NCR": "1",
        "SOUTH LUZON": "1-2",
        "NORTH LUZON": "1-2",
        "VISAYAS": "2-5",
        "MINDANAO": "3-6",
    }),
    "SOUTH LUZON": MappingProxyType({
        "NCR": "1-2",
        "VISAYAS": "2-5",
        "MINDANAO": "3-6",
    }),
    "NORTH LUZON": MappingProxyType({
        "NCR": "1-2",
        "VISAYAS": "2-5",
        "MINDANAO": "3-6",
    }),
    "VISAYAS": MappingProxyType({
        "NCR": "2-5",
        "MINDANAO": "3-5",
    }),
    "MINDANAO": MappingProxyType({
        "NCR": "3-6",
        "VISAYAS": "3-5",
    }),
})
DEFAULT_DELIVERY_DAYS = "3-7"


def _region_key(region: Any) -> str:
    value = getattr(region, "value", region)
    return str(value or "").strip().upper()


def _parse_weight(weight: Any) -> Decimal:
    """Coerce a weight to Decimal, rejecting anything that is not a positive finite number."""
    if isinstance(weight, bool) or weight is None:
        raise ValidationError("Weight must be a number", field="weight")
    try:
        value = Decimal(str(weight).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Weight must be a number", field="weight")
    if not value.is_finite():
        raise ValidationError("Weight must be a finite number", field="weight")
    if value <= 0:
        raise ValidationError("Weight must be greater than 0", field="weight")
    if value > MAX_WEIGHT_KG:
        raise ValidationError(f"Weight must not exceed {MAX_WEIGHT_KG} kg", field="weight")
    return value


def get_region_multiplier(from_region: Any, to_region: Any) -> Decimal:
    origin, destination = _region_key(from_region), _region_key(to_region)
    multiplier = REGION_MULTIPLIERS.get(f"{origin}-{destination}")
    if multiplier is None:
        multiplier = REGION_MULTIPLIERS.get(f"{destination}-{origin}")
    if multiplier is None:
        logger.warning(f"No rate multiplier for {origin} -> {destination}, using default {DEFAULT_MULTIPLIER}")
        multiplier = DEFAULT_MULTIPLIER
    return multiplier


def get_estimated_days(from_region: Any, to_region: Any) -> str:
    origin, destination = _region_key(from_region), _region_key(to_region)
    days = DELIVERY_DAYS.get(origin, {}).get(destination)
    if days is None:
        days = DELIVERY_DAYS.get(destination, {}).get(origin)
    return days or DEFAULT_DELIVERY_DAYS


def get_service_rate(service_type: Any):
    key = str(getattr(service_type, "value", service_type) or "").strip().lower()
    if key not in SERVICE_RATES:
        logger.warning(f"Unknown service type '{service_type}', using {DEFAULT_SERVICE} rates")
        key = DEFAULT_SERVICE
    return SERVICE_RATES[key]


def compute_rate(from_region: Any, to_region: Any, weight: Any, service_type: Any) -> Dict[str, Any]:
    """Quote a shipment.

    Returns ``{"rate": float, "estimated_days": str}``. The rate is
    ``base * multiplier + max(0, weight - 1) * per_kg`` rounded half-up to
    the cent. Raises ValidationError when the weight is not a positive number.
    """
    weight_kg = _parse_weight(weight)
    service_rate = get_service_rate(service_type)
    multiplier = get_region_multiplier(from_region, to_region)

    base_rate = service_rate["base"] * multiplier
    weight_rate = max(Decimal("0"), weight_kg - INCLUDED_WEIGHT_KG) * service_rate["per_kg"]
    rate = (base_rate + weight_rate).quantize(CENT, rounding=ROUND_HALF_UP)

    return {
        "rate": float(rate),
        "estimated_days": get_estimated_days(from_region, to_region),
    }


def estimate_total(rate: Decimal, has_insurance: bool = False) -> Decimal:
    """Shipping rate plus the insurance surcharge when insurance was requested."""
    rate = Decimal(str(rate))
    total = rate
    if has_insurance:
        total += rate * Decimal(settings.INSURANCE_RATE)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def estimate_delivery_date(start: datetime, estimated_days: str) -> Optional[datetime]:
    """Latest expected delivery date: start plus the upper bound of the day range."""
    try:
        upper = int(estimated_days.split("-")[-1])
    except (AttributeError, ValueError):
        logger.warning(f"Unparseable delivery estimate '{estimated_days}'")
        return None
    return start + timedelta(days=upper)
