# quote/freight.py
"""Inbound validation and outbound request construction for LTL quotes.

``QuoteRequest.from_payload`` turns the caller's JSON body into a
normalized value object; ``build_rate_request`` turns that object into
the body expected by the Concept Logistics rate API.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from quote.errors import ClientInputError
from quote.utils import app_logger, is_blank, is_valid_zip, parse_number

DEFAULT_ORIGIN_ZIP = "14204"
DEFAULT_LENGTH_IN = 60.0
DEFAULT_WIDTH_IN = 21.0
DEFAULT_HEIGHT_IN = 30.0
DEFAULT_WEIGHT_PER_UNIT_LB = 145.0
DEFAULT_FREIGHT_CLASS = 100
DEFAULT_DESCRIPTION = "Standard Product"
DEFAULT_MARKUP = 50.00
DEFAULT_PACKAGING_CODE = "BX"

RATES_RETURNED = 5
RATE_TYPE = "Best"

FREIGHT_CLASSES = (
    50, 55, 60, 65, 70, 77.5, 85, 92.5, 100,
    110, 125, 150, 175, 200, 250, 300, 400, 500,
)

PACKAGING_CODES = {
    "box": "BX",
    "pallet": "PLT",
    "crate": "CRT",
    "bag": "BAG",
    "bundle": "BDL",
    "drum": "DRM",
    "tube": "TBE",
    "roll": "RL",
    "carton": "CTN",
    "case": "CAS",
    "skid": "SKD",
}

MISSING_FIELDS_MESSAGE = "Missing required fields: destinationZip, quantity"


def normalize_packaging_type(value) -> str:
    """Map a human-readable packaging name to the carrier code.

    Unknown names are passed through unchanged; blank values become a box.
    """
    if is_blank(value):
        return DEFAULT_PACKAGING_CODE
    text = str(value).strip()
    return PACKAGING_CODES.get(text.lower(), text)


def normalize_freight_class(value) -> int | float:
    """Return a standard LTL class, falling back to class 100."""
    if is_blank(value):
        return DEFAULT_FREIGHT_CLASS
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        number = None
    if number in FREIGHT_CLASSES:
        return int(number) if number.is_integer() else number
    app_logger(__name__).warning(
        "[freight] unsupported freight class %r, using %s", value, DEFAULT_FREIGHT_CLASS
    )
    return DEFAULT_FREIGHT_CLASS


def _parse_quantity(value) -> int:
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        raise ClientInputError("quantity must be a whole number greater than zero")
    if not number.is_integer() or number < 1:
        raise ClientInputError("quantity must be a whole number greater than zero")
    return int(number)


def _optional_number(data: dict, field: str, default: float) -> float:
    value = data.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        raise ClientInputError(f"{field} must be a number")
    if number < 0:
        raise ClientInputError(f"{field} must be non-negative")
    return number


@dataclass(frozen=True)
class QuoteRequest:
    destination_zip: str
    quantity: int
    origin_zip: str = DEFAULT_ORIGIN_ZIP
    weight_per_unit: float = DEFAULT_WEIGHT_PER_UNIT_LB
    length: float = DEFAULT_LENGTH_IN
    width: float = DEFAULT_WIDTH_IN
    height: float = DEFAULT_HEIGHT_IN
    packaging_type: str = DEFAULT_PACKAGING_CODE
    freight_class: int | float = DEFAULT_FREIGHT_CLASS
    description: str = DEFAULT_DESCRIPTION
    markup: float = DEFAULT_MARKUP

    @property
    def total_weight(self) -> float:
        return self.weight_per_unit * self.quantity

    @classmethod
    def from_payload(
        cls,
        data,
        *,
        validate_zip: bool = True,
        default_markup: float = DEFAULT_MARKUP,
    ) -> "QuoteRequest":
        """Validate the caller's JSON body and apply defaults.

        Raises :class:`ClientInputError` for anything the carrier could not
        be asked about.  An unknown freight class is not an error.
        """
        if not isinstance(data, dict):
            raise ClientInputError(error="Request body must be a JSON object")

        destination_zip = data.get("destinationZip")
        quantity = data.get("quantity")
        if is_blank(destination_zip) or is_blank(quantity):
            raise ClientInputError(error=MISSING_FIELDS_MESSAGE)

        destination_zip = str(destination_zip).strip()
        origin_zip = data.get("originZip")
        origin_zip = DEFAULT_ORIGIN_ZIP if is_blank(origin_zip) else str(origin_zip).strip()

        if validate_zip:
            if not is_valid_zip(destination_zip):
                raise ClientInputError(f"Invalid destinationZip: {destination_zip!r}")
            if not is_valid_zip(origin_zip):
                raise ClientInputError(f"Invalid originZip: {origin_zip!r}")

        description = data.get("description")
        description = DEFAULT_DESCRIPTION if is_blank(description) else str(description)

        return cls(
            destination_zip=destination_zip,
            quantity=_parse_quantity(quantity),
            origin_zip=origin_zip,
            weight_per_unit=_optional_number(data, "weightPerUnit", DEFAULT_WEIGHT_PER_UNIT_LB),
            length=_optional_number(data, "length", DEFAULT_LENGTH_IN),
            width=_optional_number(data, "width", DEFAULT_WIDTH_IN),
            height=_optional_number(data, "height", DEFAULT_HEIGHT_IN),
            packaging_type=normalize_packaging_type(data.get("packagingType")),
            freight_class=normalize_freight_class(data.get("freightClass")),
            description=description,
            markup=_optional_number(data, "markup", default_markup),
        )


def pickup_date(today: date | None = None) -> str:
    """Today's date as MM/DD/YYYY in the process's local time."""
    return (today or date.today()).strftime("%m/%d/%Y")


def build_rate_request(quote_request: QuoteRequest, username: str, password: str, today: date | None = None) -> dict:
    """Body for a single Concept Logistics LTL rate request."""
    return {
        "Autho_UserName": username,
        "Autho_Password": password,
        "Mode": "LTL",
        "OriginZipCode": quote_request.origin_zip,
        "OriginCountry": "US",
        "DestinationZipCode": quote_request.destination_zip,
        "DestinationCountry": "US",
        "Commodities": [
            {
                "HandlingQuantity": quote_request.quantity,
                "PackagingType": quote_request.packaging_type,
                "Length": quote_request.length,
                "Width": quote_request.width,
                "Height": quote_request.height,
                "WeightTotal": quote_request.total_weight,
                "HazardousMaterial": False,
                "PiecesTotal": quote_request.quantity,
                "FreightClass": quote_request.freight_class,
                "Description": quote_request.description,
            }
        ],
        "WeightUnits": "LB",
        "DimensionUnits": "IN",
        "NumberRatesReturned": RATES_RETURNED,
        "RateType": RATE_TYPE,
        "PickupDate": pickup_date(today),
    }
