import json

from config import CarrierSettings
from quote.client import CarrierRateClient
from quote.errors import ClientInputError, FreightQuoteError, MethodNotAllowed
from quote.freight import DEFAULT_MARKUP, QuoteRequest, build_rate_request
from quote.rates import QuoteResult, quote_from_response
from quote.utils import app_logger

GENERIC_ERROR = "Unable to calculate freight quote"
INVALID_BODY = "Request body must be valid JSON"

RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Content-Type": "application/json",
}


class FreightQuoteService:
    """Quote handler bound to one set of carrier settings."""

    def __init__(self, settings: CarrierSettings, client: CarrierRateClient | None = None):
        self.settings = settings
        self.client = client or CarrierRateClient(settings)

    def quote(self, quote_request: QuoteRequest, today=None) -> QuoteResult:
        payload = build_rate_request(
            quote_request, self.settings.username, self.settings.password, today=today
        )
        parsed = self.client.fetch_rates(payload)
        return quote_from_response(parsed, quote_request.markup)


def parse_body(raw) -> object:
    """Decode the inbound JSON body; an empty body decodes to ``{}``."""
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise ClientInputError(error=INVALID_BODY)
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            return json.loads(raw)
        except ValueError:
            raise ClientInputError(error=INVALID_BODY)
    return raw


def create_quote(payload, config) -> QuoteResult:
    """Validate ``payload`` and price it with the carrier named in ``config``.

    Validation runs first so a bad request is reported as such even when
    carrier credentials are missing.
    """
    quote_request = QuoteRequest.from_payload(
        payload,
        validate_zip=bool(config.get("VALIDATE_ZIP_CODES", True)),
        default_markup=float(config.get("DEFAULT_MARKUP", DEFAULT_MARKUP)),
    )
    service = FreightQuoteService(CarrierSettings.from_mapping(config))
    return service.quote(quote_request)


def dispatch(method: str, raw_body, config) -> tuple[int, dict | None]:
    """Run one quote request and return ``(status, body)``.

    ``body`` is ``None`` for CORS preflight.  Every error is converted to
    the JSON error envelope here.
    """
    method = (method or "").upper()
    if method == "OPTIONS":
        return 200, None
    try:
        if method != "POST":
            raise MethodNotAllowed()
        result = create_quote(parse_body(raw_body), config)
    except FreightQuoteError as e:
        if e.status_code >= 500:
            app_logger(__name__).error("[quote] %s", e)
        else:
            app_logger(__name__).info("[quote] rejected %s: %s", e.status_code, e)
        return e.status_code, e.to_dict()
    except Exception:
        app_logger(__name__).exception("[quote] unexpected failure")
        return 500, {"error": GENERIC_ERROR}
    return 200, result.to_dict()
