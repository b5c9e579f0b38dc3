# quote/rates.py
"""Interpretation of the carrier's rate response.

The carrier answers with a list of rate candidates, a single rate object,
or an object/list carrying an error message.  ``classify_rate_response``
decides once which of those it is; ``summarize_rate`` turns the best rate
into the price returned to callers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from quote.errors import NoRatesAvailable, UpstreamMalformedResponse, UpstreamRejected
from quote.utils import sum_accessorials, to_number

ERROR_FIELDS = ("ErrorMessage", "error", "Error")
UNKNOWN = "Unknown"


@dataclass(frozen=True)
class RateList:
    rates: list = field(default_factory=list)

    @property
    def best(self) -> dict:
        """The carrier ranks rates itself, so the first one is the best."""
        if not self.rates:
            raise NoRatesAvailable()
        return self.rates[0]


@dataclass(frozen=True)
class UpstreamError:
    message: object


def _error_message(entry: dict):
    for name in ERROR_FIELDS:
        if entry.get(name):
            return entry[name]
    return None


def classify_rate_response(parsed) -> RateList | UpstreamError:
    """Sort a parsed carrier body into ``RateList`` or ``UpstreamError``.

    ``null``, ``{}`` and ``[]`` all give an empty ``RateList``.  Bodies that
    are neither objects nor lists of objects raise
    :class:`UpstreamMalformedResponse`.
    """
    if not parsed:
        if parsed is None or isinstance(parsed, (dict, list)):
            return RateList([])
        raise UpstreamMalformedResponse("Unexpected carrier response type")

    if isinstance(parsed, dict):
        rates = [parsed]
    elif isinstance(parsed, list):
        rates = parsed
    else:
        raise UpstreamMalformedResponse("Unexpected carrier response type")

    first = rates[0]
    if not isinstance(first, dict):
        raise UpstreamMalformedResponse("Unexpected carrier rate entry")

    message = _error_message(first)
    if message is not None:
        return UpstreamError(message)
    return RateList(list(rates))


@dataclass(frozen=True)
class QuoteResult:
    baseRate: float
    fuelSurcharge: float
    accessorials: float
    subtotal: float
    markup: float
    total: float
    carrier: str = UNKNOWN
    transitTime: str = UNKNOWN
    serviceLevel: str = UNKNOWN
    apiQuoteNumber: str = UNKNOWN

    def to_dict(self) -> dict:
        return asdict(self)


def summarize_rate(rate: dict, markup: float) -> QuoteResult:
    """Price a single carrier rate; missing numbers count as zero.

    ``markup`` is a flat amount added to the carrier's total.
    """
    subtotal = to_number(rate.get("priceTotal") or rate.get("total"))
    markup = float(markup)
    return QuoteResult(
        baseRate=to_number(rate.get("priceLineHaul")),
        fuelSurcharge=to_number(rate.get("priceFuelSurcharge")),
        accessorials=sum_accessorials(rate.get("priceAccessorials")),
        subtotal=subtotal,
        markup=markup,
        total=subtotal + markup,
        carrier=rate.get("carrierName") or UNKNOWN,
        transitTime=rate.get("transitTime") or UNKNOWN,
        serviceLevel=rate.get("serviceLevel") or UNKNOWN,
        apiQuoteNumber=rate.get("apiQuoteNumber") or UNKNOWN,
    )


def quote_from_response(parsed, markup: float) -> QuoteResult:
    """Classify a parsed carrier body and price its best rate.

    Raises :class:`NoRatesAvailable` or :class:`UpstreamRejected` when the
    carrier did not return a usable rate.
    """
    outcome = classify_rate_response(parsed)
    if isinstance(outcome, UpstreamError):
        raise UpstreamRejected(outcome.message)
    return summarize_rate(outcome.best, markup)
