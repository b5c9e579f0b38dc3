import pytest

from quote.errors import NoRatesAvailable, UpstreamMalformedResponse, UpstreamRejected
from quote.rates import (
    RateList,
    UpstreamError,
    classify_rate_response,
    quote_from_response,
    summarize_rate,
)
from quote.utils import sum_accessorials


def test_quote_from_response_example():
    rate = {
        "priceLineHaul": 500,
        "priceFuelSurcharge": 50,
        "priceTotal": 550,
        "priceAccessorials": [{"accessorialPrice": 10}, {"accessorialPrice": 5}],
    }

    result = quote_from_response([rate], 50.0).to_dict()

    assert result["baseRate"] == 500
    assert result["fuelSurcharge"] == 50
    assert result["accessorials"] == 15
    assert result["subtotal"] == 550
    assert result["markup"] == 50
    assert result["total"] == 600
    assert result["carrier"] == "Unknown"


def test_single_object_response_is_the_best_rate():
    result = quote_from_response(
        {"priceTotal": "1,234.50", "carrierName": "Acme", "transitTime": "3 days"}, 50
    )
    assert result.subtotal == pytest.approx(1234.5)
    assert result.carrier == "Acme"
    assert result.transitTime == "3 days"
    assert result.serviceLevel == "Unknown"


def test_first_rate_wins():
    rates = [
        {"priceTotal": 300, "carrierName": "First"},
        {"priceTotal": 100, "carrierName": "Cheaper"},
    ]
    assert quote_from_response(rates, 0).carrier == "First"


@pytest.mark.parametrize("markup", [0, 12.5, 50.0, 199.99])
@pytest.mark.parametrize("price_total", [0, 0.1, 550, 987.65])
def test_total_is_subtotal_plus_markup(price_total, markup):
    result = summarize_rate({"priceTotal": price_total}, markup)
    assert result.total == result.subtotal + result.markup


def test_missing_numbers_default_to_zero():
    result = summarize_rate({}, 50)
    assert result.baseRate == 0
    assert result.fuelSurcharge == 0
    assert result.accessorials == 0
    assert result.subtotal == 0
    assert result.total == 50


def test_total_alias_used_when_price_total_missing():
    assert summarize_rate({"total": 410}, 0).subtotal == 410


@pytest.mark.parametrize(
    "accessorials, expected",
    [
        (None, 0),
        ([], 0),
        ([{"accessorialPrice": 10}, {"accessorialPrice": 5}], 15),
        ([{"accessorialPrice": 10}, {"accessorialName": "Liftgate"}], 10),
        ([{"accessorialPrice": "7.25"}, {"accessorialPrice": None}], 7.25),
        (42.5, 42.5),
        ("18", 18),
        ([3, 4], 7),
    ],
)
def test_sum_accessorials(accessorials, expected):
    assert sum_accessorials(accessorials) == pytest.approx(expected)


@pytest.mark.parametrize("parsed", [None, [], {}])
def test_empty_responses_have_no_rates(parsed):
    outcome = classify_rate_response(parsed)
    assert outcome == RateList([])
    with pytest.raises(NoRatesAvailable):
        quote_from_response(parsed, 50)


@pytest.mark.parametrize("field", ["ErrorMessage", "error", "Error"])
def test_error_fields_classified_once(field):
    outcome = classify_rate_response([{field: "Invalid packaging type"}])
    assert outcome == UpstreamError("Invalid packaging type")


def test_error_on_single_object():
    with pytest.raises(UpstreamRejected) as exc:
        quote_from_response({"Error": "Destination not serviced"}, 50)
    assert exc.value.to_dict() == {
        "error": "Shipping API error",
        "message": "Destination not serviced",
    }


def test_empty_error_field_is_ignored():
    outcome = classify_rate_response([{"error": "", "priceTotal": 10}])
    assert isinstance(outcome, RateList)


@pytest.mark.parametrize("parsed", ["rates", 42, ["not-an-object"], True])
def test_unexpected_shapes_are_malformed(parsed):
    with pytest.raises(UpstreamMalformedResponse):
        classify_rate_response(parsed)
