import httpx
import pytest

from catalog_sdk.rates import RateProvider, convert, format_money
from conftest import failing_transport, json_transport

RATE_URL = "https://rates.test/latest?base=USD&symbols=INR"


def provider(transport):
    return RateProvider(RATE_URL, currency_code="INR", default_rate=83.0, transport=transport)


@pytest.mark.asyncio
async def test_refresh_overwrites_rate():
    calls = []
    rates = provider(json_transport({"rates": {"INR": 84.25}}, calls=calls))
    assert await rates.refresh() == 84.25
    assert rates.rate == 84.25
    assert calls == [RATE_URL]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {},
    {"rates": None},
    {"rates": {"EUR": 0.9}},
    {"rates": {"INR": "84"}},
    {"rates": {"INR": 0}},
    {"rates": {"INR": -3}},
    {"rates": {"INR": True}},
    ["not", "an", "object"],
])
async def test_unusable_body_keeps_default(body):
    rates = provider(json_transport(body))
    assert await rates.refresh() is None
    assert rates.rate == 83.0


@pytest.mark.asyncio
async def test_http_error_keeps_default():
    rates = provider(json_transport({"rates": {"INR": 90}}, status_code=503))
    assert await rates.refresh() is None
    assert rates.rate == 83.0


@pytest.mark.asyncio
@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadTimeout])
async def test_transport_failure_is_absorbed(exc_type):
    rates = provider(failing_transport(exc_type))
    assert await rates.refresh() is None
    assert rates.rate == 83.0


@pytest.mark.asyncio
async def test_non_json_body_is_absorbed():
    rates = provider(httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))
    assert await rates.refresh() is None
    assert rates.rate == 83.0


def test_convert_and_format():
    assert convert(19.99, 83) == 1659.17
    assert convert("10", 83.5) == 835.0
    assert format_money(convert(9.5, 83), "₹") == "₹788.50"
    assert format_money(1031690.0, "₹", decimals=0) == "₹1031690"
