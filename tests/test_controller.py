# tests/test_controller.py
from dataclasses import replace

import httpx
import pytest

from catalog_sdk.config import load_settings
from catalog_sdk.controller import CatalogController
from catalog_sdk.errors import DraftValidationError, NetworkError
from catalog_sdk.records import Product
from catalog_sdk.state import DEMO_PRODUCTS
from conftest import BASE_URL, failing_transport, json_transport


@pytest.fixture
def settings():
    return replace(
        load_settings(),
        api_url=BASE_URL,
        rate_url="https://rates.test/latest",
        currency_code="INR",
        currency_symbol="₹",
        default_rate=83.0,
        exchange_rate=None,
        demo_fallback=True,
        estimated_sales=12430.0,
    )


def ordered_transport(payload, log, label):
    def handler(request: httpx.Request) -> httpx.Response:
        log.append(label)
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_rate_is_fetched_before_catalog_load(settings):
    log = []
    c = CatalogController.from_settings(
        settings,
        transport=ordered_transport([{"id": "1", "name": "Mug", "price": 10, "stock": 5}], log, "store"),
        rate_transport=ordered_transport({"rates": {"INR": 80}}, log, "rate"),
    )
    async with c:
        loaded = await c.start()
    assert log == ["rate", "store"]
    assert loaded.ok
    row = c.view().rows[0]
    assert row.display_price == 800.0
    assert row.price_label == "₹800.00"
    assert row.base_label == "$10.00 USD"


@pytest.mark.asyncio
async def test_fixed_rate_skips_fetch(settings):
    log = []
    c = CatalogController.from_settings(
        replace(settings, exchange_rate=90.0),
        transport=ordered_transport([], log, "store"),
        rate_transport=ordered_transport({"rates": {"INR": 80}}, log, "rate"),
    )
    async with c:
        await c.start()
    assert log == ["store"]
    assert c.rate == 90.0


@pytest.mark.asyncio
async def test_everything_down_shows_demo_data_at_default_rate(settings):
    c = CatalogController.from_settings(settings, transport=failing_transport(), rate_transport=failing_transport())
    async with c:
        loaded = await c.start()
    assert loaded.fallback
    assert isinstance(loaded.error, NetworkError)
    view = c.view()
    assert view.total == 3
    assert [r.id for r in view.rows] == ["demo1", "demo2", "demo3"]
    assert view.rate == 83.0
    assert view.rows[0].price_label == "₹1659.17"
    assert view.sales_label == "₹1031690"


@pytest.mark.asyncio
async def test_demo_fallback_can_be_disabled(settings):
    c = CatalogController.from_settings(
        replace(settings, demo_fallback=False), transport=failing_transport(), rate_transport=failing_transport()
    )
    async with c:
        loaded = await c.start()
    assert not loaded.ok and not loaded.fallback
    assert c.view().total == 0


@pytest.mark.asyncio
async def test_initial_products_skip_load(settings):
    calls = []
    seed = [Product(id="s1", name="Seeded", price=1, stock=1)]
    c = CatalogController.from_settings(
        settings,
        transport=json_transport([], calls=calls),
        rate_transport=failing_transport(),
        initial_products=seed,
    )
    async with c:
        await c.start()
    assert calls == []
    assert [r.id for r in c.view().rows] == ["s1"]


@pytest.mark.asyncio
async def test_full_session_against_api(settings, asgi_transport):
    c = CatalogController.from_settings(settings, transport=asgi_transport, rate_transport=failing_transport())
    changes = []
    c.subscribe(lambda records: changes.append(len(records)))
    async with c:
        loaded = await c.start()
        assert loaded.ok and c.view().total == 0

        c.add_requested()
        assert (await c.form_submitted(name="Coffee Mug", price="9.5", stock="120")).ok
        c.add_requested()
        assert (await c.form_submitted(name="Travel Mug", price="14", stock="8")).ok
        c.add_requested()
        assert (await c.form_submitted(name="Sample Tee", price="19.99", stock="42")).ok
        assert [r.name for r in c.view().rows] == ["Sample Tee", "Travel Mug", "Coffee Mug"]

        view = c.search("MUG")
        assert [r.name for r in view.rows] == ["Travel Mug", "Coffee Mug"]
        assert (view.shown, view.total) == (2, 3)

        # edits show up in the filtered view immediately
        travel = view.rows[0]
        c.edit_requested(travel.id)
        assert (await c.form_submitted(name="Travel Cup")).ok
        assert [r.name for r in c.view().rows] == ["Coffee Mug"]

        outcome = await c.delete_requested(c.view().rows[0].id)
        assert outcome.ok
        assert c.view().rows == ()
        assert c.search("").total == 2

    assert changes == [0, 1, 2, 3, 3, 2]


@pytest.mark.asyncio
async def test_invalid_form_keeps_session_open(settings, asgi_transport):
    c = CatalogController.from_settings(settings, transport=asgi_transport, rate_transport=failing_transport())
    async with c:
        await c.start()
        c.add_requested()
        outcome = await c.form_submitted(name="X", price="-1", stock="1")
        assert isinstance(outcome.error, DraftValidationError)
        assert outcome.error.fields == ["price"]
        assert c.session.is_open
        c.modal_dismissed()
        assert not c.session.is_open
        assert c.view().total == 0


@pytest.mark.asyncio
async def test_failed_delete_leaves_catalog(settings, asgi_transport):
    c = CatalogController.from_settings(settings, transport=asgi_transport, rate_transport=failing_transport())
    async with c:
        await c.start()
        c.add_requested()
        created = (await c.form_submitted(name="Mug", price="1", stock="1")).record
        await c.client.remove("products", created.id)

        outcome = await c.delete_requested(created.id)
        assert outcome.error is not None
        assert outcome.error.status_code == 404
        assert [r.id for r in c.view().rows] == [created.id]


@pytest.mark.asyncio
async def test_deleting_record_under_edit_closes_form(settings, asgi_transport):
    c = CatalogController.from_settings(settings, transport=asgi_transport, rate_transport=failing_transport())
    async with c:
        await c.start()
        c.add_requested()
        created = (await c.form_submitted(name="Mug", price="1", stock="1")).record
        c.edit_requested(created.id)
        assert c.session.editing_id == created.id
        assert (await c.delete_requested(created.id)).ok
        assert not c.session.is_open


@pytest.mark.asyncio
async def test_edit_unknown_id_returns_none(settings):
    async with CatalogController.from_settings(settings, transport=failing_transport(), initial_products=DEMO_PRODUCTS) as c:
        assert c.edit_requested("nope") is None
        assert not c.session.is_open
