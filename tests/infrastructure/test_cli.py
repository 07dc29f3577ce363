"""End-to-end tests of the click CLI against a temporary data directory."""

import json
import shutil
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from customizer.infrastructure import bootstrap
from customizer.infrastructure.cli import customize_commands
from customizer.infrastructure.cli.main import cli
from customizer.infrastructure.intake.http_order_intake import HttpOrderIntakeGateway

DATA_DIR = Path(__file__).resolve().parents[2] / "data"

CUSTOMER_ARGS = [
    "--name", "Rahim Uddin",
    "--phone", "01712345678",
    "--address", "House 12, Road 5, Dhanmondi",
    "--district", "Dhaka",
]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for name in ("products.json", "catalog.json"):
        shutil.copy(DATA_DIR / name, tmp_path / name)
    monkeypatch.setenv("CUSTOMIZER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("CUSTOMIZER_ORDER_INTAKE_URL", raising=False)
    monkeypatch.delenv("CUSTOMIZER_FREE_DELIVERY_THRESHOLD", raising=False)
    monkeypatch.delenv("CUSTOMIZER_MAX_IMAGES", raising=False)
    bootstrap.settings.cache_clear()
    bootstrap.catalog.cache_clear()
    yield tmp_path
    bootstrap.settings.cache_clear()
    bootstrap.catalog.cache_clear()


def _run(*args):
    return CliRunner().invoke(cli, list(args))


class TestBrowse:

    def test_product_list(self, data_dir):
        result = _run("product", "list")
        assert result.exit_code == 0
        assert "Photo Mug" in result.output
        assert "৳450.00" in result.output

    def test_catalog_show(self, data_dir):
        result = _run("catalog", "show", "--product", "1")
        assert result.exit_code == 0
        assert "Custom Printed T-Shirt: Apparel (৳450.00)" in result.output
        assert "* Size [size]" in result.output
        assert "Free delivery from ৳2000.00" in result.output

    def test_catalog_show_unknown_product(self, data_dir):
        result = _run("catalog", "show", "--product", "99")
        assert result.exit_code != 0
        assert "not found" in result.output


class TestQuote:

    def test_quote_with_defaults(self, data_dir):
        result = _run("quote", "--product", "1")
        assert result.exit_code == 0
        assert "৳530.00" in result.output

    def test_quote_with_options(self, data_dir):
        result = _run("quote", "--product", "1", "--option", "size=XL", "--text", "Hi")
        assert result.exit_code == 0
        assert "Custom text" in result.output
        assert "৳680.00" in result.output

    def test_free_delivery(self, data_dir):
        result = _run("quote", "--product", "1", "--quantity", "5")
        assert result.exit_code == 0
        assert "Free delivery applied" in result.output
        assert "৳2250.00" in result.output

    def test_invalid_option_value(self, data_dir):
        result = _run("quote", "--product", "1", "--option", "size=XXXL")
        assert result.exit_code != 0
        assert "not a valid Size" in result.output

    def test_malformed_option(self, data_dir):
        result = _run("quote", "--product", "1", "--option", "size")
        assert result.exit_code != 0
        assert "axis=value" in result.output

    def test_out_of_stock(self, data_dir):
        result = _run("quote", "--product", "6")
        assert result.exit_code != 0
        assert "out of stock" in result.output

    def test_env_threshold_override(self, data_dir, monkeypatch):
        monkeypatch.setenv("CUSTOMIZER_FREE_DELIVERY_THRESHOLD", "off")
        bootstrap.settings.cache_clear()
        bootstrap.catalog.cache_clear()
        result = _run("quote", "--product", "1", "--quantity", "5")
        assert "Free delivery applied" not in result.output
        assert "৳2330.00" in result.output


class TestPlaceOrder:

    def test_places_order_into_outbox(self, data_dir):
        result = _run("order", "place", "--product", "2", "--option", "color=white", *CUSTOMER_ARGS)
        assert result.exit_code == 0, result.output
        assert "Order placed" in result.output

        (record,) = json.loads((data_dir / "orders.json").read_text(encoding="utf-8"))
        assert record["customer_name"] == "Rahim Uddin"
        assert record["items"][0]["customization"]["color"] == "white"
        assert record["tracking_id"] in result.output

    def test_missing_required_option_reported(self, data_dir):
        result = _run("order", "place", "--product", "2", *CUSTOMER_ARGS)
        assert result.exit_code != 0
        assert "Order incomplete" in result.output
        assert "color" in result.output

    def test_invalid_phone_reported(self, data_dir):
        args = [a if a != "01712345678" else "12345" for a in CUSTOMER_ARGS]
        result = _run("order", "place", "--product", "1", *args)
        assert result.exit_code != 0
        assert "phone" in result.output

    def test_stock_exceeded(self, data_dir):
        result = _run("order", "place", "--product", "5", "--quantity", "30", *CUSTOMER_ARGS)
        assert result.exit_code != 0
        assert "Order not placed" in result.output
        assert "left in stock" in result.output

    def test_whatsapp_handoff(self, data_dir):
        result = _run("order", "place", "--product", "1", "--via", "whatsapp", *CUSTOMER_ARGS)
        assert result.exit_code == 0, result.output
        assert "https://wa.me/" in result.output
        assert not (data_dir / "orders.json").exists()

    def test_image_attached(self, data_dir, tmp_path_factory):
        image = tmp_path_factory.mktemp("uploads") / "logo.png"
        image.write_bytes(b"\x89PNG\r\n\x1a\nlogo")
        result = _run("order", "place", "--product", "1", "--image", str(image), *CUSTOMER_ARGS)
        assert result.exit_code == 0, result.output

        (record,) = json.loads((data_dir / "orders.json").read_text(encoding="utf-8"))
        assert record["items"][0]["customization"]["images"][0]["name"] == "logo.png"


class TestPlaceOrderOverHttp:

    @staticmethod
    def _use_order_service(monkeypatch, status, body):
        client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(status, json=body)),
            base_url="https://shop.test",
        )
        monkeypatch.setattr(
            customize_commands, "order_intake", lambda: HttpOrderIntakeGateway(client)
        )
        return client

    def test_client_closed_after_order(self, data_dir, monkeypatch):
        client = self._use_order_service(
            monkeypatch, 201, {"order": {"tracking_id": "TRYHTTP1"}}
        )
        result = _run("order", "place", "--product", "1", *CUSTOMER_ARGS)
        assert result.exit_code == 0, result.output
        assert "Order placed, tracking ID TRYHTTP1" in result.output
        assert client.is_closed

    def test_client_closed_after_rejection(self, data_dir, monkeypatch):
        client = self._use_order_service(monkeypatch, 503, {"error": "Busy"})
        result = _run("order", "place", "--product", "1", *CUSTOMER_ARGS)
        assert result.exit_code != 0
        assert "Order not placed: Busy (safe to retry)" in result.output
        assert client.is_closed
