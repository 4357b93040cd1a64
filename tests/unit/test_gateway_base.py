"""Unit tests for shared gateway helpers and adapter selection."""

import httpx
import pytest

from src.core.errors import NotFoundError
from src.services.gateways.base import cents_to_reais, is_number, normalize_cpf, reais_to_cents
from src.services.gateways.factory import GATEWAYS, build_gateway, check_gateway_configuration
from src.services.gateways.pushinpay import PushinPayGateway
from src.services.gateways.syncpay import SyncPayGateway
from src.services.gateways.tribopay import TriboPayGateway


class TestNormalizeCpf:
    """Tests for normalize_cpf."""

    @pytest.mark.parametrize(
        ("document", "expected"),
        [
            ("529.982.247-25", "52998224725"),
            ("52998224725", "52998224725"),
            (" 529 982 247 25 ", "52998224725"),
            ("5299822472", None),
            ("529982247250", None),
            ("", None),
            (None, None),
            (52998224725, None),
        ],
    )
    def test_normalize_cpf(self, document, expected) -> None:
        """Test that only values with exactly 11 digits are accepted."""
        assert normalize_cpf(document) == expected


class TestAmountConversion:
    """Tests for reais/cents conversion."""

    def test_reais_to_cents_avoids_float_drift(self) -> None:
        assert reais_to_cents(29.9) == 2990
        assert reais_to_cents(0.29) == 29
        assert reais_to_cents(1.005) == 101

    def test_cents_to_reais(self) -> None:
        assert cents_to_reais(2990) == 29.9
        assert cents_to_reais(15000) == 150.0

    def test_is_number_excludes_bool(self) -> None:
        assert is_number(1)
        assert is_number(1.5)
        assert not is_number(True)
        assert not is_number("1")
        assert not is_number(None)
        assert not is_number(float("inf"))
        assert not is_number(float("nan"))


class TestWebhookUrl:
    """Tests for the callback URL handed to gateways."""

    def test_empty_without_public_base_url(self, gateway_settings) -> None:
        gateway_settings.public_base_url = ""
        gateway = TriboPayGateway(gateway_settings, httpx.AsyncClient())

        assert gateway.webhook_url == ""

    def test_one_route_per_gateway(self, gateway_settings) -> None:
        """Test that each adapter points callbacks at its own route."""
        client = httpx.AsyncClient()

        assert PushinPayGateway(gateway_settings, client).webhook_url.endswith("/api/v1/webhooks/pushinpay")
        assert SyncPayGateway(gateway_settings, client).webhook_url.endswith("/api/v1/webhooks/syncpay")


class TestBuildGateway:
    """Tests for build_gateway."""

    def test_registers_three_gateways(self) -> None:
        assert set(GATEWAYS) == {"tribopay", "pushinpay", "syncpay"}

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("tribopay", TriboPayGateway), ("pushinpay", PushinPayGateway), ("syncpay", SyncPayGateway)],
    )
    def test_builds_named_gateway(self, test_settings, name, expected) -> None:
        assert isinstance(build_gateway(name), expected)

    def test_defaults_to_configured_provider(self, test_settings) -> None:
        """Test that no name falls back to PIX_PROVIDER."""
        assert build_gateway().name == test_settings.pix_provider

    def test_unknown_gateway_raises_not_found(self, test_settings) -> None:
        with pytest.raises(NotFoundError):
            build_gateway("stripe")


class TestGatewayConfiguration:
    """Tests for is_configured and check_gateway_configuration."""

    @pytest.mark.asyncio
    async def test_env_configured_gateways(self, gateway_settings) -> None:
        client = httpx.AsyncClient()

        assert await TriboPayGateway(gateway_settings, client).is_configured() is True
        assert await SyncPayGateway(gateway_settings, client).is_configured() is True

        gateway_settings.syncpay_client_id = ""
        assert await SyncPayGateway(gateway_settings, client).is_configured() is False

    @pytest.mark.asyncio
    async def test_pushinpay_configured_from_database(self, memory_db, gateway_settings) -> None:
        gateway = PushinPayGateway(gateway_settings, httpx.AsyncClient())
        assert await gateway.is_configured() is False

        memory_db.table("pushinpay_config").insert({"token": "pp_token", "environment": "sandbox"}).execute()
        assert await gateway.is_configured() is True

    @pytest.mark.asyncio
    async def test_check_reports_missing_credentials(self, memory_db, test_settings) -> None:
        result = await check_gateway_configuration("pushinpay")

        assert result == {"healthy": False, "error": "pushinpay credentials are not configured"}

    @pytest.mark.asyncio
    async def test_check_unknown_gateway(self, test_settings) -> None:
        result = await check_gateway_configuration("stripe")

        assert result["healthy"] is False
        assert "Unknown payment provider" in result["error"]
