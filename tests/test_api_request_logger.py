"""Tests for API request logger."""

from unittest.mock import MagicMock, patch

import pytest

from rail_ticketing.adapters.api_request_logger import (
    REDACTED,
    format_api_request,
    log_api_request,
    redact_payload,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given RAIL_TICKETING_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("RAIL_TICKETING_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("True", True), ("false", False)])
    def test_env_value_is_case_insensitive(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        """Given RAIL_TICKETING_LOG_REQUESTS set, when checking, then only 'true' enables logging."""
        monkeypatch.setenv("RAIL_TICKETING_LOG_REQUESTS", value)

        assert should_log_requests() is expected


class TestRedactPayload:
    """Tests for card data redaction."""

    def test_card_fields_are_redacted(self) -> None:
        """Given a card payment body, when redacting, then card fields are hidden."""
        payload = {
            "ticketIds": ["t-1"],
            "currency": 0,
            "cardNumber": "4242424242424242",
            "cardExpMonth": 12,
            "cardExpYear": 27,
            "cardCvc": "123",
        }

        redacted = redact_payload(payload)

        assert redacted["cardNumber"] == REDACTED
        assert redacted["cardCvc"] == REDACTED
        assert redacted["cardExpMonth"] == REDACTED
        assert redacted["ticketIds"] == ["t-1"]
        assert payload["cardNumber"] == "4242424242424242"

    def test_nested_payloads_are_redacted(self) -> None:
        """Given card fields inside a list, when redacting, then they are hidden too."""
        redacted = redact_payload({"payments": [{"cardNumber": "4242"}]})

        assert redacted == {"payments": [{"cardNumber": REDACTED}]}


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging disabled, when calling log_api_request, then does not log."""
        mock_should_log.return_value = False

        log_api_request("GET", "http://localhost:5222/tickets")

        mock_logger.info.assert_not_called()

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_logging_enabled_with_params_then_logs_full_url(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging enabled with params, when calling, then logs URL with sorted params."""
        mock_should_log.return_value = True

        log_api_request(
            "GET", "http://localhost:5222/tickets/u-1", params={"type": 0, "pageNumber": 1}
        )

        call_args = mock_logger.info.call_args[0][0]
        assert "GET http://localhost:5222/tickets/u-1?pageNumber=1&type=0" in call_args

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_url_has_existing_params_then_appends_params(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given URL with existing params, when adding more params, then appends with '&'."""
        mock_should_log.return_value = True

        log_api_request("GET", "http://localhost/api?existing=1", params={"new": 2})

        assert "http://localhost/api?existing=1&new=2" in mock_logger.info.call_args[0][0]

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_logging_with_authorization_header_then_redacts_it(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given Authorization header, when logging, then redacts the value."""
        mock_should_log.return_value = True

        log_api_request(
            "GET",
            "http://localhost/api",
            headers={"Authorization": "Bearer secret-token", "Accept": "application/json"},
        )

        call_args = mock_logger.info.call_args[0][0]
        assert "Authorization" in call_args
        assert REDACTED in call_args
        assert "secret-token" not in call_args
        assert "application/json" in call_args

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_logging_card_payment_then_card_number_is_hidden(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given a card payment payload, when logging, then the card number never appears."""
        mock_should_log.return_value = True

        log_api_request(
            "POST",
            "http://localhost/tickets/payment/card",
            payload={"ticketIds": ["t-1"], "cardNumber": "4242424242424242", "cardCvc": "123"},
        )

        call_args = mock_logger.info.call_args[0][0]
        assert "Payload:" in call_args
        assert "t-1" in call_args
        assert "4242424242424242" not in call_args
        assert '"123"' not in call_args

    @patch("rail_ticketing.adapters.api_request_logger.should_log_requests")
    @patch("rail_ticketing.adapters.api_request_logger.logger")
    def test_when_logging_with_string_payload_then_logs_as_string(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given string payload, when logging, then logs as string."""
        mock_should_log.return_value = True

        log_api_request("POST", "http://localhost/api", payload="simple string")

        assert "simple string" in mock_logger.info.call_args[0][0]


class TestFormatApiRequest:
    """Tests for format_api_request function."""

    def test_list_payload_is_rendered_as_json(self) -> None:
        """Given a list payload, when formatting, then it is rendered as JSON."""
        text = format_api_request("POST", "http://localhost/tickets", payload=[{"id": "t-1"}])

        assert text.startswith("POST http://localhost/tickets")
        assert '"id": "t-1"' in text

    def test_headers_and_payload_are_redacted(self) -> None:
        """Given a token and a card number, when formatting, then neither appears."""
        text = format_api_request(
            "POST",
            "http://localhost/tickets/payment/card",
            headers={"Authorization": "Bearer secret-token"},
            payload={"cardNumber": "4242424242424242", "currency": 0},
        )

        assert "secret-token" not in text
        assert "4242424242424242" not in text
        assert '"currency": 0' in text
