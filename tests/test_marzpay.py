"""MarzPay client against a mocked requests session."""

from unittest.mock import MagicMock

import pytest
import requests

from starinvest.utils.marzpay import MarzPayClient, GatewayError


def fake_response(status_code=200, body=None, text=""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def marzpay(session):
    return MarzPayClient(base_url="https://marz.test/api/v1/", auth_header="abc123", timeout=7, session=session)


class TestCollect:

    def test_posts_intent_as_form_fields_and_returns_data(self, marzpay, session):
        data = {"transaction": {"uuid": "txn-1", "status": "processing"}, "collection": {"provider": "airtel"}}
        session.request.return_value = fake_response(200, {"status": "success", "data": data})

        result = marzpay.collect(500, "+256700000001", "ref-1", "Investment: Gold Plan", "http://f/cb")

        assert result == data
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "POST"
        assert url == "https://marz.test/api/v1/collect-money"
        assert kwargs["timeout"] == 7
        assert kwargs["headers"]["Authorization"] == "Basic abc123"
        assert "json" not in kwargs
        assert kwargs["data"] == {
            "amount": 500,
            "phone_number": "+256700000001",
            "country": "UG",
            "reference": "ref-1",
            "description": "Investment: Gold Plan",
            "callback_url": "http://f/cb",
        }

    def test_upstream_message_is_kept(self, marzpay, session):
        session.request.return_value = fake_response(400, {"status": "error", "message": "Invalid phone"})

        with pytest.raises(GatewayError) as exc:
            marzpay.collect(500, "+256700000001", "ref-1", "d", "cb")

        assert exc.value.message == "Invalid phone"
        assert exc.value.status_code == 400

    def test_network_error(self, marzpay, session):
        session.request.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(GatewayError) as exc:
            marzpay.collect(500, "+256700000001", "ref-1", "d", "cb")

        assert exc.value.message is None

    def test_non_json_error_body(self, marzpay, session):
        session.request.return_value = fake_response(502, None, text="<html>Bad gateway</html>")

        with pytest.raises(GatewayError) as exc:
            marzpay.collect(500, "+256700000001", "ref-1", "d", "cb")

        assert exc.value.message is None

    def test_missing_transaction_uuid(self, marzpay, session):
        session.request.return_value = fake_response(200, {"status": "success", "data": {"transaction": {}}})

        with pytest.raises(GatewayError):
            marzpay.collect(500, "+256700000001", "ref-1", "d", "cb")


class TestQuery:

    def test_gets_transaction_by_uuid(self, marzpay, session):
        data = {"transaction": {"uuid": "txn-1", "status": "completed"}}
        session.request.return_value = fake_response(200, {"status": "success", "data": data})

        assert marzpay.query("txn-1") == data
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == "https://marz.test/api/v1/collect-money/txn-1"

    def test_timeout_is_a_gateway_error(self, marzpay, session):
        session.request.side_effect = requests.Timeout()
        with pytest.raises(GatewayError):
            marzpay.query("txn-1")


def test_default_session_retries_transient_failures():
    client = MarzPayClient(base_url="https://marz.test", auth_header="x", max_retries=3)
    retry = client.session.get_adapter("https://marz.test").max_retries
    assert retry.total == 3
    assert 503 in retry.status_forcelist
    assert "POST" in retry.allowed_methods
