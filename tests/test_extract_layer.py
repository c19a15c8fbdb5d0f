"""
Test Extract Layer - Keepa client and image fetcher against stubbed HTTP responses
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unittest.mock import Mock
import pytest
import requests

from src.extract.data_fetcher import (
    fetch_image_urls,
    fetch_image_urls_batch,
    parse_product_response,
)
from src.extract.errors import (
    MISSING_IMAGES_MESSAGE,
    KeepaError,
    MissingDataError,
    RemoteApiError,
)
from src.extract.keepa_api import PRODUCT_ENDPOINT, KeepaAPIClient


def make_response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def make_client(*responses, **kwargs):
    session = Mock(spec=requests.Session)
    session.get.side_effect = list(responses)
    return KeepaAPIClient(api_key="test-key", session=session, **kwargs)


def product_payload(images_csv):
    return {"tokensLeft": 100, "products": [{"asin": "B000TEST01", "imagesCSV": images_csv}]}


def test_returns_split_images_in_api_order():
    client = make_client(make_response(product_payload("a,b,c")))

    assert fetch_image_urls("B000TEST01", client) == ["a", "b", "c"]


def test_tokens_are_returned_raw():
    images = "81abc.jpg,71def.jpg, 61ghi.jpg"
    client = make_client(make_response(product_payload(images)))

    assert fetch_image_urls("B000TEST01", client) == [
        "81abc.jpg",
        "71def.jpg",
        " 61ghi.jpg",
    ]


def test_request_carries_key_domain_and_asin():
    client = make_client(make_response(product_payload("a")))

    fetch_image_urls("B000TEST01", client)

    client.session.get.assert_called_once_with(
        PRODUCT_ENDPOINT,
        params={"key": "test-key", "domain": 5, "asin": "B000TEST01"},
        timeout=None,
    )


def test_domain_and_timeout_are_configurable():
    client = make_client(make_response(product_payload("a")), domain=1, timeout=10)

    fetch_image_urls("B000TEST01", client)

    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["domain"] == 1
    assert kwargs["timeout"] == 10


def test_error_payload_raises_remote_api_error_verbatim():
    payload = {"error": {"type": "invalidKey", "message": "Invalid API key."}}
    client = make_client(make_response(payload, status_code=400))

    with pytest.raises(RemoteApiError) as exc_info:
        fetch_image_urls("B000TEST01", client)

    assert str(exc_info.value) == "Invalid API key."
    assert exc_info.value.status_code == 400


def test_error_on_2xx_status_is_still_raised():
    payload = {"error": {"message": "Not enough tokens"}, "products": []}
    client = make_client(make_response(payload, status_code=200))

    with pytest.raises(RemoteApiError, match="Not enough tokens"):
        fetch_image_urls("B000TEST01", client)


def test_error_without_message_uses_error_object():
    with pytest.raises(RemoteApiError) as exc_info:
        parse_product_response({"error": {"type": "tokens"}}, 429)

    assert "tokens" in str(exc_info.value)


@pytest.mark.parametrize(
    "payload",
    [
        product_payload(None),
        product_payload(""),
        {"products": [{"asin": "B000TEST01"}]},
        {"products": []},
        {"tokensLeft": 5},
    ],
)
def test_missing_images_raises_missing_data_error(payload):
    client = make_client(make_response(payload))

    with pytest.raises(MissingDataError) as exc_info:
        fetch_image_urls("B000TEST01", client)

    assert str(exc_info.value) == MISSING_IMAGES_MESSAGE
    assert exc_info.value.asin == "B000TEST01"


def test_body_that_is_not_json_raises_remote_api_error():
    client = make_client(
        make_response(status_code=502, json_error=ValueError("Expecting value"))
    )

    with pytest.raises(RemoteApiError, match="HTTP 502") as exc_info:
        fetch_image_urls("B000TEST01", client)

    assert exc_info.value.status_code == 502


def test_unexpected_shape_raises_remote_api_error():
    with pytest.raises(RemoteApiError):
        parse_product_response(["not", "an", "object"], 200)


def test_transport_errors_propagate():
    client = make_client(requests.ConnectionError("connection refused"))

    with pytest.raises(requests.ConnectionError):
        fetch_image_urls("B000TEST01", client)


@pytest.mark.parametrize("asin", ["", None])
def test_empty_asin_is_rejected_before_request(asin):
    client = make_client()

    with pytest.raises(ValueError):
        fetch_image_urls(asin, client)

    client.session.get.assert_not_called()


def test_client_requires_api_key():
    with pytest.raises(ValueError):
        KeepaAPIClient(api_key="")


def test_batch_keeps_input_order_and_duplicates():
    client = make_client(
        make_response(product_payload("x1a,x1b")),
        make_response(product_payload("x2a")),
        make_response(product_payload("x1a,x1b")),
    )

    results = fetch_image_urls_batch(["X1", "X2", "X1"], client)

    assert results == [["x1a", "x1b"], ["x2a"], ["x1a", "x1b"]]


def test_batch_stops_at_first_failure():
    client = make_client(
        make_response(product_payload("a")),
        make_response({"error": {"message": "Invalid ASIN"}}),
        make_response(product_payload("c")),
    )

    with pytest.raises(KeepaError):
        fetch_image_urls_batch(["X1", "BAD", "X3"], client)

    assert client.session.get.call_count == 2


def test_whitespace_asin_is_sent_to_keepa():
    client = make_client(make_response({"error": {"message": "Invalid ASIN"}}))

    with pytest.raises(RemoteApiError, match="Invalid ASIN"):
        fetch_image_urls("   ", client)

    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["asin"] == "   "


def test_transport_error_does_not_leak_api_key(caplog):
    session = Mock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError(
        "Max retries exceeded with url: /product?key=SUPERSECRETKEY&domain=5&asin=B000TEST01"
    )
    client = KeepaAPIClient(api_key="SUPERSECRETKEY", session=session)

    with caplog.at_level("DEBUG"):
        with pytest.raises(requests.ConnectionError) as exc_info:
            fetch_image_urls("B000TEST01", client)

    assert "SUPERSECRETKEY" not in str(exc_info.value)
    assert "key=***" in str(exc_info.value)
    assert exc_info.value.__cause__ is None
    assert caplog.records
    assert all("SUPERSECRETKEY" not in r.getMessage() for r in caplog.records)


def test_batch_failure_is_not_logged_per_asin(caplog):
    client = make_client(make_response({"error": {"message": "Invalid ASIN"}}))

    with caplog.at_level("ERROR"):
        with pytest.raises(RemoteApiError):
            fetch_image_urls_batch(["BAD"], client)

    assert [r for r in caplog.records if r.levelname == "ERROR"] == []
