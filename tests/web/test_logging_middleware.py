from api.middleware.logging import LoggingMiddleware


def test_sanitize_masks_payment_credentials():
    body = {
        "methodId": "credit_card",
        "fields": {
            "cardNumber": "4242 4242 4242 4242",
            "cvv": "123",
            "expiry": "12/30",
            "cardholder": "Jane Doe",
        },
        "items": [{"vpa": "user@bank"}],
    }
    clean = LoggingMiddleware.sanitize(body)
    assert clean["methodId"] == "credit_card"
    assert clean["fields"]["cardNumber"] == "****4242"
    assert clean["fields"]["cvv"] == "***"
    assert clean["fields"]["expiry"] == "***"
    assert clean["fields"]["cardholder"] == "Jane Doe"
    assert clean["items"][0]["vpa"] == "***"


def test_sanitize_short_card_number():
    assert LoggingMiddleware.sanitize({"cardNumber": "42"}) == {"cardNumber": "***"}
