from navigator_api.response import error_response, success_response


def test_success_response_shape() -> None:
    payload = success_response({"selected_index": 1})
    assert payload["success"] is True
    assert payload["data"] == {"selected_index": 1}
    assert payload["meta"] == {}


def test_error_response_shape() -> None:
    payload = error_response("NO_ROUTE_FOUND", "No routes found")
    assert payload["success"] is False
    assert payload["error"]["code"] == "NO_ROUTE_FOUND"
    assert payload["error"]["message"] == "No routes found"
