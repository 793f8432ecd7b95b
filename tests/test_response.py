from app.utils.response import success_response, error_response, redirect_response


def test_success_response_with_data():
    result = success_response(data={"key": "value"})
    assert result == {"status": "success", "data": {"key": "value"}, "message": None}


def test_success_response_with_message():
    result = success_response(data=None, message="Car deleted")
    assert result == {"status": "success", "data": None, "message": "Car deleted"}


def test_error_response():
    result = error_response("Validation failed")
    assert result == {"status": "error", "data": None, "message": "Validation failed"}


def test_error_response_with_data():
    result = error_response("Validation failed", data={"errors": {"brand": ["Brand is required"]}})
    assert result == {
        "status": "error",
        "data": {"errors": {"brand": ["Brand is required"]}},
        "message": "Validation failed",
    }


def test_redirect_response():
    result = redirect_response("/cars/3", car={"id": 3})
    assert result == {"status": "success", "data": {"redirect": "/cars/3", "car": {"id": 3}}, "message": None}
