from slotter.errordata import ErrorData, get_error_data, with_error_data


def test_fresh_error_data_is_empty():
    ctx = with_error_data({})
    data = get_error_data(ctx)
    assert isinstance(data, ErrorData)
    assert data.message == ""
    assert data.has_message() is False


def test_setting_message_is_visible_through_context():
    ctx = with_error_data({})
    get_error_data(ctx).message = "role name taken"
    assert get_error_data(ctx).has_message() is True
    assert get_error_data(ctx).message == "role name taken"


def test_original_context_is_not_modified():
    original = {"other": 1}
    ctx = with_error_data(original)
    assert get_error_data(original) is None
    assert ctx["other"] == 1


def test_missing_error_data_returns_none():
    assert get_error_data({}) is None


def test_wrong_type_under_key_returns_none():
    assert get_error_data({"error_data": "not an ErrorData"}) is None


def test_rewrapping_gives_a_new_empty_holder():
    ctx = with_error_data({})
    get_error_data(ctx).message = "boom"
    fresh = with_error_data(ctx)
    assert get_error_data(fresh).has_message() is False
    assert get_error_data(ctx).message == "boom"