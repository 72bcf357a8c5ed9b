import pytest

from flowkit.coerce import CoercionError
from flowkit.rest_metadata import RestInput, RestOutput, RestSettings


def test_settings_rejects_unknown_method():
    with pytest.raises(ValueError):
        RestSettings.from_map({"method": "POS", "uri": "http://petstore.swagger.io/v2/pet"})


def test_settings_requires_uri():
    with pytest.raises(ValueError):
        RestSettings.from_map({"method": "POST", "uri": ""})


def test_settings_requires_method():
    with pytest.raises(ValueError):
        RestSettings.from_map({"uri": "http://petstore.swagger.io/v2/pet"})


def test_settings_method_is_case_insensitive():
    settings = RestSettings.from_map(
        {"method": "pOsT", "uri": "http://petstore.swagger.io/v2/pet"}
    )
    assert settings.method == "POST"
    assert settings.uri == "http://petstore.swagger.io/v2/pet"


def test_settings_defaults():
    settings = RestSettings.from_map({"method": "GET", "uri": "http://localhost/flow"})
    assert settings.headers == {}
    assert settings.timeout == 0
    assert settings.skip_ssl_verify is False
    assert settings.proxy == ""
    assert settings.ssl_config == {}


def test_settings_values_are_coerced():
    settings = RestSettings.from_map(
        {
            "method": "GET",
            "uri": "https://localhost/flow",
            "headers": {"TestHeader": "TestValue", "Count": 3},
            "timeout": "30",
            "skipSSLVerify": "true",
            "CAFile": "ca.pem",
            "sslConfig": {"skipVerify": False},
        }
    )
    assert settings.headers == {"TestHeader": "TestValue", "Count": "3"}
    assert settings.timeout == 30
    assert settings.skip_ssl_verify is True
    assert settings.ca_file == "ca.pem"
    assert settings.ssl_config == {"skipVerify": False}


def test_input_round_trip():
    original = RestInput(
        path_params={"id": "1234"},
        query_params={"status": "ava"},
        headers={"TestHeader": "TestValue"},
        content={"name": "my pet"},
    )
    assert RestInput.from_map(original.to_map()) == original


def test_input_from_map_parses_json_params():
    parsed = RestInput.from_map({"pathParams": '{"id": "1234"}'})
    assert parsed.path_params == {"id": "1234"}
    assert parsed.query_params == {}
    assert parsed.content is None


def test_input_from_map_rejects_bad_params():
    with pytest.raises(CoercionError):
        RestInput.from_map({"queryParams": 5})


def test_output_from_map_coerces_status():
    output = RestOutput.from_map({"status": "404", "data": "not found"})
    assert output.status == 404
    assert output.data == "not found"


def test_output_round_trip():
    original = RestOutput(status=200, data={"id": 16})
    assert RestOutput.from_map(original.to_map()) == original


def test_output_rejects_bad_status():
    with pytest.raises(CoercionError):
        RestOutput.from_map({"status": "abc"})