import json

from humakit.autoconfig import AutoConfig, AutoConfigVar


def test_empty_var_serialises_to_empty_dict():
    assert AutoConfigVar().to_dict() == {}


def test_var_keeps_set_fields():
    var = AutoConfigVar(
        description="Tenant name",
        example="acme",
        default="acme",
        enum=["acme", "other"],
        exclude=True,
    )
    assert var.to_dict() == {
        "description": "Tenant name",
        "example": "acme",
        "default": "acme",
        "enum": ["acme", "other"],
        "exclude": True,
    }


def test_var_zero_default_is_kept():
    assert AutoConfigVar(default=0).to_dict() == {"default": 0}
    assert AutoConfigVar(default=False).to_dict() == {"default": False}


def test_autoconfig_always_has_security_and_params():
    data = AutoConfig(security="oauth").to_dict()
    assert data == {"security": "oauth", "params": None}


def test_autoconfig_nested_prompt():
    config = AutoConfig(
        security="oauth",
        headers={"X-Tenant": "{tenant}"},
        prompt={"tenant": AutoConfigVar(description="Tenant name")},
        params={"client_id": "placeholder"},
    )
    data = config.to_dict()
    assert data["headers"] == {"X-Tenant": "{tenant}"}
    assert data["prompt"] == {"tenant": {"description": "Tenant name"}}
    assert data["params"] == {"client_id": "placeholder"}
    assert json.loads(json.dumps(data)) == data


def test_to_dict_returns_copies():
    config = AutoConfig(security="oauth", params={"a": "b"})
    data = config.to_dict()
    data["params"]["a"] = "changed"
    assert config.params == {"a": "b"}