from core import CommandList, Scalar, command_spec_from_yaml, flatten_commands


def test_scalar_from_string():
    assert command_spec_from_yaml("make all") == Scalar("make all")


def test_unsupported_values_have_no_spec():
    assert command_spec_from_yaml(None) is None
    assert command_spec_from_yaml(42) is None
    assert command_spec_from_yaml({"task": "other"}) is None


def test_nested_lists_flatten_in_order():
    spec = command_spec_from_yaml(["a", ["b", ["c"]], {"task": "x"}, 3, "d"])
    assert isinstance(spec, CommandList)
    assert flatten_commands(spec) == ["a", "b", "c", "d"]


def test_blank_strings_are_dropped():
    assert flatten_commands(command_spec_from_yaml(["", "  ", "echo ok"])) == ["echo ok"]
    assert flatten_commands(Scalar("   ")) == []


def test_flatten_none_is_empty():
    assert flatten_commands(None) == []
