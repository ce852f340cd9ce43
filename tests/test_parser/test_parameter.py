import pytest

from argresolve.exceptions import SpecError
from argresolve.parser import NO_DEFAULT, Arity, ParameterSpec


def test_defaults():
    spec = ParameterSpec("foo")
    assert spec.type_tag == "str"
    assert spec.arity is Arity.SINGLE
    assert spec.default is NO_DEFAULT
    assert not spec.has_default
    assert spec.dest == "foo"
    assert spec.flags == ("--foo",)


def test_dest_derived_from_name():
    assert ParameterSpec("my-num", type_tag="int").dest == "my_num"
    assert ParameterSpec("my-num", dest="count").dest == "count"


def test_invalid_dest():
    with pytest.raises(SpecError):
        ParameterSpec("foo", dest="not valid")


def test_short_alias():
    spec = ParameterSpec("foo", short="f")
    assert spec.flags == ("-f", "--foo")
    assert spec.display_flags == ("-f", "--foo")


def test_one_letter_name_is_short():
    spec = ParameterSpec("i", type_tag="int")
    assert spec.short_name == "i"
    assert spec.flags == ("-i", "--i")
    assert spec.display_flags == ("-i",)


@pytest.mark.parametrize("name", ["", "--foo", "-f", "foo bar", "foo=bar"])
def test_invalid_names(name):
    with pytest.raises(SpecError):
        ParameterSpec(name)


@pytest.mark.parametrize("short", ["ab", "1", "-", ""])
def test_invalid_short(short):
    with pytest.raises(SpecError):
        ParameterSpec("foo", short=short)


def test_flag_defaults():
    spec = ParameterSpec("verbose", is_flag=True)
    assert spec.type_tag == "flag"
    assert spec.default is False
    assert spec.has_default


def test_flag_explicit_false_default_is_allowed():
    assert ParameterSpec("verbose", is_flag=True, default=False).default is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"arity": Arity.REPEATABLE},
        {"arity": "optional"},
        {"default": True},
        {"type_tag": "int"},
        {"positional": True},
    ],
)
def test_invalid_flags(kwargs):
    with pytest.raises(SpecError):
        ParameterSpec("verbose", is_flag=True, **kwargs)


def test_arity_aliases():
    assert ParameterSpec("foo", arity="?").arity is Arity.OPTIONAL
    assert ParameterSpec("foo", arity="*").arity is Arity.REPEATABLE
    assert ParameterSpec("foo", arity="Many").arity is Arity.REPEATABLE
    assert ParameterSpec("foo", arity="one").arity is Arity.SINGLE


def test_invalid_arity():
    with pytest.raises(SpecError) as excinfo:
        ParameterSpec("foo", arity="twice")
    assert "Must be one of" in str(excinfo.value)


def test_empty_type_tag():
    with pytest.raises(SpecError):
        ParameterSpec("foo", type_tag="")


def test_specs_are_immutable():
    spec = ParameterSpec("foo")
    with pytest.raises(AttributeError):
        spec.name = "bar"
