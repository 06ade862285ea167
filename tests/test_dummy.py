import pytest
from ripedb.dummy import Dummy, factory
from ripedb.exceptions import IncompleteRecord, PrimaryKeyUndefined
from ripedb.wire import TemplateAttribute
from testdata import MNTNER_DESCRIPTOR, TEMPLATE_DOCUMENT


def test_factory_primary_key():
    obj = factory("mntner", MNTNER_DESCRIPTOR)
    assert isinstance(obj, Dummy)
    assert obj.get_type() == "mntner"
    assert obj.get_primary_key_name() == "mntner"


def test_factory_flags():
    obj = factory("mntner", MNTNER_DESCRIPTOR)
    mntner = obj.get_attribute("mntner")
    admin_c = obj.get_attribute("admin-c")
    assert mntner.is_required() and not mntner.is_multiple()
    assert admin_c.is_required() and admin_c.is_multiple()


def test_factory_scenario():
    obj = factory("mntner", MNTNER_DESCRIPTOR)
    obj.set_attribute("mntner", "OPS1-TEST")
    obj.add_attribute("admin-c", "AA1-TEST").add_attribute("admin-c", "BB2-TEST")
    assert obj.get_primary_key() == "OPS1-TEST"
    assert obj.to_array()["attributes"]["attribute"] == [
        {"name": "mntner", "value": "OPS1-TEST"},
        {"name": "admin-c", "value": "AA1-TEST"},
        {"name": "admin-c", "value": "BB2-TEST"},
    ]


def test_factory_scenario_incomplete():
    obj = factory("mntner", MNTNER_DESCRIPTOR)
    obj.set_attribute("mntner", "OPS1-TEST")
    with pytest.raises(IncompleteRecord) as e:
        obj.to_array()
    assert e.value.name == "admin-c"


def test_factory_preserves_order():
    descriptor = [
        {"name": n, "keys": [], "requirement": "OPTIONAL", "cardinality": "SINGLE"}
        for n in ["z", "a", "m", "b"]
    ]
    obj = factory("thing", descriptor)
    for entry in reversed(descriptor):
        obj.set_attribute(entry["name"], entry["name"].upper())
    entries = obj.to_array()["attributes"]["attribute"]
    assert [e["name"] for e in entries] == ["z", "a", "m", "b"]
    assert len(entries) == 4


def test_factory_first_primary_key_wins():
    descriptor = [
        {"name": "a", "keys": ["LOOKUP_KEY"], "requirement": "MANDATORY", "cardinality": "SINGLE"},
        {"name": "b", "keys": ["PRIMARY_KEY"], "requirement": "MANDATORY", "cardinality": "SINGLE"},
        {"name": "c", "keys": ["PRIMARY_KEY"], "requirement": "MANDATORY", "cardinality": "SINGLE"},
    ]
    assert factory("thing", descriptor).get_primary_key_name() == "b"


def test_factory_without_primary_key():
    descriptor = [
        {"name": "a", "keys": [], "requirement": "MANDATORY", "cardinality": "SINGLE"}
    ]
    obj = factory("thing", descriptor)
    obj.set_attribute("a", "x")
    assert obj.get_primary_key_name() is None
    with pytest.raises(PrimaryKeyUndefined):
        obj.get_primary_key()
    assert obj.to_array()["attributes"]["attribute"] == [{"name": "a", "value": "x"}]


def test_factory_other_requirement_is_optional():
    descriptor = [
        {"name": "a", "keys": [], "requirement": "GENERATED", "cardinality": "SINGLE"},
        {"name": "b", "keys": [], "requirement": "DEPRECATED", "cardinality": "LIST"},
    ]
    obj = factory("thing", descriptor)
    assert not obj.get_attribute("a").is_required()
    assert not obj.get_attribute("b").is_multiple()
    assert obj.is_valid()


def test_factory_accepts_models():
    descriptor = [TemplateAttribute.model_validate(e) for e in MNTNER_DESCRIPTOR]
    assert factory("mntner", descriptor).get_primary_key_name() == "mntner"


def test_setup_attribute():
    obj = Dummy("thing", "thing")
    obj.setup_attribute("thing", True, False)
    obj.set_attribute("thing", "x")
    assert obj.get_primary_key() == "x"


def test_from_template():
    obj = Dummy.from_template(TEMPLATE_DOCUMENT)
    assert obj.get_type() == "poem"
    assert obj.get_primary_key_name() == "poem"
    obj.set_attribute("poem", "POEM-TEST")
    obj.add_attribute("text", ["roses are red", "violets are blue"])
    obj.set_attribute("source", "TEST")
    data = obj.to_array()
    assert data["source"] == {"id": "TEST"}
    assert len(data["attributes"]["attribute"]) == 4
    assert str(obj).startswith("Poem (POEM-TEST):\n")


def test_from_template_empty():
    with pytest.raises(ValueError):
        Dummy.from_template({"templates": {"template": []}})


def test_factory_multiple_primary_key_uses_first_value():
    descriptor = [
        {"name": "a", "keys": ["PRIMARY_KEY"], "requirement": "MANDATORY", "cardinality": "MULTIPLE"},
    ]
    obj = factory("thing", descriptor)
    obj.add_attribute("a", ["first", "second"])
    assert obj.get_primary_key() == "first"
    assert str(obj).startswith("Thing (first):\n")
