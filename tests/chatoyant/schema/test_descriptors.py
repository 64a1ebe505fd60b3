import pytest

from chatoyant.schema import FieldKind, Schema, define_schema, fields, instantiate


class Address(Schema):
    street = Schema.String()
    zip = Schema.String(pattern=r"^\d{5}$", optional=True)


class Person(Schema):
    name = Schema.String(min_length=1)
    age = Schema.Integer(minimum=0)
    active = Schema.Boolean()
    score = Schema.Number(default=1.5)
    role = Schema.Enum(["admin", "user"])
    kind = Schema.Literal("person")
    nothing = Schema.Null()
    tags = Schema.Array(Schema.String())
    address = Schema.Object(Address)


def test_zero_values_per_kind():
    raw = instantiate(Person)
    values = {name: f.value for name, f in fields(raw).items() if name != "address"}

    assert values == {
        "name": "",
        "age": 0,
        "active": False,
        "score": 1.5,
        "role": "admin",
        "kind": "person",
        "nothing": None,
        "tags": [],
    }
    assert isinstance(fields(raw)["address"].value, Address)


def test_options_use_json_schema_keywords_and_drop_unset():
    f = Schema.Integer(minimum=0, exclusive_maximum=10, multiple_of=2, description="d")

    assert f.kind is FieldKind.INTEGER
    assert f.options == {
        "description": "d",
        "minimum": 0,
        "exclusiveMaximum": 10,
        "multipleOf": 2,
    }
    assert f.has_default is False
    assert Schema.String(default="x").has_default is True


def test_kind_is_immutable_and_null_value_stays_none():
    f = Schema.Null()
    f.value = "something"
    assert f.value is None

    with pytest.raises(AttributeError):
        f.kind = FieldKind.STRING


def test_enum_requires_values_and_array_requires_descriptor():
    with pytest.raises(ValueError):
        Schema.Enum([])
    with pytest.raises(TypeError):
        Schema.Array("string")


def test_declared_order_is_preserved():
    assert list(Person.__fields__) == [
        "name",
        "age",
        "active",
        "score",
        "role",
        "kind",
        "nothing",
        "tags",
        "address",
    ]


def test_instances_do_not_share_descriptors_or_nested_defaults():
    a = instantiate(Person)
    b = instantiate(Person)

    assert fields(a)["name"] is not fields(b)["name"]
    assert fields(a)["tags"].value is not fields(b)["tags"].value
    assert fields(a)["address"].value is not fields(b)["address"].value


def test_subclass_inherits_fields_in_order():
    class Employee(Person):
        company = Schema.String()

    assert list(Employee.__fields__)[-1] == "company"
    assert "name" in Employee.__fields__


def test_define_schema_builds_class():
    Point = define_schema("Point", [("x", Schema.Number()), ("y", Schema.Number())])

    assert Point.__name__ == "Point"
    assert list(Point.__fields__) == ["x", "y"]

    with pytest.raises(TypeError):
        define_schema("Bad", {"x": 1})
    with pytest.raises(ValueError):
        define_schema("Dup", [("x", Schema.Number()), ("x", Schema.Number())])


def test_plain_class_with_descriptors_can_be_instantiated():
    class Plain:
        title = Schema.String(default="untitled")

    raw = instantiate(Plain)

    assert fields(raw)["title"].value == "untitled"
    assert fields(raw)["title"] is not Plain.title
