import pytest

from chatoyant.schema import Schema, clone, create, fields, is_proxied, to_object, unwrap, wrap


class Address(Schema):
    street = Schema.String()
    city = Schema.String(default="Paris")


class Contact(Schema):
    name = Schema.String()
    tags = Schema.Array(Schema.String())
    address = Schema.Object(Address)
    previous = Schema.Array(Schema.Object(Address))


def test_reads_and_writes_go_through_descriptor_value():
    contact = create(Contact)
    contact.name = "Ada"

    assert contact.name == "Ada"
    assert fields(unwrap(contact))["name"].value == "Ada"


def test_assignment_does_not_validate():
    contact = create(Contact)
    contact.name = 42
    assert contact.name == 42


def test_nested_object_is_returned_as_view_for_deep_writes():
    contact = create(Contact)
    contact.address.street = "Main St"

    assert is_proxied(contact.address)
    assert fields(fields(unwrap(contact))["address"].value)["street"].value == "Main St"


def test_undeclared_attributes_fall_through():
    contact = create(Contact)
    contact.note = "hi"

    assert contact.note == "hi"
    assert unwrap(contact).note == "hi"
    with pytest.raises(AttributeError):
        contact.missing


def test_declared_fields_cannot_be_deleted():
    contact = create(Contact)
    with pytest.raises(AttributeError):
        del contact.name


def test_is_proxied_uses_marker_not_shape():
    raw = unwrap(create(Contact))

    assert is_proxied(wrap(raw))
    assert not is_proxied(raw)
    assert not is_proxied({"name": "x"})
    assert wrap(wrap(raw)) == wrap(raw)


def test_dir_lists_field_names():
    assert list(create(Contact)) == ["name", "tags", "address", "previous"]


def test_to_object_and_clone_are_independent():
    contact = create(Contact)
    Schema.parse(
        contact,
        {
            "name": "Ada",
            "tags": ["a"],
            "address": {"street": "Main"},
            "previous": [{"street": "Old", "city": "Rome"}],
        },
    )

    copy = clone(contact)
    copy.tags.append("b")
    copy.address.street = "Other"

    assert to_object(contact) == {
        "name": "Ada",
        "tags": ["a"],
        "address": {"street": "Main", "city": "Paris"},
        "previous": [{"street": "Old", "city": "Rome"}],
    }
    assert copy.tags == ["a", "b"]
    assert copy.address.street == "Other"
    assert copy.previous[0].city == "Rome"
