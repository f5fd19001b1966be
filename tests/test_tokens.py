import pytest

from tinybind import Container, TypeRef, identity_for, ref


def test_tokens_with_same_label_are_distinct():
    a = ref("db")
    b = ref("db")
    assert a is not b
    assert a != b


def test_tokens_with_same_label_register_separately():
    c = Container()
    a = ref("db")
    b = ref("db")
    c.register_instance(a, "first")
    c.register_instance(b, "second")

    assert c.get(a) == "first"
    assert c.get(b) == "second"


def test_token_repr_shows_label():
    assert repr(ref("db")) == "TypeRef('db')"
    assert ref("db").label == "db"


def test_identity_for_token_returns_it_unchanged():
    token = ref("db")
    assert identity_for(token) is token


def test_identity_for_class_is_memoized():
    class Service: ...

    first = identity_for(Service)
    assert isinstance(first, TypeRef)
    assert first.label == "Service"
    assert identity_for(Service) is first


def test_classes_with_same_name_get_distinct_tokens():
    def make():
        class Service: ...

        return Service

    one, two = make(), make()
    assert identity_for(one) is not identity_for(two)


def test_class_key_and_its_token_are_interchangeable():
    c = Container()

    class Service: ...

    c.register(Service, lambda _: "svc")
    token = identity_for(Service)

    assert c.has(token)
    assert c.get(token) == "svc"


def test_identity_for_rejects_other_keys():
    with pytest.raises(TypeError):
        identity_for("Service")
    with pytest.raises(TypeError):
        identity_for(object())
