import itertools

from tinybind import Container, Lifetime, ref


def test_get_list_returns_instances_in_requested_order():
    c = Container()
    a = ref("a")
    b = ref("b")
    c.register_instance(a, "A")
    c.register(b, lambda _: "B")

    assert c.get([b, a]) == ["B", "A"]
    assert c.get_many([a, b]) == ["A", "B"]


def test_get_tuple_is_a_batch():
    c = Container()
    a = ref("a")
    c.register_instance(a, "A")

    assert c.get((a, a)) == ["A", "A"]


def test_batch_shares_common_dependency():
    c = Container()
    d = ref("d")
    a = ref("a")
    b = ref("b")
    c.register(d, lambda _: object())
    c.register(a, lambda r: {"d": r.get(d)})
    c.register(b, lambda r: {"d": r.get(d)})

    got_a, got_b = c.get([a, b])
    assert got_a["d"] is got_b["d"]


def test_separate_calls_do_not_share_transients():
    c = Container()
    d = ref("d")
    a = ref("a")
    c.register(d, lambda _: object())
    c.register(a, lambda r: {"d": r.get(d)})

    assert c.get(a)["d"] is not c.get(a)["d"]


def test_transient_dependency_is_shared_within_one_get():
    c = Container()
    counter = itertools.count()
    dep = ref("dep")
    key = ref("key")
    c.register(dep, lambda _: {"n": next(counter)})
    c.register(key, lambda r: {"x": r.get(dep), "y": r.get(dep)})

    got = c.get(key)
    assert got == {"x": {"n": 0}, "y": {"n": 0}}
    assert got["x"] is got["y"]
    assert next(counter) == 1


def test_resolver_get_many_shares_context():
    c = Container()
    dep = ref("dep")
    pair = ref("pair")
    c.register(dep, lambda _: object())
    c.register(pair, lambda r: r.get_many([dep, dep]))

    first, second = c.get(pair)
    assert first is second


def test_batch_with_singletons_and_transients():
    c = Container()
    single = ref("single")
    trans = ref("trans")
    c.register(single, lambda _: object(), lifetime=Lifetime.SINGLETON)
    c.register(trans, lambda _: object())

    s1, t1 = c.get([single, trans])
    s2, t2 = c.get([single, trans])
    assert s1 is s2
    assert t1 is not t2


def test_empty_batch():
    c = Container()
    assert c.get([]) == []
