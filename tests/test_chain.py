from humakit.chain import Middlewares


def _recorder(calls, label):
    def middleware(ctx, next_handler):
        calls.append(label)
        next_handler(ctx)

    return middleware


def test_empty_chain_returns_endpoint_itself():
    def endpoint(ctx):
        pass

    assert Middlewares().handler(endpoint) is endpoint


def test_middlewares_run_in_order_before_endpoint():
    calls = []
    chain = Middlewares([_recorder(calls, "first"), _recorder(calls, "second")])
    chain.append(_recorder(calls, "third"))

    handler = chain.handler(lambda ctx: calls.append("endpoint"))
    handler(object())

    assert calls == ["first", "second", "third", "endpoint"]


def test_middleware_can_replace_context():
    seen = []

    def swap(ctx, next_handler):
        next_handler({**ctx, "foo": "bar"})

    handler = Middlewares([swap]).handler(seen.append)
    handler({"start": 1})

    assert seen == [{"start": 1, "foo": "bar"}]


def test_middleware_can_short_circuit():
    calls = []

    def stop(ctx, next_handler):
        calls.append("stop")

    chain = Middlewares([stop, _recorder(calls, "after")])
    chain.handler(lambda ctx: calls.append("endpoint"))(None)

    assert calls == ["stop"]


def test_middleware_runs_code_after_next():
    calls = []

    def around(ctx, next_handler):
        calls.append("before")
        next_handler(ctx)
        calls.append("after")

    Middlewares([around]).handler(lambda ctx: calls.append("endpoint"))(None)

    assert calls == ["before", "endpoint", "after"]


def test_handler_can_be_called_repeatedly():
    calls = []
    handler = Middlewares([_recorder(calls, "mw")]).handler(calls.append)
    handler("one")
    handler("two")
    assert calls == ["mw", "one", "mw", "two"]