import threading

from service_broker_client.core.request_id import current_id, request_id_context


def test_context_sets_and_restores_id() -> None:
    with request_id_context("outer"):
        assert current_id() == "outer"
        with request_id_context("inner"):
            assert current_id() == "inner"
        assert current_id() == "outer"


def test_current_id_is_generated_and_stable() -> None:
    with request_id_context("placeholder"):
        pass
    first = current_id()
    assert first
    assert current_id() == first


def test_ids_are_local_to_threads() -> None:
    seen: dict[str, str] = {}

    def worker(name: str) -> None:
        with request_id_context(name):
            seen[name] = current_id()

    threads = [threading.Thread(target=worker, args=(name,)) for name in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert seen == {"a": "a", "b": "b"}
