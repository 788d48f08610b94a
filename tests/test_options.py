import pytest

from pegadmin.options import rpc_timeout, set_rpc_timeout


@pytest.fixture(autouse=True)
def restore_timeout():
    saved = rpc_timeout()
    yield
    set_rpc_timeout(saved)


def test_default_timeout():
    assert rpc_timeout() == 10


def test_set_timeout():
    set_rpc_timeout(20)
    assert rpc_timeout() == 20


def test_set_timeout_overrides_previous():
    set_rpc_timeout(5)
    set_rpc_timeout(7.5)
    assert rpc_timeout() == 7.5