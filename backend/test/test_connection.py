"""ClientConnection 테스트."""

import asyncio

from talksync import ClientConnection


class FakeWebSocket:
    """send_json 호출을 기록하는 가짜 WebSocket."""

    def __init__(self, fail: bool = False, delay: float = 0.0):
        self.frames = []
        self.fail = fail
        self.delay = delay

    async def send_json(self, data):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)


async def test_writer_sends_frames_in_order():
    ws = FakeWebSocket()
    connection = ClientConnection(ws, user_id="u1")
    writer = asyncio.create_task(connection.run_writer())

    assert connection.send("iceCandidate", {"n": 1}) is True
    assert connection.send("iceCandidate", {"n": 2}) is True
    assert connection.send("endCall") is True
    connection.close()
    assert await asyncio.wait_for(writer, timeout=1) is True

    assert ws.frames == [
        {"type": "iceCandidate", "data": {"n": 1}},
        {"type": "iceCandidate", "data": {"n": 2}},
        {"type": "endCall", "data": None},
    ]


async def test_send_after_close_is_dropped():
    connection = ClientConnection(FakeWebSocket())
    connection.close()

    assert connection.closed
    assert connection.send("getOnlineUsers", []) is False
    assert connection.pending == 1  # close marker only


async def test_full_outbox_drops_frame():
    connection = ClientConnection(FakeWebSocket(), max_queue=2)

    assert connection.send("a") is True
    assert connection.send("b") is True
    assert connection.send("c") is False
    assert connection.pending == 2
    assert not connection.closed


async def test_write_failure_marks_connection_closed():
    connection = ClientConnection(FakeWebSocket(fail=True), user_id="u1")
    writer = asyncio.create_task(connection.run_writer())

    connection.send("getOnlineUsers", ["u1"])
    assert await asyncio.wait_for(writer, timeout=1) is False

    assert connection.closed
    assert connection.send("getOnlineUsers", ["u1"]) is False


async def test_write_timeout_marks_connection_closed():
    connection = ClientConnection(FakeWebSocket(delay=1.0), send_timeout=0.05)
    writer = asyncio.create_task(connection.run_writer())

    connection.send("getOnlineUsers", [])
    assert await asyncio.wait_for(writer, timeout=1) is False

    assert connection.closed


def test_empty_user_id_is_anonymous():
    assert ClientConnection(FakeWebSocket(), user_id="").user_id is None


def test_connections_compare_by_identity():
    ws = FakeWebSocket()
    a = ClientConnection(ws, user_id="u1")
    b = ClientConnection(ws, user_id="u1")

    assert a != b
    assert a.connection_id != b.connection_id
