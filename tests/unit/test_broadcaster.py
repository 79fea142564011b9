"""
Unit tests for the live gallery broadcaster.
"""
import asyncio
import pytest
from uuid import uuid4

from fastapi.websockets import WebSocketState

from src.services.broadcaster import GalleryBroadcaster, build_event


class FakeWebSocket:
    def __init__(self, fail=False, state=WebSocketState.CONNECTED):
        self.client_state = state
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


@pytest.fixture
def broadcaster():
    return GalleryBroadcaster()


async def wait_for_delivery(ws, timeout=1.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not ws.sent and asyncio.get_running_loop().time() < deadline:
        await asyncio.sleep(0.01)


class TestRegistry:

    async def test_connect_accepts_and_registers(self, broadcaster):
        ws = FakeWebSocket()
        gallery_id = uuid4()

        await broadcaster.connect(ws, gallery_id)

        assert ws.accepted
        assert broadcaster.get_gallery_connections(gallery_id) == 1
        assert broadcaster.get_total_connections() == 1

    async def test_disconnect_twice_is_safe(self, broadcaster):
        ws = FakeWebSocket()
        gallery_id = uuid4()
        await broadcaster.connect(ws, gallery_id)

        broadcaster.disconnect(ws)
        broadcaster.disconnect(ws)

        assert broadcaster.get_gallery_connections(gallery_id) == 0
        assert broadcaster.get_statistics()["disconnections"] == 1

    def test_disconnect_unknown_socket(self, broadcaster):
        broadcaster.disconnect(FakeWebSocket())

        assert broadcaster.get_total_connections() == 0


class TestBroadcast:

    async def test_delivers_only_to_gallery_viewers(self, broadcaster):
        gallery_id, other_id = uuid4(), uuid4()
        viewer_a, viewer_b, outsider = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
        await broadcaster.connect(viewer_a, gallery_id)
        await broadcaster.connect(viewer_b, gallery_id)
        await broadcaster.connect(outsider, other_id)
        event = build_event("selection", gallery_id, action="add")

        delivered = await broadcaster.broadcast(gallery_id, event)

        assert delivered == 2
        assert viewer_a.sent == [event]
        assert viewer_b.sent == [event]
        assert outsider.sent == []

    async def test_gallery_without_viewers_is_noop(self, broadcaster):
        assert await broadcaster.broadcast(uuid4(), {"type": "selection"}) == 0

    async def test_skips_sockets_not_open(self, broadcaster):
        gallery_id = uuid4()
        closing = FakeWebSocket(state=WebSocketState.DISCONNECTED)
        await broadcaster.connect(closing, gallery_id)

        delivered = await broadcaster.broadcast(gallery_id, {"type": "selection"})

        assert delivered == 0
        assert closing.sent == []

    async def test_failed_send_drops_socket_and_continues(self, broadcaster):
        gallery_id = uuid4()
        broken, healthy = FakeWebSocket(fail=True), FakeWebSocket()
        await broadcaster.connect(broken, gallery_id)
        await broadcaster.connect(healthy, gallery_id)

        delivered = await broadcaster.broadcast(gallery_id, {"type": "favorite"})

        assert delivered == 1
        assert healthy.sent == [{"type": "favorite"}]
        assert broadcaster.get_gallery_connections(gallery_id) == 1
        assert broadcaster.get_statistics()["errors"] == 1


class TestPublish:

    def test_publish_without_loop_drops_event(self, broadcaster):
        assert broadcaster.publish(uuid4(), {"type": "selection"}) is False

    async def test_publish_from_worker_thread(self, broadcaster):
        gallery_id = uuid4()
        ws = FakeWebSocket()
        await broadcaster.connect(ws, gallery_id)
        broadcaster.bind_loop(asyncio.get_running_loop())

        scheduled = await asyncio.to_thread(broadcaster.publish, gallery_id, {"type": "select_all"})
        await wait_for_delivery(ws)

        assert scheduled is True
        assert ws.sent == [{"type": "select_all"}]

    async def test_publish_after_unbind(self, broadcaster):
        broadcaster.bind_loop(asyncio.get_running_loop())
        broadcaster.unbind_loop()

        assert broadcaster.publish(uuid4(), {"type": "selection"}) is False


def test_build_event_stringifies_ids():
    gallery_id, photo_id = uuid4(), uuid4()

    event = build_event("selection", gallery_id, photo_id=photo_id, client_identifier="c1", action="add")

    assert event["type"] == "selection"
    assert event["gallery_id"] == str(gallery_id)
    assert event["photo_id"] == str(photo_id)
    assert event["client_identifier"] == "c1"
    assert event["action"] == "add"
    assert "timestamp" in event
