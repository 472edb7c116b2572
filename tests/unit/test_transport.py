"""
Unit tests for the ASGI response transport.
"""
import pytest

from httpcompression.core.exceptions import StreamStateError
from httpcompression.transport import ASGIResponse

START = {
    "type": "http.response.start",
    "status": 200,
    "headers": [(b"content-type", b"text/plain")],
}


@pytest.fixture
def sent():
    return []


@pytest.fixture
def response(sent):
    async def send(message):
        sent.append(message)

    response = ASGIResponse(send)
    response.start(START)
    return response


class TestASGIResponse:
    """Test cases for ASGIResponse."""

    @pytest.mark.asyncio
    async def test_messages_are_queued_until_flushed(self, response, sent):
        assert not response.headers_sent

        response.write(b"a")
        response.end(b"b")
        assert response.headers_sent
        assert sent == []

        await response.flush_pending()
        assert [m["type"] for m in sent] == [
            "http.response.start", "http.response.body", "http.response.body"
        ]
        assert sent[1] == {"type": "http.response.body", "body": b"a", "more_body": True}
        assert sent[2] == {"type": "http.response.body", "body": b"b", "more_body": False}

    @pytest.mark.asyncio
    async def test_header_changes_before_commit_are_sent(self, response, sent):
        response.headers["X-Test"] = "1"
        response.end()
        await response.flush_pending()

        assert (b"x-test", b"1") in sent[0]["headers"]
        assert sent[0]["status"] == 200
        assert sent[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_backpressure_and_drain(self, sent):
        async def send(message):
            sent.append(message)

        response = ASGIResponse(send, high_water_mark=4)
        response.start(START)
        drains = []
        response.on("drain", lambda: drains.append(True))

        assert response.write(b"12") is True
        assert response.write(b"345") is False

        await response.flush_pending()
        assert drains == [True]
        assert response.write(b"6") is True

    @pytest.mark.asyncio
    async def test_drain_listener_output_is_sent_in_same_flush(self, sent):
        async def send(message):
            sent.append(message)

        response = ASGIResponse(send, high_water_mark=1)
        response.start(START)
        response.once("drain", lambda: response.end(b"tail"))

        response.write(b"head")
        await response.flush_pending()

        assert [m.get("body") for m in sent[1:]] == [b"head", b"tail"]

    def test_write_after_end(self, response):
        response.end()
        with pytest.raises(StreamStateError):
            response.write(b"late")

    def test_end_is_idempotent(self, response):
        finished = []
        response.on("finish", lambda: finished.append(True))
        response.end(b"a")
        response.end(b"b")
        assert finished == [True]

    def test_cannot_restart_after_commit(self, response):
        response.write_head()
        with pytest.raises(StreamStateError):
            response.start(START)

    @pytest.mark.asyncio
    async def test_close_discards_output(self, response, sent):
        closed = []
        response.on("close", lambda: closed.append(True))

        response.write(b"queued")
        response.close()
        response.close()

        assert response.write(b"late") is False
        response.end(b"late")
        await response.flush_pending()

        assert sent == []
        assert closed == [True]
