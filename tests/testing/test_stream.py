"""Tests for subprocess output relay."""

import asyncio

import pytest

from covsweep.testing.stream import relay_lines


def _reader(data: bytes, limit: int = 2**16) -> asyncio.StreamReader:
    reader = asyncio.StreamReader(limit=limit)
    reader.feed_data(data)
    reader.feed_eof()
    return reader


class TestRelayLines:
    @pytest.mark.asyncio
    async def test_relays_lines_in_order(self) -> None:
        # Given
        seen: list[str] = []

        # When
        count = await relay_lines(_reader(b"=== RUN TestA\nok\r\nPASS"), seen.append)

        # Then
        assert seen == ["=== RUN TestA", "ok", "PASS"]
        assert count == 3

    @pytest.mark.asyncio
    async def test_empty_stream(self) -> None:
        seen: list[str] = []

        assert await relay_lines(_reader(b""), seen.append) == 0
        assert seen == []

    @pytest.mark.asyncio
    async def test_undecodable_bytes_replaced(self) -> None:
        seen: list[str] = []

        await relay_lines(_reader(b"bad \xff byte\n"), seen.append)

        assert seen == ["bad � byte"]

    @pytest.mark.asyncio
    async def test_overlong_line_reported_and_relay_continues(self) -> None:
        seen: list[str] = []

        await relay_lines(_reader(b"x" * 100 + b"\nafter\n", limit=16), seen.append)

        assert len(seen) == 2
        assert "omitted" in seen[0]
        assert seen[1] == "after"

    @pytest.mark.asyncio
    async def test_overlong_line_tail_arriving_later_is_dropped(self) -> None:
        # Given
        reader = asyncio.StreamReader(limit=16)
        seen: list[str] = []
        task = asyncio.create_task(relay_lines(reader, seen.append))

        # When
        reader.feed_data(b"x" * 40)
        await asyncio.sleep(0.01)
        reader.feed_data(b"y" * 40 + b" tail\nafter\n")
        reader.feed_eof()

        # Then
        assert await task == 2
        assert "omitted" in seen[0]
        assert seen[1] == "after"

    @pytest.mark.asyncio
    async def test_overlong_last_line_without_newline(self) -> None:
        seen: list[str] = []

        count = await relay_lines(_reader(b"ok\n" + b"z" * 50, limit=16), seen.append)

        assert count == 2
        assert seen[0] == "ok"
        assert "omitted" in seen[1]

    @pytest.mark.asyncio
    async def test_lines_relayed_while_stream_open(self) -> None:
        # Given
        reader = asyncio.StreamReader()
        seen: list[str] = []
        task = asyncio.create_task(relay_lines(reader, seen.append))

        # When
        reader.feed_data(b"first\n")
        await asyncio.sleep(0.01)

        # Then
        assert seen == ["first"]
        reader.feed_eof()
        assert await task == 1
