import asyncio

from run import wait_until_started


class FakeServer:
    def __init__(self):
        self.started = False


async def test_waits_for_the_server_to_start():
    server = FakeServer()

    async def serve():
        await asyncio.sleep(0.02)
        server.started = True
        await asyncio.sleep(1)

    task = asyncio.create_task(serve())
    try:
        assert await wait_until_started(server, task, poll=0.005) is True
        assert server.started
    finally:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)


async def test_gives_up_when_serving_ends_before_start():
    server = FakeServer()

    async def serve():
        raise OSError("address already in use")

    task = asyncio.create_task(serve())

    assert await wait_until_started(server, task, poll=0.005) is False
    assert isinstance(task.exception(), OSError)
