import os
import sys

import pytest_asyncio

# Never pick up a developer's real Redis settings during tests
for _var in [v for v in os.environ if v.startswith("KVGRAPH_")]:
    del os.environ[_var]

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))


@pytest_asyncio.fixture
async def fake_redis():
    """In-process Redis with decoded string responses."""
    import fakeredis
    import fakeredis.aioredis

    client = fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def backend(fake_redis):
    """RedisBackend wrapping the in-process Redis."""
    from kvgraph.backend.redis_backend import RedisBackend

    backend = RedisBackend(client=fake_redis)
    await backend.initialize()
    yield backend
    await backend.close()


@pytest_asyncio.fixture
async def graph(backend):
    from kvgraph.graph.client import GraphClient

    return GraphClient(backend)
