"""Tests for the hello example."""

from wicket.testing import TestClient


class TestHelloApp:
    """Verify every route in the hello example works through the ASGI pipeline."""

    async def test_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/")
            assert reply.status == 200
            assert reply.text == "Hello, World!"

    async def test_greet_with_path_param(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/greet/alice")
            assert reply.status == 200
            assert reply.text == "Hello, alice!"

    async def test_greet_without_name(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/greet")
            assert reply.status == 404

    async def test_json_reply(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/api/status")
            assert reply.status == 200
            assert reply.content_type == "application/json"
            assert '"ok"' in reply.text

    async def test_custom_status_and_header(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/custom")
            assert reply.status == 201
            assert reply.text == "Created"
            assert ("x-custom", "wicket") in reply.headers

    async def test_template(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/page?title=Docs")
            assert "<h1>Docs</h1>" in reply.text

    async def test_redirect(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.get("/home")
            assert reply.status == 301
            assert reply.header("location") == "/"

    async def test_unknown_method(self, example_app) -> None:
        async with TestClient(example_app) as client:
            reply = await client.request("OPTIONS", "/")
            assert reply.status == 405
