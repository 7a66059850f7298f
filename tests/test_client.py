"""Tests for HttpClient."""

import os
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import respx

from layerhttp import (
    ConfigError,
    HttpClient,
    HttpContext,
    ProtocolViolationError,
    RequestConfig,
    ResponseData,
    StandardAdapter,
    create_http_client,
)


def make_adapter(**response_fields) -> AsyncMock:
    adapter = AsyncMock()

    async def request(config: RequestConfig) -> ResponseData:
        fields = {"status": 200, "status_text": "OK", **response_fields}
        return ResponseData(config=config, **fields)

    adapter.request.side_effect = request
    return adapter


def sent_config(adapter: AsyncMock) -> RequestConfig:
    return adapter.request.call_args.args[0]


class TestHttpClientVerbs:
    """Tests for the verb helpers."""

    def test_factory_exposes_verbs(self):
        """create_http_client should return a client with all verb helpers."""
        client = create_http_client(make_adapter())
        assert isinstance(client, HttpClient)
        for verb in ("request", "get", "post", "put", "delete", "patch", "head", "options"):
            assert callable(getattr(client, verb))

    @pytest.mark.asyncio
    async def test_defaults_applied(self):
        """Client defaults should be merged into each request."""
        adapter = make_adapter()
        client = HttpClient(
            adapter,
            defaults={
                "base_url": "https://api.example.com",
                "headers": {"Authorization": "Bearer token"},
            },
        )

        await client.get("/users")

        config = sent_config(adapter)
        assert config.base_url == "https://api.example.com"
        assert config.headers == {"Authorization": "Bearer token"}
        assert config.url == "/users"
        assert config.method == "GET"

    @pytest.mark.asyncio
    async def test_request_headers_merge_over_defaults(self):
        """Request headers should be merged key-wise over default headers."""
        adapter = make_adapter()
        client = HttpClient(
            adapter, defaults={"headers": {"Accept": "text/plain", "X-App": "demo"}}
        )

        await client.get("/users", {"headers": {"Accept": "application/json"}})

        assert sent_config(adapter).headers == {"Accept": "application/json", "X-App": "demo"}

    @pytest.mark.asyncio
    async def test_get_with_params(self):
        """GET should forward params and headers and return the response."""
        adapter = make_adapter(data=[{"id": 1, "name": "John"}])
        client = HttpClient(adapter)

        response = await client.get(
            "/users", {"params": {"page": 1}, "headers": {"Accept": "application/json"}}
        )

        config = sent_config(adapter)
        assert config.params == {"page": 1}
        assert config.headers == {"Accept": "application/json"}
        assert response is not None
        assert response.data == [{"id": 1, "name": "John"}]

    @pytest.mark.asyncio
    async def test_post_put_patch_send_body(self):
        """Body verbs should send data with the right method."""
        adapter = make_adapter(status=201)
        client = HttpClient(adapter)
        body = {"name": "John"}

        for verb, method in (("post", "POST"), ("put", "PUT"), ("patch", "PATCH")):
            await getattr(client, verb)("/users/1", body)
            config = sent_config(adapter)
            assert config.method == method
            assert config.data == body
            assert config.headers == {}

    @pytest.mark.asyncio
    async def test_delete(self):
        """DELETE should send no body."""
        adapter = make_adapter(status=204, status_text="No Content")
        response = await HttpClient(adapter).delete("/users/1")

        config = sent_config(adapter)
        assert config.method == "DELETE"
        assert config.data is None
        assert response is not None
        assert response.status == 204

    @pytest.mark.asyncio
    async def test_request_accepts_model(self):
        """request() should accept a RequestConfig instance."""
        adapter = make_adapter()
        client = HttpClient(adapter, defaults={"timeout_ms": 500})

        await client.request(RequestConfig(url="/ping", method="HEAD"))

        config = sent_config(adapter)
        assert config.method == "HEAD"
        assert config.timeout_ms == 500


class TestHttpClientMiddlewares:
    """Tests for middleware integration."""

    @pytest.mark.asyncio
    async def test_global_middleware_sees_context(self):
        """Middlewares should get an HttpContext with the response after next()."""
        seen = {}

        async def inspect(ctx: HttpContext, next_):
            ctx.state["modified"] = True
            seen["before"] = ctx.response
            await next_()
            seen["status"] = ctx.response.status

        client = HttpClient(make_adapter(), middlewares=[inspect])
        await client.get("/test")

        assert seen == {"before": None, "status": 200}

    @pytest.mark.asyncio
    async def test_middleware_can_rewrite_request(self):
        """Request changes made before next() should reach the adapter."""
        adapter = make_adapter()

        async def auth(ctx: HttpContext, next_):
            ctx.request.headers["Authorization"] = "Bearer abc"
            await next_()

        client = HttpClient(adapter)
        client.use(auth)
        await client.get("/me")

        assert sent_config(adapter).headers == {"Authorization": "Bearer abc"}

    @pytest.mark.asyncio
    async def test_middleware_does_not_leak_into_defaults(self):
        """Header changes in one request should not affect the next."""
        adapter = make_adapter()

        async def tag(ctx: HttpContext, next_):
            ctx.request.headers["X-Tag"] = "1"
            await next_()

        client = HttpClient(adapter, defaults={"headers": {"Accept": "*/*"}})
        await client.get("/a", middlewares=[tag])
        await client.get("/b")

        assert sent_config(adapter).headers == {"Accept": "*/*"}

    @pytest.mark.asyncio
    async def test_per_request_middlewares_run_after_global(self):
        """Per-call middlewares should run inside the global ones."""
        log: list[str] = []

        def logged(name):
            async def middleware(ctx, next_):
                log.append(f"{name}-before")
                await next_()
                log.append(f"{name}-after")

            return middleware

        client = HttpClient(make_adapter(), middlewares=[logged("global")])
        await client.post("/items", {"a": 1}, middlewares=[logged("local")])

        assert log == ["global-before", "local-before", "local-after", "global-after"]
        assert len(client.engine.get_middlewares()) == 1

    @pytest.mark.asyncio
    async def test_short_circuit_returns_cached_response(self):
        """A middleware may answer without calling next()."""
        adapter = make_adapter()

        async def cache(ctx: HttpContext, next_):
            ctx.response = ResponseData(data="cached", status=200, config=ctx.request)

        response = await HttpClient(adapter, middlewares=[cache]).get("/cached")

        adapter.request.assert_not_called()
        assert response is not None
        assert response.data == "cached"

    @pytest.mark.asyncio
    async def test_short_circuit_without_response(self):
        """Ending the chain without a response should return None."""
        adapter = make_adapter()

        async def block(ctx: HttpContext, next_):
            return None

        response = await HttpClient(adapter, middlewares=[block]).get("/blocked")

        adapter.request.assert_not_called()
        assert response is None

    @pytest.mark.asyncio
    async def test_protocol_violation_propagates(self):
        """Calling next() twice should fail the request."""
        adapter = make_adapter()

        async def twice(ctx, next_):
            await next_()
            await next_()

        with pytest.raises(ProtocolViolationError):
            await HttpClient(adapter, middlewares=[twice]).get("/x")
        assert adapter.request.await_count == 1


class TestHttpClientErrors:
    """Tests for adapter errors."""

    @pytest.mark.asyncio
    async def test_adapter_error_propagates(self):
        """Adapter errors should reach the caller unchanged."""
        error = ConnectionError("Network error")
        adapter = AsyncMock()
        adapter.request.side_effect = error

        with pytest.raises(ConnectionError) as exc_info:
            await HttpClient(adapter).get("/test")
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_adapter_error_recorded_on_context(self):
        """The adapter error should be stored on ctx.error for middlewares."""
        error = ConnectionError("Network error")
        adapter = AsyncMock()
        adapter.request.side_effect = error
        seen = {}

        async def observe(ctx: HttpContext, next_):
            try:
                await next_()
            finally:
                seen["error"] = ctx.error

        with pytest.raises(ConnectionError):
            await HttpClient(adapter, middlewares=[observe]).get("/test")
        assert seen["error"] is error

    @pytest.mark.asyncio
    async def test_fallback_middleware_recovers(self):
        """A middleware can replace a failed response."""
        adapter = AsyncMock()
        adapter.request.side_effect = ConnectionError("down")

        async def fallback(ctx: HttpContext, next_):
            try:
                await next_()
            except ConnectionError:
                ctx.response = ResponseData(data=None, status=503, config=ctx.request)

        response = await HttpClient(adapter, middlewares=[fallback]).get("/test")
        assert response is not None
        assert response.status == 503


class TestHttpClientDebug:
    """Tests for debug logging."""

    @pytest.mark.asyncio
    async def test_debug_redacts_credentials(self, capsys):
        """Debug output should not contain credential values."""
        client = HttpClient(make_adapter(), debug=True)
        await client.get("/me", {"headers": {"Authorization": "Bearer secret-token"}})

        err = capsys.readouterr().err
        assert "[layerhttp] GET /me" in err
        assert "-> 200" in err
        assert "secret-token" not in err
        assert "[REDACTED]" in err

    @pytest.mark.asyncio
    async def test_no_output_without_debug(self, capsys):
        """Nothing should be printed when debug is off."""
        await HttpClient(make_adapter()).get("/me")
        assert capsys.readouterr().err == ""


class TestHttpClientFromEnv:
    """Tests for HttpClient.from_env()."""

    def test_from_env_defaults(self):
        """Should build a standard adapter client with no defaults."""
        with patch.dict(os.environ, {}, clear=True):
            client = HttpClient.from_env()
        assert isinstance(client._adapter, StandardAdapter)
        assert client._defaults == {}
        assert client._debug is False

    def test_from_env_with_settings(self):
        """Should parse timeout and debug settings."""
        env = {
            "LAYERHTTP_BASE_URL": "https://api.test",
            "LAYERHTTP_TIMEOUT_MS": "3000",
            "LAYERHTTP_DEBUG": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            client = HttpClient.from_env()
        assert client._defaults == {"timeout_ms": 3000}
        assert client._debug is True

    def test_from_env_malformed_timeout_raises(self):
        """Should raise ConfigError for a non-integer timeout."""
        env = {"LAYERHTTP_TIMEOUT_MS": "not_a_number"}
        with patch.dict(os.environ, env, clear=True), pytest.raises(ConfigError):
            HttpClient.from_env()

    @pytest.mark.asyncio
    @respx.mock
    async def test_from_env_end_to_end(self):
        """A from_env client should send through the configured base url."""
        route = respx.get("https://api.test/users").mock(
            return_value=httpx.Response(200, json=[{"id": 1}])
        )
        with patch.dict(os.environ, {"LAYERHTTP_BASE_URL": "https://api.test"}, clear=True):
            client = HttpClient.from_env()

        response = await client.get("/users")

        assert route.called
        assert response is not None
        assert response.data == [{"id": 1}]
