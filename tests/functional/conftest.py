"""Functional test bootstrap.

Provides a small FastAPI app that stands in for the system under test and a
``TestRun`` wired to it with an in-memory reporter. Everything runs
in-process; no sockets are opened.
"""

from __future__ import annotations

from typing import Any, Dict

import anyio
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from tester.config import TesterConfig
from tester.reporter import ListReporter
from tester.run import TestRun

USERS: Dict[int, Dict[str, Any]] = {
    1: {"id": 1, "name": "Ann"},
    2: {"id": 2, "name": "Bo", "roles": ["admin", "dev"]},
}


def create_users_app() -> FastAPI:
    app = FastAPI()
    app.state.calls = 0
    app.state.slow_finished = False

    @app.middleware("http")
    async def count_calls(request: Request, call_next):  # type: ignore[no-untyped-def]
        request.app.state.calls += 1
        return await call_next(request)

    @app.get("/users/{user_id}")
    async def get_user(user_id: int):  # type: ignore[no-untyped-def]
        user = USERS.get(user_id)
        if user is None:
            return JSONResponse({"error": "not found", "id": user_id}, status_code=404)
        return user

    @app.post("/echo")
    async def echo(request: Request):  # type: ignore[no-untyped-def]
        raw = await request.body()
        return {"raw": raw.decode("utf-8"), "tags": request.headers.getlist("x-tag")}

    @app.get("/headers")
    async def headers(request: Request):  # type: ignore[no-untyped-def]
        return {"tags": request.headers.getlist("x-tag"), "auth": request.headers.get("authorization")}

    @app.get("/plain")
    async def plain():  # type: ignore[no-untyped-def]
        return PlainTextResponse("not json")

    @app.get("/items")
    async def items():  # type: ignore[no-untyped-def]
        return [{"sku": "a-1"}, {"sku": "b-2"}]

    @app.get("/slow")
    async def slow():  # type: ignore[no-untyped-def]
        await anyio.sleep(2)
        app.state.slow_finished = True
        return {"done": True}

    @app.get("/boom")
    async def boom():  # type: ignore[no-untyped-def]
        raise RuntimeError("handler exploded")

    return app


@pytest.fixture
def users_app() -> FastAPI:
    return create_users_app()


@pytest.fixture
def reporter() -> ListReporter:
    return ListReporter()


@pytest.fixture
def config() -> TesterConfig:
    return TesterConfig(max_diagnostic_body=64)


@pytest.fixture
def run(users_app: FastAPI, config: TesterConfig, reporter: ListReporter):
    with TestRun(users_app, name="functional", config=config, reporter=reporter) as test_run:
        yield test_run
