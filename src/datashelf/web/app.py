from __future__ import annotations

from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from datashelf.application.services.bootstrap_service import BootstrapService
from datashelf.application.services.dispatch_service import DispatchResult, DispatchService
from datashelf.core.config import APP_NAME, APP_VERSION, Settings
from datashelf.infrastructure.store.resource_store import ResourceStore
from datashelf.web.cors import CorsPolicy, install_cors


def _to_response(result: DispatchResult) -> Response:
    # Headers are passed explicitly so Starlette keeps Content-Type verbatim
    # and HEAD keeps the stored Content-Length.
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)


def create_app(settings: Settings, cors_policy: CorsPolicy | None = None) -> FastAPI:
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    BootstrapService(settings).init_store()
    store = ResourceStore(settings.data_dir)
    dispatcher = DispatchService(store)
    app.state.settings = settings
    app.state.store = store

    install_cors(app, cors_policy or CorsPolicy())

    prefix = settings.route_prefix
    item_path = f"{prefix}/{{resource_id:path}}"

    async def _dispatch(request: Request) -> Response:
        resource_id = request.path_params.get("resource_id")
        body = b""
        if request.method in {"POST", "PUT"}:
            body = await request.body()
        result = await run_in_threadpool(dispatcher.dispatch, request.method, resource_id, body)
        return _to_response(result)

    if prefix:

        @app.get(prefix)
        @app.head(prefix)
        async def api_list(request: Request) -> Response:
            return await _dispatch(request)

    @app.get(item_path)
    @app.head(item_path)
    async def api_read(request: Request) -> Response:
        return await _dispatch(request)

    @app.post(item_path)
    async def api_create(request: Request) -> Response:
        return await _dispatch(request)

    @app.put(item_path)
    async def api_upsert(request: Request) -> Response:
        return await _dispatch(request)

    @app.delete(item_path)
    async def api_delete(request: Request) -> Response:
        return await _dispatch(request)

    if prefix:
        app.mount("/", StaticFiles(directory=str(settings.data_dir), html=True), name="static")

    return app
