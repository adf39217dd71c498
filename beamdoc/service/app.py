"""FastAPI application serving decoded and rendered documentation."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..context import DocContext
from ..errors import BeamDocError, ChunkNotFound
from ..info import NodeNotFound
from ..models import DocStatus, DocumentationModel, DocValue
from ..projector import summarize


class HealthResponse(BaseModel):
    status: str


class EntityResponse(BaseModel):
    key: str
    kind: str
    name: str
    arity: int
    signatures: List[str]
    summary: Optional[str] = None
    doc: Optional[str] = None
    status: Optional[str] = None
    hidden: bool = False


class ModuleResponse(BaseModel):
    module: str
    summary: Optional[str] = None
    doc: Optional[str] = None
    status: Optional[str] = None
    entities: List[EntityResponse]


def _split_doc(value: DocValue) -> tuple[Optional[str], Optional[str]]:
    if isinstance(value, DocStatus):
        return None, value.value
    return value, None


def _module_response(model: DocumentationModel, limit: int) -> ModuleResponse:
    doc, status = _split_doc(model.module_doc)
    entities = []
    for entity in model.entities:
        entity_doc, entity_status = _split_doc(entity.doc)
        entities.append(
            EntityResponse(
                key=entity.key,
                kind=entity.kind,
                name=entity.name,
                arity=entity.arity,
                signatures=list(entity.signatures),
                summary=summarize(entity.doc, limit),
                doc=entity_doc,
                status=entity_status,
                hidden=entity.hidden,
            )
        )
    return ModuleResponse(
        module=model.module,
        summary=summarize(model.module_doc, limit),
        doc=doc,
        status=status,
        entities=entities,
    )


def create_app(
    context_factory: Callable[[], DocContext] = DocContext.from_config_path,
) -> FastAPI:
    """Create the FastAPI application exposing documentation lookups."""

    app = FastAPI(title="beamdoc", version="0.1.0")
    # One context per app so the decode cache outlives individual requests.
    shared_context = context_factory()
    app.state.context = shared_context

    async def get_context() -> DocContext:
        return shared_context

    async def _in_executor(func: Callable[[], Any]) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/modules/{module}", response_model=ModuleResponse)
    async def module_docs(
        module: str, context: DocContext = Depends(get_context)
    ) -> ModuleResponse:
        model = await _in_executor(lambda: context.load(module))
        return _module_response(model, context.config.summary_max_length)

    @app.get("/modules/{module}/info", response_class=PlainTextResponse)
    async def module_info(
        module: str, context: DocContext = Depends(get_context)
    ) -> str:
        return await _in_executor(lambda: context.render_unit(module))

    @app.get("/modules/{module}/nodes/{name}/{arity}", response_class=PlainTextResponse)
    async def module_node(
        module: str,
        name: str,
        arity: int,
        context: DocContext = Depends(get_context),
    ) -> str:
        return await _in_executor(lambda: context.render_node(module, f"{name}/{arity}"))

    @app.post("/cache/clear", response_model=HealthResponse)
    async def clear_cache(context: DocContext = Depends(get_context)) -> HealthResponse:
        await _in_executor(context.reset)
        return HealthResponse(status="cleared")

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NodeNotFound)
    async def node_not_found_handler(_: Any, exc: NodeNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.args[0]})

    @app.exception_handler(ChunkNotFound)
    async def chunk_not_found_handler(_: Any, exc: ChunkNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": f"No documentation: {exc}"})

    @app.exception_handler(BeamDocError)
    async def beamdoc_error_handler(_: Any, exc: BeamDocError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    context: DocContext | None = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app((lambda: context) if context is not None else DocContext.from_config_path)
    uvicorn.run(app, host=host, port=port)
