"""Observability API routes."""

from io import StringIO

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from ...exporters import ThreadModel, spans_to_speedscope, threads_to_models
from ...exporters.text import dump_text_to_writer
from ...profiler import IProfiler


def _render_report(profiler: IProfiler) -> str:
    buf = StringIO()
    dump_text_to_writer(buf, profiler.threads())
    return buf.getvalue()


def create_observability_router(profiler: IProfiler) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/threads", response_model=list[ThreadModel])
    def get_threads() -> list[ThreadModel]:
        """Get the serving thread followed by every retired thread."""
        try:
            return threads_to_models(profiler.threads())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/report", response_class=PlainTextResponse)
    def get_report() -> str:
        """Get the indented text report."""
        try:
            return _render_report(profiler)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/speedscope")
    def get_speedscope(
        thread_id: int | None = Query(None, description="Export a single thread"),
    ) -> Response:
        """Get a speedscope document for one thread or for all of them."""
        try:
            threads = profiler.threads()
            if thread_id is not None:
                threads = [t for t in threads if t.id == thread_id]
                if not threads:
                    raise HTTPException(
                        status_code=404, detail=f"Unknown thread {thread_id}"
                    )

            spans = [span for thread in threads for span in thread.spans]
            document = spans_to_speedscope(spans, exporter="flamespan")
            return Response(content=document.to_json(), media_type="application/json")

        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
