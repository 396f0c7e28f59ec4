"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from roster.api import api_router
from roster.config import settings
from roster.middleware.axiom_logging import AxiomLoggingMiddleware
from roster.utils.exceptions import NonUniqueResultError

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
app.add_middleware(AxiomLoggingMiddleware)


@app.exception_handler(NonUniqueResultError)
async def non_unique_result_handler(request: Request, exc: NonUniqueResultError) -> JSONResponse:
    """단건 조회 결과가 여러 건일 때 409를 반환합니다.

    Map NonUniqueResultError from the repository layer to 409 Conflict.
    """
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.detail})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api/v1")
