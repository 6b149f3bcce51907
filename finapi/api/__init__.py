"""
FinAPI Application Factory
"""

import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
import uvicorn

from .accounts import router as accounts_router
from .statement import router as statement_router
from .transactions import router as transactions_router
from .simulate import router as simulate_router
from .. import __version__
from ..accounts import AccountStore
from ..config import FinAPIConfig, get_config
from ..exceptions import FinAPIError
from ..logging_config import get_logger, log_action, setup_logging


logger = get_logger("finapi.api")


PLAYGROUND_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>FinAPI</title>
    <style>
      body { font-family: Arial, sans-serif; margin: 40px; background: #f7f7f7; }
      code { background: #eee; padding: 2px 4px; border-radius: 4px; }
      ul { line-height: 1.6; }
      .tag { background: #222; color: #fff; padding: 2px 6px; border-radius: 4px; font-size: 12px; }
    </style>
  </head>
  <body>
    <h1>FinAPI</h1>
    <p>In-memory bank account API. Main endpoints:</p>
    <ul>
      <li><span class="tag">POST</span> <code>/account</code> create account ({ cpf, name })</li>
      <li><span class="tag">GET</span> <code>/account</code> account data (header cpf)</li>
      <li><span class="tag">PUT</span> <code>/account</code> update name ({ name })</li>
      <li><span class="tag">DELETE</span> <code>/account</code> delete account</li>
      <li><span class="tag">GET</span> <code>/statement</code> statement (header cpf)</li>
      <li><span class="tag">GET</span> <code>/statement/date?date=YYYY-MM-DD</code> statement for one day</li>
      <li><span class="tag">POST</span> <code>/deposit</code> deposit ({ description, amount })</li>
      <li><span class="tag">POST</span> <code>/withdraw</code> withdraw ({ amount })</li>
      <li><span class="tag">GET</span> <code>/balance</code> balance</li>
      <li><span class="tag">POST</span> <code>/simulate</code> seed sample transactions ({ cpf, name?, reset? })</li>
      <li><span class="tag">GET</span> <code>/health</code> health check</li>
    </ul>
    <p>Quick example with <code>curl</code>:</p>
    <pre>curl -X POST http://localhost:3333/account -H "Content-Type: application/json" -d '{"cpf":"11122233344","name":"Maria"}'</pre>
  </body>
</html>"""


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(store: Optional[AccountStore] = None,
               settings: Optional[FinAPIConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = settings or get_config()
    setup_logging(settings.log_level, "finapi", settings.log_format)

    app = FastAPI(
        title="FinAPI",
        description="In-memory bank account API keyed by CPF",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.store = store if store is not None else AccountStore()
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(FinAPIError)
    async def handle_finapi_error(request: Request, exc: FinAPIError):
        log_action(
            logger, "warning", f"Request rejected: {exc.message}",
            action=f"{request.method} {request.url.path}",
            resource=type(exc).__name__
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        log_action(
            logger, "warning", f"Invalid request: {message}",
            action=f"{request.method} {request.url.path}",
            resource="RequestValidationError"
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    # Include routers
    app.include_router(accounts_router, prefix="/account", tags=["Accounts"])
    app.include_router(statement_router, tags=["Statement"])
    app.include_router(transactions_router, tags=["Transactions"])
    app.include_router(simulate_router, prefix="/simulate", tags=["Simulation"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "uptime": time.monotonic() - app.state.started_at,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.get("/", response_class=HTMLResponse)
    async def playground():
        """Browser page listing the endpoints"""
        return PLAYGROUND_HTML

    return app


app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the FastAPI server"""
    settings = get_config()
    uvicorn.run(
        "finapi.api:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=debug,
        log_level=settings.log_level.lower()
    )
