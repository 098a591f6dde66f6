# store_admin/main.py
import os
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db import Base, engine
from . import models  # noqa: F401  (registers tables on Base)
from .deps import add_cors
from .errors import AdminError, InternalError, InvalidShape
from .routers import stores, billboards, categories, products

# ---------------------------------------------------------
# 🚀 Initialization
# ---------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

Base.metadata.create_all(bind=engine)
app = FastAPI(title="Store Admin API", version="1.0.0")
add_cors(app)

for r in (stores, billboards, categories, products):
    app.include_router(r.router, prefix="/api")

# ---------------------------------------------------------
# ❗ Error mapping: every failure stays local to its request
# ---------------------------------------------------------
@app.exception_handler(AdminError)
def admin_error_handler(request: Request, exc: AdminError):
    if exc.status_code >= 500:
        logging.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed JSON and unparseable query/path params surface as InvalidShape
    errors = exc.errors()
    err = errors[0] if errors else {}
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header", "cookie")]
    field = "body" if err.get("type") == "json_invalid" else (".".join(loc) or "body")
    return admin_error_handler(request, InvalidShape(field, err.get("msg", "is invalid")))


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception):
    logging.exception(f"❌ [{request.method} {request.url.path}] {exc}")
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.message})

# ---------------------------------------------------------
# 🩺 Health check
# ---------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 10000))
    uvicorn.run("store_admin.main:app", host="0.0.0.0", port=port, log_level="info")
