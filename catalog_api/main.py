# catalog_api/main.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .database import db
from .models import OrderUpdate, ProductIn

logger = logging.getLogger(__name__)

app = FastAPI(title="catalog-api (in-memory document store)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

api = APIRouter(prefix="/api")


# ---------------------------
# Error payloads: {"error": "..."}
# ---------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_req: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(req: Request, exc: RequestValidationError):
    fields = sorted({str(e["loc"][-1]) for e in exc.errors() if e.get("loc")})
    logger.info("Rejected %s %s: invalid %s", req.method, req.url.path, ", ".join(fields) or "body")
    message = f"Invalid {', '.join(fields)}" if fields else "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def server_error_handler(req: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", req.method, req.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@api.get("/health")
async def health():
    return {"ok": True, "time": datetime.now(timezone.utc).isoformat()}


# ---------------------------
# Product endpoints
# ---------------------------
@api.get("/products")
async def list_products():
    return db.find("products")


@api.post("/products", status_code=201)
async def create_product(payload: ProductIn):
    created = db.insert("products", payload.model_dump())
    logger.info("Created product %s (%s)", created["id"], created["name"])
    return created


@api.put("/products/{product_id}")
async def update_product(product_id: str, payload: ProductIn):
    updated = db.update("products", product_id, payload.model_dump())
    if updated is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return updated


@api.delete("/products/{product_id}")
async def delete_product(product_id: str):
    if not db.delete("products", product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info("Deleted product %s", product_id)
    return {"ok": True}


# ---------------------------
# Order endpoints
# ---------------------------
@api.put("/orders/{order_id}")
async def update_order(order_id: str, payload: OrderUpdate):
    fields = payload.model_dump(exclude_unset=True, mode="json")
    updated = db.update("orders", order_id, fields)
    if updated is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return updated


@api.delete("/orders/{order_id}")
async def delete_order(order_id: str):
    if not db.delete("orders", order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"ok": True}


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@api.post("/reset")
async def reset_all():
    db.clear()
    return {"status": "reset"}


app.include_router(api)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
