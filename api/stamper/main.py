import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routers import signing, audit
from .config import CORS_ORIGINS, LOG_LEVEL, SERVER_BASE_URL
from .db import init_db

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Signature Stamping API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Stamping API ready, base URL %s", SERVER_BASE_URL)

app.include_router(signing.router, tags=["signing"])
app.include_router(audit.router, prefix="/api/audit", tags=["audit"])

@app.get("/")
def root():
    return {"ok": True, "service": "signature-stamper"}
