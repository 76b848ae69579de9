import os

from .geometry import PlacementPolicy

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./stamper.db")
MINIO_ENDPOINT = os.getenv("MINIO_ENDPOINT", "minio:9000")
MINIO_ACCESS_KEY = os.getenv("MINIO_ACCESS_KEY", "minioadmin")
MINIO_SECRET_KEY = os.getenv("MINIO_SECRET_KEY", "minioadmin")
MINIO_BUCKET = os.getenv("MINIO_BUCKET", "signing")
MINIO_SECURE = os.getenv("MINIO_SECURE", "false").lower() in ("1", "true", "yes")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
WORKER_QUEUE = os.getenv("WORKER_QUEUE", "signing")

PORT = int(os.getenv("PORT", "3001"))
SERVER_BASE_URL = os.getenv("SERVER_BASE_URL", f"http://localhost:{PORT}")
SIGNED_DOCS_PREFIX = os.getenv("SIGNED_DOCS_PREFIX", "signed_docs")
TEMPLATE_PDF_PATH = os.getenv("TEMPLATE_PDF_PATH", "sample_a4.pdf")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PLACEMENT_CLAMP_MIN = float(os.getenv("PLACEMENT_CLAMP_MIN", "0.0"))
PLACEMENT_CLAMP_MAX = float(os.getenv("PLACEMENT_CLAMP_MAX", "1.0"))
PLACEMENT_FALLBACK_X = float(os.getenv("PLACEMENT_FALLBACK_X", "0.15"))
PLACEMENT_FALLBACK_WIDTH = float(os.getenv("PLACEMENT_FALLBACK_WIDTH", "0.20"))
PLACEMENT_FALLBACK_HEIGHT = float(os.getenv("PLACEMENT_FALLBACK_HEIGHT", "0.10"))


def placement_policy() -> PlacementPolicy:
    return PlacementPolicy(
        clamp_min=PLACEMENT_CLAMP_MIN,
        clamp_max=PLACEMENT_CLAMP_MAX,
        fallback_x_ratio=PLACEMENT_FALLBACK_X,
        fallback_width_ratio=PLACEMENT_FALLBACK_WIDTH,
        fallback_height_ratio=PLACEMENT_FALLBACK_HEIGHT,
    )
